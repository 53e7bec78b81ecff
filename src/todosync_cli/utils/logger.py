"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "todosync_cli"
_LOG_FILE = "todosync.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the singleton application logger, initialising it on first call.

    With *name*, returns a child of the application logger without touching
    the file handler; records reach the log file once the application logger
    has been initialised (the CLI does so before running any command).
    """
    if name is not None:
        if name != _APP_NAME and not name.startswith(f"{_APP_NAME}."):
            name = f"{_APP_NAME}.{name}"
        return logging.getLogger(name)

    global _logger
    if _logger is not None:
        return _logger

    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / _LOG_FILE

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not _has_file_handler(logger, log_file):
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def _has_file_handler(logger: logging.Logger, log_file: Path) -> bool:
    # The logger may already carry handlers that are not ours
    target = os.path.abspath(log_file)
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def set_log_level(level: str) -> None:
    """Apply a level name such as "INFO" to the application logger."""
    get_logger().setLevel(level.upper())
