"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError as PydanticValidationError

from todosync_cli.config import get_config_manager
from todosync_cli.exceptions import ConfigurationError, TodoSyncError
from todosync_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    get_exit_code_name,
)
from todosync_cli.utils.logger import get_logger
from todosync_cli.utils.ui.formatters import format_error


def get_current_user_id() -> str:
    """Return the user selected with ``todosync users use``."""
    user_id = get_config_manager().get("current_user_id")
    if not user_id:
        raise ConfigurationError(
            "No user selected. Create one with 'todosync users add <email>'."
        )
    return user_id


def _describe_validation_error(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


def command_wrapper(func: Callable):
    """Run a (possibly async) command, mapping errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except TodoSyncError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) %s - %s",
                cmd,
                elapsed,
                get_exit_code_name(e.exit_code),
                str(e),
            )
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except PydanticValidationError as e:
            elapsed = time.monotonic() - start
            message = _describe_validation_error(e)
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, message)
            format_error(f"Invalid input: {message}")
            raise typer.Exit(code=ERROR_INVALID_ARGS) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
