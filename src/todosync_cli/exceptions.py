"""Custom exceptions for todosync.

Every error carries the semantic exit code the CLI reports for it.
"""

from __future__ import annotations

from todosync_cli.utils.exit_codes import (
    ERROR_AUTH_FAILURE,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
)


class TodoSyncError(Exception):
    """Base exception for all todosync errors."""

    exit_code: int = ERROR_GENERAL


class ConfigurationError(TodoSyncError):
    """Raised when a required setting (e.g. the Todoist token) is missing."""

    exit_code = ERROR_AUTH_FAILURE


class NotFoundError(TodoSyncError):
    """Raised when an entity does not exist or is not owned by the caller."""

    exit_code = ERROR_NOT_FOUND


class ValidationError(TodoSyncError, ValueError):
    """Raised for malformed input before any local or remote call is made."""

    exit_code = ERROR_INVALID_ARGS


class RemoteCallError(TodoSyncError):
    """Raised when a single Todoist API call fails.

    Attributes:
        status_code: HTTP status, or None for transport failures
        reason: Textual reason reported by the server or transport
    """

    exit_code = ERROR_NETWORK

    def __init__(self, reason: str, status_code: int | None = None):
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            message = f"Todoist API error: {reason}"
        else:
            message = f"Todoist API error ({status_code}): {reason}"
        super().__init__(message)


class InternalError(TodoSyncError):
    """Raised when a whole-collection sync aborts part way through."""

    exit_code = ERROR_NETWORK
