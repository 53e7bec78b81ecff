"""Adapters module - Repository implementations for storage backends.

- sqlite: Local SQLite database storage
"""

from .sqlite import (
    SqliteLabelRepository,
    SqliteProjectRepository,
    SqliteSectionRepository,
    SqliteStorage,
    SqliteTaskRepository,
    SqliteUserRepository,
)

__all__ = [
    "SqliteTaskRepository",
    "SqliteProjectRepository",
    "SqliteSectionRepository",
    "SqliteLabelRepository",
    "SqliteUserRepository",
    "SqliteStorage",
]
