"""SQLite adapter module - Local database storage implementation."""

from todosync_cli.adapters.sqlite.label_repository import SqliteLabelRepository
from todosync_cli.adapters.sqlite.project_repository import SqliteProjectRepository
from todosync_cli.adapters.sqlite.section_repository import SqliteSectionRepository
from todosync_cli.adapters.sqlite.storage import SqliteStorage
from todosync_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from todosync_cli.adapters.sqlite.user_repository import SqliteUserRepository

__all__ = [
    "SqliteTaskRepository",
    "SqliteProjectRepository",
    "SqliteSectionRepository",
    "SqliteLabelRepository",
    "SqliteUserRepository",
    "SqliteStorage",
]
