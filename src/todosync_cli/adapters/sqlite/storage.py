"""Bundle of SQLite repositories sharing one database file."""

from __future__ import annotations

from pathlib import Path

from todosync_cli.adapters.sqlite.label_repository import SqliteLabelRepository
from todosync_cli.adapters.sqlite.project_repository import SqliteProjectRepository
from todosync_cli.adapters.sqlite.section_repository import SqliteSectionRepository
from todosync_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from todosync_cli.adapters.sqlite.user_repository import SqliteUserRepository
from todosync_cli.repositories import (
    LabelRepository,
    ProjectRepository,
    SectionRepository,
    TaskRepository,
    UserRepository,
)


class SqliteStorage:
    """Local SQLite storage.

    All repositories are instantiated once and point at the same database.
    """

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = db_path
        self._task_repo = SqliteTaskRepository(db_path=db_path)
        self._project_repo = SqliteProjectRepository(db_path=db_path)
        self._section_repo = SqliteSectionRepository(db_path=db_path)
        self._label_repo = SqliteLabelRepository(db_path=db_path)
        self._user_repo = SqliteUserRepository(db_path=db_path)

    @property
    def task_repository(self) -> TaskRepository:
        return self._task_repo

    @property
    def project_repository(self) -> ProjectRepository:
        return self._project_repo

    @property
    def section_repository(self) -> SectionRepository:
        return self._section_repo

    @property
    def label_repository(self) -> LabelRepository:
        return self._label_repo

    @property
    def user_repository(self) -> UserRepository:
        return self._user_repo
