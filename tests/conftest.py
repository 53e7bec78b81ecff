"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import asyncio
import logging

import pytest
import pytest_asyncio

from todosync_cli.adapters.sqlite import SqliteStorage
from todosync_cli.adapters.sqlite.connection import DatabaseConnection
from todosync_cli.exceptions import RemoteCallError
from todosync_cli.services.todoist.models import (
    TodoistDue,
    TodoistLabel,
    TodoistProject,
    TodoistProjectCreate,
    TodoistProjectUpdate,
    TodoistSection,
    TodoistSectionCreate,
    TodoistSectionUpdate,
    TodoistTask,
    TodoistTaskCreate,
    TodoistTaskUpdate,
)


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_environment(tmp_path, monkeypatch):
    """Point config, data and log dirs at *tmp_path* and reset singletons."""
    import todosync_cli.config as config_mod
    import todosync_cli.utils.logger as logger_mod
    from todosync_cli.services.storage import get_storage

    monkeypatch.setattr(
        "todosync_cli.config.user_config_dir", lambda *a, **k: str(tmp_path / "config")
    )
    monkeypatch.setattr(
        "todosync_cli.utils.logger.user_log_dir", lambda *a, **k: str(tmp_path / "logs")
    )
    monkeypatch.setattr(
        "todosync_cli.adapters.sqlite.connection.user_data_dir",
        lambda *a, **k: str(tmp_path / "data"),
    )
    monkeypatch.delenv("TODOSYNC_PROFILE", raising=False)
    monkeypatch.delenv("TODOIST_API_KEY", raising=False)

    app_logger = logging.getLogger("todosync_cli")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    monkeypatch.setattr(logger_mod, "_logger", None)
    monkeypatch.setattr(config_mod, "_config_manager", None)
    get_storage.cache_clear()

    yield

    DatabaseConnection.close_connection()
    get_storage.cache_clear()
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


# ---------------------------------------------------------------------------
# Storage and users
# ---------------------------------------------------------------------------


@pytest.fixture
def storage(tmp_path):
    """SqliteStorage backed by a fresh database file."""
    return SqliteStorage(db_path=tmp_path / "test.db")


@pytest_asyncio.fixture
async def user_id(storage):
    user = await storage.user_repository.create("ada@example.com", "Ada")
    return user.id


@pytest_asyncio.fixture
async def other_user_id(storage):
    user = await storage.user_repository.create("grace@example.com", "Grace")
    return user.id


@pytest_asyncio.fixture
async def connected_user_id(storage, user_id):
    """The default user, with a Todoist token stored."""
    await storage.user_repository.set_todoist_token(user_id, "token-123")
    return user_id


# ---------------------------------------------------------------------------
# Todoist fake
# ---------------------------------------------------------------------------


class FakeTodoistClient:
    """In-memory Todoist account satisfying TodoistClientProtocol.

    Every call is recorded in ``calls`` as ``(method, *args)``. Set ``fail``
    to make every call raise, or add method names to ``fail_on``.
    """

    def __init__(self):
        self.projects: dict[str, TodoistProject] = {}
        self.sections: dict[str, TodoistSection] = {}
        self.tasks: dict[str, TodoistTask] = {}
        self.calls: list[tuple] = []
        self.fail = False
        self.fail_on: set[str] = set()
        self._next_id = 1000

    def add_project(self, **fields) -> TodoistProject:
        project = TodoistProject(**fields)
        self.projects[project.id] = project
        return project

    def add_section(self, **fields) -> TodoistSection:
        section = TodoistSection(**fields)
        self.sections[section.id] = section
        return section

    def add_task(self, **fields) -> TodoistTask:
        task = TodoistTask(**fields)
        self.tasks[task.id] = task
        return task

    def called(self, method: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == method]

    async def _record(self, method: str, *args) -> None:
        await asyncio.sleep(0)
        self.calls.append((method, *args))
        if self.fail or method in self.fail_on:
            raise RemoteCallError("Internal Server Error", 500)

    def _new_id(self) -> str:
        self._next_id += 1
        return str(self._next_id)

    @staticmethod
    def _lookup(store: dict, item_id: str):
        if item_id not in store:
            raise RemoteCallError("Not Found", 404)
        return store[item_id]

    # Tasks

    async def get_tasks(self) -> list[TodoistTask]:
        await self._record("get_tasks")
        return list(self.tasks.values())

    async def get_task(self, task_id: str) -> TodoistTask:
        await self._record("get_task", task_id)
        return self._lookup(self.tasks, task_id)

    async def create_task(self, task: TodoistTaskCreate) -> TodoistTask:
        await self._record("create_task", task)
        created = TodoistTask(
            id=self._new_id(),
            content=task.content,
            description=task.description or "",
            project_id=task.project_id,
            section_id=task.section_id,
            priority=task.priority or 1,
            due=TodoistDue(date=task.due_date) if task.due_date else None,
            labels=task.labels or [],
        )
        self.tasks[created.id] = created
        return created

    async def update_task(self, task_id: str, task: TodoistTaskUpdate) -> TodoistTask:
        await self._record("update_task", task_id, task)
        current = self._lookup(self.tasks, task_id)
        changes = task.model_dump(exclude_none=True)
        if "due_string" in changes:
            changes.pop("due_string")
            changes["due"] = None
        if "due_date" in changes:
            changes["due"] = TodoistDue(date=changes.pop("due_date"))
        updated = current.model_copy(update=changes)
        self.tasks[task_id] = updated
        return updated

    async def delete_task(self, task_id: str) -> None:
        await self._record("delete_task", task_id)
        self._lookup(self.tasks, task_id)
        del self.tasks[task_id]

    async def close_task(self, task_id: str) -> None:
        await self._record("close_task", task_id)
        current = self._lookup(self.tasks, task_id)
        self.tasks[task_id] = current.model_copy(update={"is_completed": True})

    async def reopen_task(self, task_id: str) -> None:
        await self._record("reopen_task", task_id)
        current = self._lookup(self.tasks, task_id)
        self.tasks[task_id] = current.model_copy(update={"is_completed": False})

    # Projects

    async def get_projects(self) -> list[TodoistProject]:
        await self._record("get_projects")
        return list(self.projects.values())

    async def get_project(self, project_id: str) -> TodoistProject:
        await self._record("get_project", project_id)
        return self._lookup(self.projects, project_id)

    async def create_project(self, project: TodoistProjectCreate) -> TodoistProject:
        await self._record("create_project", project)
        created = TodoistProject(
            id=self._new_id(), **project.model_dump(exclude_none=True)
        )
        self.projects[created.id] = created
        return created

    async def update_project(
        self, project_id: str, project: TodoistProjectUpdate
    ) -> TodoistProject:
        await self._record("update_project", project_id, project)
        current = self._lookup(self.projects, project_id)
        updated = current.model_copy(update=project.model_dump(exclude_none=True))
        self.projects[project_id] = updated
        return updated

    async def delete_project(self, project_id: str) -> None:
        await self._record("delete_project", project_id)
        self._lookup(self.projects, project_id)
        del self.projects[project_id]

    # Sections

    async def get_sections(self, project_id: str | None = None) -> list[TodoistSection]:
        await self._record("get_sections", project_id)
        return [
            s
            for s in self.sections.values()
            if project_id is None or s.project_id == project_id
        ]

    async def get_section(self, section_id: str) -> TodoistSection:
        await self._record("get_section", section_id)
        return self._lookup(self.sections, section_id)

    async def create_section(self, section: TodoistSectionCreate) -> TodoistSection:
        await self._record("create_section", section)
        created = TodoistSection(
            id=self._new_id(), **section.model_dump(exclude_none=True)
        )
        self.sections[created.id] = created
        return created

    async def update_section(
        self, section_id: str, section: TodoistSectionUpdate
    ) -> TodoistSection:
        await self._record("update_section", section_id, section)
        current = self._lookup(self.sections, section_id)
        updated = current.model_copy(update=section.model_dump(exclude_none=True))
        self.sections[section_id] = updated
        return updated

    async def delete_section(self, section_id: str) -> None:
        await self._record("delete_section", section_id)
        self._lookup(self.sections, section_id)
        del self.sections[section_id]

    # Labels

    async def get_labels(self) -> list[TodoistLabel]:
        await self._record("get_labels")
        names = sorted({name for task in self.tasks.values() for name in task.labels})
        return [TodoistLabel(id=name, name=name) for name in names]

    async def get_label(self, label_id: str) -> TodoistLabel:
        await self._record("get_label", label_id)
        return TodoistLabel(id=label_id, name=label_id)


@pytest.fixture
def fake_todoist():
    return FakeTodoistClient()


@pytest.fixture
def client_factory(fake_todoist):
    """Stands in for create_todoist_client: the fake for any non-blank token."""

    def factory(token):
        if not token or not token.strip():
            return None
        return fake_todoist

    return factory
