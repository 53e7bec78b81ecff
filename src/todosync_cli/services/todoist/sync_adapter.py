"""Mirror single local mutations to Todoist.

Local writes always win: every remote call goes through :func:`attempt`, the
one place where a failed Todoist call is caught. It is logged and returned as
a failed :class:`RemoteResult`; callers then complete the local write anyway.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from todosync_cli.exceptions import RemoteCallError
from todosync_cli.models import (
    Project,
    ProjectCreate,
    ProjectUpdate,
    Section,
    SectionCreate,
    SectionUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
)
from todosync_cli.utils.logger import get_logger

from .client import TodoistClientProtocol, create_todoist_client
from .models import (
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
from .priority import to_remote

logger = get_logger(__name__)

T = TypeVar("T")

# Todoist clears a due date when sent this due string
CLEAR_DUE_STRING = "no date"


@dataclass
class RemoteResult(Generic[T]):
    """Outcome of at most one Todoist call.

    Attributes:
        value: Response of a successful call
        error: The failure, when the call was made and failed
        attempted: False when no call was made (no token, nothing to push)
    """

    value: T | None = None
    error: RemoteCallError | None = None
    attempted: bool = False

    @property
    def ok(self) -> bool:
        return self.attempted and self.error is None


async def attempt(operation: str, call: Callable[[], Awaitable[T]]) -> RemoteResult[T]:
    """Await *call* once, turning a RemoteCallError into a failed result."""
    try:
        value = await call()
    except RemoteCallError as e:
        logger.warning("Todoist %s failed, keeping local change: %s", operation, e)
        return RemoteResult(error=e, attempted=True)
    return RemoteResult(value=value, attempted=True)


def _calendar_date(value: datetime | None) -> str | None:
    return value.date().isoformat() if value else None


class TodoistSyncAdapter:
    """Translates local task/project/section mutations into Todoist calls.

    Args:
        user_repository: Source of each user's Todoist token.
        client_factory: Builds a client from a token, or returns None.
    """

    def __init__(self, user_repository, client_factory=create_todoist_client):
        self._users = user_repository
        self._client_factory = client_factory

    async def client_for(self, user_id: str) -> TodoistClientProtocol | None:
        """Return a client for *user_id*, or None when not connected."""
        token = await self._users.get_todoist_token(user_id)
        return self._client_factory(token)

    # Tasks

    async def push_task_create(
        self,
        user_id: str,
        task: TaskCreate,
        *,
        project_todoist_id: str | None = None,
        section_todoist_id: str | None = None,
    ) -> RemoteResult[TodoistTask]:
        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()

        payload = TodoistTaskCreate(
            content=task.title,
            description=task.description,
            priority=to_remote(task.priority),
            due_date=_calendar_date(task.due_date),
            labels=task.labels or None,
            project_id=project_todoist_id,
            section_id=section_todoist_id,
        )
        return await attempt("task create", lambda: client.create_task(payload))

    async def push_task_update(
        self, user_id: str, task: Task, updates: TaskUpdate
    ) -> RemoteResult[None]:
        """Mirror the fields of *updates* that differ from *task*.

        A completion change is sent as close/reopen; every other change is
        merged into one update call. Returns an unattempted result when the
        task is not linked or nothing relevant changed.
        """
        if not task.todoist_id:
            return RemoteResult()

        changes = updates.model_dump(exclude_unset=True)
        payload: dict = {}

        if "title" in changes and changes["title"] != task.title:
            payload["content"] = changes["title"]
        if "description" in changes and changes["description"] != task.description:
            payload["description"] = changes["description"] or ""
        if "priority" in changes and changes["priority"] != task.priority:
            payload["priority"] = to_remote(changes["priority"])
        if "due_date" in changes:
            new_due = _calendar_date(changes["due_date"])
            if new_due != _calendar_date(task.due_date):
                if new_due is None:
                    payload["due_string"] = CLEAR_DUE_STRING
                else:
                    payload["due_date"] = new_due
        if changes.get("labels") is not None and sorted(changes["labels"]) != sorted(
            task.labels
        ):
            payload["labels"] = list(dict.fromkeys(changes["labels"]))

        completion = changes.get("is_completed")
        completion_changed = completion is not None and completion != task.is_completed

        if not payload and not completion_changed:
            return RemoteResult()

        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()

        todoist_id = task.todoist_id
        if payload:
            body = TodoistTaskUpdate(**payload)
            result = await attempt(
                "task update", lambda: client.update_task(todoist_id, body)
            )
            if not result.ok:
                return RemoteResult(error=result.error, attempted=True)

        if completion_changed:
            if completion:
                return await attempt(
                    "task close", lambda: client.close_task(todoist_id)
                )
            return await attempt("task reopen", lambda: client.reopen_task(todoist_id))

        return RemoteResult(attempted=True)

    async def push_task_delete(self, user_id: str, task: Task) -> RemoteResult[None]:
        if not task.todoist_id:
            return RemoteResult()
        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()
        todoist_id = task.todoist_id
        return await attempt("task delete", lambda: client.delete_task(todoist_id))

    # Projects

    async def push_project_create(
        self,
        user_id: str,
        project: ProjectCreate,
        *,
        parent_todoist_id: str | None = None,
    ) -> RemoteResult[TodoistProject]:
        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()

        payload = TodoistProjectCreate(
            name=project.name,
            parent_id=parent_todoist_id,
            order=project.order,
            color=project.color,
            is_favorite=project.is_favorite,
            view_style=project.view_style,
        )
        return await attempt("project create", lambda: client.create_project(payload))

    async def push_project_update(
        self, user_id: str, project: Project, updates: ProjectUpdate
    ) -> RemoteResult[TodoistProject]:
        if not project.todoist_id:
            return RemoteResult()

        changes = updates.model_dump(
            exclude_unset=True,
            include={"name", "order", "color", "is_favorite", "view_style"},
        )
        payload = {
            key: value
            for key, value in changes.items()
            if value is not None and value != getattr(project, key)
        }
        if not payload:
            return RemoteResult()

        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()

        todoist_id = project.todoist_id
        body = TodoistProjectUpdate(**payload)
        return await attempt(
            "project update", lambda: client.update_project(todoist_id, body)
        )

    async def push_project_delete(
        self, user_id: str, project: Project
    ) -> RemoteResult[None]:
        if not project.todoist_id:
            return RemoteResult()
        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()
        todoist_id = project.todoist_id
        return await attempt("project delete", lambda: client.delete_project(todoist_id))

    # Sections

    async def push_section_create(
        self, user_id: str, section: SectionCreate, project_todoist_id: str
    ) -> RemoteResult[TodoistSection]:
        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()

        payload = TodoistSectionCreate(
            name=section.name, project_id=project_todoist_id, order=section.order
        )
        return await attempt("section create", lambda: client.create_section(payload))

    async def push_section_update(
        self, user_id: str, section: Section, updates: SectionUpdate
    ) -> RemoteResult[TodoistSection]:
        if not section.todoist_id:
            return RemoteResult()

        changes = updates.model_dump(exclude_unset=True, include={"name", "order"})
        payload = {
            key: value
            for key, value in changes.items()
            if value is not None and value != getattr(section, key)
        }
        if not payload:
            return RemoteResult()

        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()

        todoist_id = section.todoist_id
        body = TodoistSectionUpdate(**payload)
        return await attempt(
            "section update", lambda: client.update_section(todoist_id, body)
        )

    async def push_section_delete(
        self, user_id: str, section: Section
    ) -> RemoteResult[None]:
        if not section.todoist_id:
            return RemoteResult()
        client = await self.client_for(user_id)
        if client is None:
            return RemoteResult()
        todoist_id = section.todoist_id
        return await attempt("section delete", lambda: client.delete_section(todoist_id))
