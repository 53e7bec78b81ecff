"""TodoistReconciliationService: pull the whole Todoist account into the local store.

Execution order: projects, then sections, then tasks. Sections and tasks
reference projects by Todoist id, so each pass relies on the links written by
the previous one. Local rows are never deleted here.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TypeVar

from todosync_cli.exceptions import ConfigurationError, InternalError
from todosync_cli.models import (
    ProjectCreate,
    ProjectUpdate,
    SectionCreate,
    SectionUpdate,
    SyncAllResult,
    SyncCounts,
    TaskCreate,
    TaskUpdate,
)
from todosync_cli.utils.logger import get_logger

from .client import TodoistClientProtocol, create_todoist_client
from .models import TodoistProject, TodoistTask
from .priority import to_local

logger = get_logger(__name__)

ClientFactory = Callable[[str | None], TodoistClientProtocol | None]
R = TypeVar("R")


class TodoistReconciliationService:
    """Reconciles a user's Todoist account against local rows.

    Args:
        storage: Storage exposing the project, section, task, label and user
            repositories.
        client_factory: Builds a client from a token; returns None when the
            token is missing.
    """

    def __init__(self, storage, client_factory: ClientFactory = create_todoist_client):
        self._storage = storage
        self._client_factory = client_factory
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        return self._locks.setdefault(user_id, asyncio.Lock())

    async def sync_all(self, user_id: str) -> SyncAllResult:
        """Run the three reconciliation passes for *user_id*.

        Concurrent calls for the same user run one after the other.

        Raises:
            ConfigurationError: If the user has no Todoist token
            InternalError: If any remote call or local write fails part way;
                rows written before the failure stay written
        """

        async def passes(client: TodoistClientProtocol) -> SyncAllResult:
            return SyncAllResult(
                projects=await self._sync_projects(client, user_id),
                sections=await self._sync_sections(client, user_id),
                tasks=await self._sync_tasks(client, user_id),
            )

        result = await self._run(user_id, passes)

        logger.info(
            "sync for user %s done: projects %d/%d, sections %d/%d, tasks %d/%d "
            "(imported/updated)",
            user_id,
            result.projects.imported,
            result.projects.updated,
            result.sections.imported,
            result.sections.updated,
            result.tasks.imported,
            result.tasks.updated,
        )
        return result

    async def sync_projects(self, user_id: str) -> SyncCounts:
        """Run only the projects pass, including parent linking.

        Same preconditions and failure handling as :meth:`sync_all`.
        """
        counts = await self._run(
            user_id, lambda client: self._sync_projects(client, user_id)
        )
        logger.info("project sync for user %s done: %s", user_id, counts)
        return counts

    async def sync_tasks(self, user_id: str) -> SyncCounts:
        """Run only the tasks pass against the projects and sections linked so far.

        Tasks whose project or section is not linked yet are imported as
        orphans. Same preconditions and failure handling as :meth:`sync_all`.
        """
        counts = await self._run(user_id, lambda client: self._sync_tasks(client, user_id))
        logger.info("task sync for user %s done: %s", user_id, counts)
        return counts

    async def _run(
        self,
        user_id: str,
        passes: Callable[[TodoistClientProtocol], Awaitable[R]],
    ) -> R:
        """Check the token, then run *passes* under the user's sync lock."""
        token = await self._storage.user_repository.get_todoist_token(user_id)
        client = self._client_factory(token)
        if client is None:
            raise ConfigurationError(
                "Todoist is not connected. Run 'todosync todoist connect' first."
            )

        async with self._lock_for(user_id):
            try:
                return await passes(client)
            except Exception as e:
                logger.error("sync for user %s aborted: %s", user_id, e)
                raise InternalError(f"Todoist sync failed: {e}") from e

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    async def _sync_projects(
        self, client: TodoistClientProtocol, user_id: str
    ) -> SyncCounts:
        counts = SyncCounts()
        repo = self._storage.project_repository
        remote_projects = await client.get_projects()
        now = datetime.now(UTC)

        for remote in remote_projects:
            existing = await repo.find_by_todoist_id(user_id, remote.id)
            if existing:
                await repo.update(
                    user_id,
                    existing.id,
                    ProjectUpdate(
                        name=remote.name,
                        color=remote.color,
                        is_favorite=remote.is_favorite,
                        is_inbox_project=remote.is_inbox_project,
                        view_style=remote.view_style,
                        order=remote.order,
                    ),
                    synced_at=now,
                )
                counts.updated += 1
            else:
                await repo.create(
                    user_id,
                    ProjectCreate(
                        name=remote.name,
                        color=remote.color,
                        is_favorite=remote.is_favorite,
                        is_inbox_project=remote.is_inbox_project,
                        view_style=remote.view_style,
                        order=remote.order,
                    ),
                    todoist_id=remote.id,
                    synced_at=now,
                )
                counts.imported += 1

        await self._link_project_parents(user_id, remote_projects)
        logger.debug("projects pass: %s", counts)
        return counts

    async def _link_project_parents(
        self, user_id: str, remote_projects: list[TodoistProject]
    ) -> None:
        """Mirror the remote hierarchy onto linked local projects.

        A project that is top-level in Todoist loses its local parent.
        """
        repo = self._storage.project_repository
        for remote in remote_projects:
            child = await repo.find_by_todoist_id(user_id, remote.id)
            if not remote.parent_id:
                if child and child.parent_id is not None:
                    await repo.update(user_id, child.id, ProjectUpdate(parent_id=None))
                continue
            parent = await repo.find_by_todoist_id(user_id, remote.parent_id)
            if child and parent and child.parent_id != parent.id:
                await repo.update(user_id, child.id, ProjectUpdate(parent_id=parent.id))

    async def _sync_sections(
        self, client: TodoistClientProtocol, user_id: str
    ) -> SyncCounts:
        counts = SyncCounts()
        project_repo = self._storage.project_repository
        section_repo = self._storage.section_repository
        remote_sections = await client.get_sections()
        now = datetime.now(UTC)

        for remote in remote_sections:
            project = await project_repo.find_by_todoist_id(user_id, remote.project_id)
            if project is None:
                logger.debug(
                    "skipping section %s: project %s not linked",
                    remote.id,
                    remote.project_id,
                )
                continue

            existing = await section_repo.find_by_todoist_id(user_id, remote.id)
            if existing:
                await section_repo.update(
                    user_id,
                    existing.id,
                    SectionUpdate(
                        name=remote.name, order=remote.order, project_id=project.id
                    ),
                    synced_at=now,
                )
                counts.updated += 1
            else:
                await section_repo.create(
                    user_id,
                    SectionCreate(
                        name=remote.name, project_id=project.id, order=remote.order
                    ),
                    todoist_id=remote.id,
                    synced_at=now,
                )
                counts.imported += 1

        logger.debug("sections pass: %s", counts)
        return counts

    async def _sync_tasks(
        self, client: TodoistClientProtocol, user_id: str
    ) -> SyncCounts:
        counts = SyncCounts()
        task_repo = self._storage.task_repository
        label_repo = self._storage.label_repository
        remote_tasks = await client.get_tasks()
        linked = {
            task.todoist_id: task for task in await task_repo.list_linked(user_id)
        }
        now = datetime.now(UTC)

        for remote in remote_tasks:
            project_id, section_id = await self._resolve_placement(user_id, remote)
            fields = {
                "title": remote.content,
                "description": remote.description or None,
                "is_completed": remote.is_completed,
                "priority": to_local(remote.priority),
                "due_date": self._parse_due_date(remote),
                "project_id": project_id,
                "section_id": section_id,
                "order": remote.order,
            }

            local = linked.get(remote.id)
            if local:
                await task_repo.update(
                    user_id, local.id, TaskUpdate(**fields), synced_at=now
                )
                await label_repo.replace_task_labels(local.id, remote.labels)
                counts.updated += 1
            else:
                created = await task_repo.create(
                    user_id,
                    TaskCreate(**fields, labels=remote.labels),
                    todoist_id=remote.id,
                    synced_at=now,
                )
                linked[remote.id] = created
                counts.imported += 1

        logger.debug("tasks pass: %s", counts)
        return counts

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _resolve_placement(
        self, user_id: str, remote: TodoistTask
    ) -> tuple[str | None, str | None]:
        """Map a task's Todoist project/section to local ids.

        Unresolved references become None; the task is imported as an orphan.
        """
        project_id = None
        if remote.project_id:
            project = await self._storage.project_repository.find_by_todoist_id(
                user_id, remote.project_id
            )
            project_id = project.id if project else None

        if project_id is None or not remote.section_id:
            return project_id, None

        section = await self._storage.section_repository.find_by_todoist_id(
            user_id, remote.section_id
        )
        if section is None or section.project_id != project_id:
            return project_id, None
        return project_id, section.id

    @staticmethod
    def _parse_due_date(task: TodoistTask) -> datetime | None:
        """Convert Todoist due date string to an aware datetime, or None."""
        if not task.due or not task.due.date:
            return None
        raw = task.due.date
        for fmt in ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"):
            try:
                dt = datetime.strptime(raw, fmt)
                return dt.replace(tzinfo=UTC)
            except ValueError:
                continue
        return None


def get_reconciliation_service() -> TodoistReconciliationService:
    """Factory function to get a TodoistReconciliationService instance."""
    from todosync_cli.services.storage import get_client_factory, get_storage

    return TodoistReconciliationService(get_storage(), get_client_factory())
