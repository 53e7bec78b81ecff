"""Task service - Business logic for task operations.

This service layer sits between commands and repositories. Local writes are
authoritative; linked tasks are mirrored to Todoist on a best-effort basis
through :class:`TodoistSyncAdapter`.
"""

from __future__ import annotations

from datetime import UTC, datetime

from todosync_cli.exceptions import ValidationError
from todosync_cli.models import (
    EnergyLevel,
    Project,
    Section,
    Task,
    TaskCreate,
    TaskFilters,
    TaskType,
    TaskUpdate,
)
from todosync_cli.services.todoist.sync_adapter import TodoistSyncAdapter


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task, project and section repositories.
    """

    def __init__(self, storage, sync_adapter: TodoistSyncAdapter):
        """Initialize the task service.

        Args:
            storage: Storage exposing task, project and section repositories
            sync_adapter: Mirrors mutations of linked tasks to Todoist
        """
        self.repository = storage.task_repository
        self.projects = storage.project_repository
        self.sections = storage.section_repository
        self.sync = sync_adapter

    async def list_tasks(
        self,
        user_id: str,
        *,
        status: str | None = None,
        project_id: str | None = None,
        section_id: str | None = None,
        task_type: TaskType | None = None,
        context: str | None = None,
        search: str | None = None,
    ) -> list[Task]:
        """List the user's tasks.

        Args:
            user_id: Owning user
            status: Filter by status ("active", "completed", "all")
            project_id: Filter by project ID
            section_id: Filter by section ID
            task_type: Filter by GTD bucket
            context: Filter by GTD context
            search: Substring search over title and description

        Returns:
            List of Task objects matching the criteria
        """
        filters = TaskFilters(
            status=status,
            project_id=project_id,
            section_id=section_id,
            task_type=task_type,
            context=context,
            search=search,
        )
        return await self.repository.list_all(user_id, filters)

    async def get_task(self, user_id: str, task_id: str) -> Task:
        """Get a task owned by *user_id*; NotFoundError otherwise."""
        return await self.repository.get(user_id, task_id)

    async def create_task(
        self, user_id: str, task_data: TaskCreate, *, sync_to_todoist: bool = False
    ) -> Task:
        """Create a task, optionally creating it in Todoist first.

        When the Todoist call fails, or the user is not connected, the task is
        still created locally, unlinked and with no sync timestamp.
        """
        project, section = await self._resolve_placement(
            user_id, task_data.project_id, task_data.section_id
        )
        task_data = task_data.model_copy(
            update={
                "project_id": project.id if project else None,
                "section_id": section.id if section else None,
            }
        )

        todoist_id = None
        synced_at = None
        if sync_to_todoist:
            result = await self.sync.push_task_create(
                user_id,
                task_data,
                project_todoist_id=project.todoist_id if project else None,
                section_todoist_id=section.todoist_id if section else None,
            )
            if result.ok:
                todoist_id = result.value.id
                synced_at = datetime.now(UTC)

        return await self.repository.create(
            user_id, task_data, todoist_id=todoist_id, synced_at=synced_at
        )

    async def update_task(self, user_id: str, task_id: str, updates: TaskUpdate) -> Task:
        """Update a task; a linked task's changes are mirrored to Todoist.

        The sync timestamp is refreshed only when the mirror succeeded.
        """
        task = await self.repository.get(user_id, task_id)

        fields = updates.model_fields_set
        if "project_id" in fields or "section_id" in fields:
            if "project_id" in fields:
                project_id = updates.project_id
            elif updates.section_id:
                # the new section decides the project
                project_id = None
            else:
                project_id = task.project_id

            if "section_id" in fields:
                section_id = updates.section_id
            elif project_id != task.project_id:
                section_id = None
            else:
                section_id = task.section_id
            project, section = await self._resolve_placement(
                user_id, project_id, section_id
            )
            updates = updates.model_copy(
                update={
                    "project_id": project.id if project else None,
                    "section_id": section.id if section else None,
                }
            )

        result = await self.sync.push_task_update(user_id, task, updates)
        synced_at = datetime.now(UTC) if result.ok else None

        return await self.repository.update(
            user_id, task_id, updates, synced_at=synced_at
        )

    async def complete_task(self, user_id: str, task_id: str) -> Task:
        return await self.update_task(user_id, task_id, TaskUpdate(is_completed=True))

    async def reopen_task(self, user_id: str, task_id: str) -> Task:
        return await self.update_task(user_id, task_id, TaskUpdate(is_completed=False))

    async def delete_task(self, user_id: str, task_id: str) -> bool:
        """Delete a task, deleting it in Todoist first when linked."""
        task = await self.repository.get(user_id, task_id)
        await self.sync.push_task_delete(user_id, task)
        return await self.repository.delete(user_id, task_id)

    # ------------------------------------------------------------------
    # GTD views
    # ------------------------------------------------------------------

    async def get_inbox(self, user_id: str) -> list[Task]:
        """Active tasks that have not been processed yet."""
        return await self.repository.list_all(
            user_id, TaskFilters(status="active", task_type=TaskType.INBOX)
        )

    async def get_next_actions(
        self,
        user_id: str,
        *,
        context: str | None = None,
        energy_level: EnergyLevel | None = None,
        max_minutes: int | None = None,
    ) -> list[Task]:
        """Active next actions, optionally narrowed to what fits right now.

        Args:
            context: Only tasks in this context (e.g. "@home")
            energy_level: Only tasks needing this energy level
            max_minutes: Only tasks estimated to take at most this long
        """
        filters = TaskFilters(
            status="active",
            task_type=TaskType.NEXT_ACTION,
            context=context,
            energy_level=energy_level,
            max_time_estimate=max_minutes,
        )
        return await self.repository.list_all(user_id, filters)

    async def get_waiting_for(self, user_id: str) -> list[Task]:
        return await self.repository.list_all(
            user_id, TaskFilters(status="active", task_type=TaskType.WAITING)
        )

    async def get_someday_maybe(self, user_id: str) -> list[Task]:
        return await self.repository.list_all(
            user_id, TaskFilters(status="active", task_type=TaskType.SOMEDAY)
        )

    async def process_inbox_item(
        self,
        user_id: str,
        task_id: str,
        task_type: TaskType,
        *,
        context: str | None = None,
        energy_level: EnergyLevel | None = None,
        time_estimate: int | None = None,
        waiting_for: str | None = None,
        project_id: str | None = None,
        notes: str | None = None,
    ) -> Task:
        """Move an inbox task into its GTD bucket.

        Processing notes are appended to the description.

        Raises:
            ValidationError: If the task is not in the inbox, the target is the
                inbox, or a waiting task names nobody to wait for
        """
        task = await self.repository.get(user_id, task_id)
        if task.task_type != TaskType.INBOX:
            raise ValidationError(f"Task {task_id} is not in the inbox")
        if task_type == TaskType.INBOX:
            raise ValidationError("Choose a bucket other than the inbox")
        if task_type == TaskType.WAITING and not waiting_for:
            raise ValidationError("A waiting task needs someone to wait for")

        changes: dict = {"task_type": task_type}
        if context is not None:
            changes["context"] = context
        if energy_level is not None:
            changes["energy_level"] = energy_level
        if time_estimate is not None:
            changes["time_estimate"] = time_estimate
        if waiting_for is not None:
            changes["waiting_for"] = waiting_for
        if project_id is not None:
            changes["project_id"] = project_id
        if notes:
            changes["description"] = (
                f"{task.description}\n\n{notes}" if task.description else notes
            )

        return await self.update_task(user_id, task_id, TaskUpdate(**changes))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _resolve_placement(
        self, user_id: str, project_id: str | None, section_id: str | None
    ) -> tuple[Project | None, Section | None]:
        """Check that the project and section belong to *user_id* and to each other.

        A section alone implies its project.
        """
        section = None
        if section_id:
            section = await self.sections.get(user_id, section_id)
            if project_id is None:
                project_id = section.project_id
            elif section.project_id != project_id:
                raise ValidationError(
                    f"Section {section_id} does not belong to project {project_id}"
                )

        project = await self.projects.get(user_id, project_id) if project_id else None
        return project, section


def get_task_service() -> TaskService:
    """Factory function to get a TaskService instance."""
    from todosync_cli.services.storage import get_client_factory, get_storage

    storage = get_storage()
    adapter = TodoistSyncAdapter(storage.user_repository, get_client_factory())
    return TaskService(storage, adapter)
