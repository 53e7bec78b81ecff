"""Project service - Business logic for project operations."""

from __future__ import annotations

from datetime import UTC, datetime

from todosync_cli.exceptions import ValidationError
from todosync_cli.models import Project, ProjectCreate, ProjectUpdate
from todosync_cli.services.todoist.sync_adapter import TodoistSyncAdapter


class ProjectService:
    """Service for project business logic.

    This service encapsulates business rules and orchestrates project operations
    using the project repository.
    """

    def __init__(self, storage, sync_adapter: TodoistSyncAdapter):
        """Initialize the project service.

        Args:
            storage: Storage exposing the project repository
            sync_adapter: Mirrors mutations of linked projects to Todoist
        """
        self.repository = storage.project_repository
        self.sync = sync_adapter

    async def list_projects(self, user_id: str) -> list[Project]:
        """List the user's projects ordered by position."""
        return await self.repository.list_all(user_id)

    async def get_project(self, user_id: str, project_id: str) -> Project:
        """Get a project owned by *user_id*; NotFoundError otherwise."""
        return await self.repository.get(user_id, project_id)

    async def create_project(
        self,
        user_id: str,
        project_data: ProjectCreate,
        *,
        sync_to_todoist: bool = False,
    ) -> Project:
        """Create a new project after the user's last one.

        Args:
            user_id: Owning user
            project_data: Name, color and the other project fields
            sync_to_todoist: Create the project in Todoist too

        Returns:
            Created Project object
        """
        parent = None
        if project_data.parent_id:
            parent = await self.repository.get(user_id, project_data.parent_id)

        todoist_id = None
        synced_at = None
        if sync_to_todoist:
            result = await self.sync.push_project_create(
                user_id,
                project_data,
                parent_todoist_id=parent.todoist_id if parent else None,
            )
            if result.ok:
                todoist_id = result.value.id
                synced_at = datetime.now(UTC)

        return await self.repository.create(
            user_id, project_data, todoist_id=todoist_id, synced_at=synced_at
        )

    async def update_project(
        self, user_id: str, project_id: str, updates: ProjectUpdate
    ) -> Project:
        """Update a project; a linked project is mirrored to Todoist.

        Raises:
            NotFoundError: If the project or the new parent is not the user's
            ValidationError: If the project would become its own ancestor
        """
        project = await self.repository.get(user_id, project_id)

        if updates.parent_id:
            await self._check_parent(user_id, project_id, updates.parent_id)

        result = await self.sync.push_project_update(user_id, project, updates)
        synced_at = datetime.now(UTC) if result.ok else None

        return await self.repository.update(
            user_id, project_id, updates, synced_at=synced_at
        )

    async def delete_project(self, user_id: str, project_id: str) -> bool:
        """Delete a project; its sections go with it and its tasks are kept."""
        project = await self.repository.get(user_id, project_id)
        await self.sync.push_project_delete(user_id, project)
        return await self.repository.delete(user_id, project_id)

    async def _check_parent(self, user_id: str, project_id: str, parent_id: str) -> None:
        ancestor: Project | None = await self.repository.get(user_id, parent_id)
        while ancestor is not None:
            if ancestor.id == project_id:
                raise ValidationError("A project cannot be nested inside itself")
            ancestor = (
                await self.repository.get(user_id, ancestor.parent_id)
                if ancestor.parent_id
                else None
            )


def get_project_service() -> ProjectService:
    """Factory function to get a ProjectService instance."""
    from todosync_cli.services.storage import get_client_factory, get_storage

    storage = get_storage()
    adapter = TodoistSyncAdapter(storage.user_repository, get_client_factory())
    return ProjectService(storage, adapter)
