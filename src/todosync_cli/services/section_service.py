"""Section service – business logic for project section operations."""

from __future__ import annotations

from datetime import UTC, datetime

from todosync_cli.models import Section, SectionCreate, SectionUpdate
from todosync_cli.services.todoist.sync_adapter import TodoistSyncAdapter


class SectionService:
    """Service for section business logic.

    Ownership is checked through the parent project; a section can only be
    created in Todoist when its project is linked.
    """

    def __init__(self, storage, sync_adapter: TodoistSyncAdapter):
        """Initialize the section service.

        Args:
            storage: Storage exposing section and project repositories
            sync_adapter: Mirrors mutations of linked sections to Todoist
        """
        self.repository = storage.section_repository
        self.projects = storage.project_repository
        self.sync = sync_adapter

    async def list_sections(self, user_id: str, project_id: str) -> list[Section]:
        """List all sections for a project.

        Raises:
            NotFoundError: If the project is not the user's
        """
        await self.projects.get(user_id, project_id)
        return await self.repository.list_by_project(user_id, project_id)

    async def get_section(self, user_id: str, section_id: str) -> Section:
        return await self.repository.get(user_id, section_id)

    async def create_section(
        self,
        user_id: str,
        section_data: SectionCreate,
        *,
        sync_to_todoist: bool = False,
    ) -> Section:
        """Create a new section within a project.

        Args:
            user_id: Owner of the parent project
            section_data: Name, project and optional position
            sync_to_todoist: Create the section in Todoist when the project is
                linked

        Returns:
            Created Section object
        """
        project = await self.projects.get(user_id, section_data.project_id)

        todoist_id = None
        synced_at = None
        if sync_to_todoist and project.todoist_id:
            result = await self.sync.push_section_create(
                user_id, section_data, project.todoist_id
            )
            if result.ok:
                todoist_id = result.value.id
                synced_at = datetime.now(UTC)

        return await self.repository.create(
            user_id, section_data, todoist_id=todoist_id, synced_at=synced_at
        )

    async def update_section(
        self, user_id: str, section_id: str, updates: SectionUpdate
    ) -> Section:
        """Update a section; name and order of a linked section go to Todoist."""
        section = await self.repository.get(user_id, section_id)

        result = await self.sync.push_section_update(user_id, section, updates)
        synced_at = datetime.now(UTC) if result.ok else None

        return await self.repository.update(
            user_id, section_id, updates, synced_at=synced_at
        )

    async def delete_section(self, user_id: str, section_id: str) -> bool:
        """Delete a section; its tasks stay in the project."""
        section = await self.repository.get(user_id, section_id)
        await self.sync.push_section_delete(user_id, section)
        return await self.repository.delete(user_id, section_id)


def get_section_service() -> SectionService:
    """Factory function to get a SectionService instance."""
    from todosync_cli.services.storage import get_client_factory, get_storage

    storage = get_storage()
    adapter = TodoistSyncAdapter(storage.user_repository, get_client_factory())
    return SectionService(storage, adapter)
