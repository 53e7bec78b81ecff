"""Tests for ProjectService."""

from __future__ import annotations

import pytest

from todosync_cli.exceptions import NotFoundError, ValidationError
from todosync_cli.models import (
    ProjectCreate,
    ProjectUpdate,
    SectionCreate,
    TaskCreate,
)
from todosync_cli.services.project_service import ProjectService
from todosync_cli.services.todoist.sync_adapter import TodoistSyncAdapter


@pytest.fixture
def project_service(storage, client_factory):
    adapter = TodoistSyncAdapter(storage.user_repository, client_factory)
    return ProjectService(storage, adapter)


class TestCreateProject:
    @pytest.mark.asyncio
    async def test_appends_after_last_project(self, project_service, user_id):
        first = await project_service.create_project(user_id, ProjectCreate(name="Work"))
        second = await project_service.create_project(user_id, ProjectCreate(name="Home"))

        assert second.order == first.order + 1
        names = [p.name for p in await project_service.list_projects(user_id)]
        assert names == ["Work", "Home"]

    @pytest.mark.asyncio
    async def test_sync_creates_under_linked_parent(
        self, project_service, storage, connected_user_id, fake_todoist
    ):
        parent = await storage.project_repository.create(
            connected_user_id, ProjectCreate(name="Work"), todoist_id="P1"
        )

        child = await project_service.create_project(
            connected_user_id,
            ProjectCreate(name="Reports", parent_id=parent.id),
            sync_to_todoist=True,
        )

        assert child.parent_id == parent.id
        assert child.synced_at is not None
        assert fake_todoist.projects[child.todoist_id].parent_id == "P1"

    @pytest.mark.asyncio
    async def test_sync_failure_keeps_local_project(
        self, project_service, connected_user_id, fake_todoist
    ):
        fake_todoist.fail = True

        project = await project_service.create_project(
            connected_user_id, ProjectCreate(name="Work"), sync_to_todoist=True
        )

        assert project.todoist_id is None
        assert project.synced_at is None

    @pytest.mark.asyncio
    async def test_unknown_parent_is_not_found(self, project_service, user_id):
        with pytest.raises(NotFoundError):
            await project_service.create_project(
                user_id, ProjectCreate(name="Child", parent_id="missing")
            )


class TestUpdateProject:
    @pytest.mark.asyncio
    async def test_linked_rename_is_mirrored(
        self, project_service, connected_user_id, fake_todoist
    ):
        project = await project_service.create_project(
            connected_user_id, ProjectCreate(name="Work"), sync_to_todoist=True
        )

        updated = await project_service.update_project(
            connected_user_id, project.id, ProjectUpdate(name="Office", is_favorite=True)
        )

        assert updated.name == "Office"
        assert updated.is_favorite is True
        remote = fake_todoist.projects[project.todoist_id]
        assert remote.name == "Office"
        assert remote.is_favorite is True

    @pytest.mark.asyncio
    async def test_cannot_nest_inside_itself(self, project_service, user_id):
        project = await project_service.create_project(user_id, ProjectCreate(name="Work"))

        with pytest.raises(ValidationError):
            await project_service.update_project(
                user_id, project.id, ProjectUpdate(parent_id=project.id)
            )

    @pytest.mark.asyncio
    async def test_cannot_nest_inside_descendant(self, project_service, user_id):
        root = await project_service.create_project(user_id, ProjectCreate(name="Root"))
        child = await project_service.create_project(
            user_id, ProjectCreate(name="Child", parent_id=root.id)
        )
        grandchild = await project_service.create_project(
            user_id, ProjectCreate(name="Grandchild", parent_id=child.id)
        )

        with pytest.raises(ValidationError):
            await project_service.update_project(
                user_id, root.id, ProjectUpdate(parent_id=grandchild.id)
            )

    @pytest.mark.asyncio
    async def test_other_users_project_is_not_found(
        self, project_service, user_id, other_user_id
    ):
        project = await project_service.create_project(user_id, ProjectCreate(name="Mine"))

        with pytest.raises(NotFoundError):
            await project_service.update_project(
                other_user_id, project.id, ProjectUpdate(name="Stolen")
            )
        with pytest.raises(NotFoundError):
            await project_service.delete_project(other_user_id, project.id)


class TestDeleteProject:
    @pytest.mark.asyncio
    async def test_sections_removed_tasks_kept(
        self, project_service, storage, user_id
    ):
        project = await project_service.create_project(user_id, ProjectCreate(name="Work"))
        section = await storage.section_repository.create(
            user_id, SectionCreate(name="Todo", project_id=project.id)
        )
        task = await storage.task_repository.create(
            user_id,
            TaskCreate(title="Survivor", project_id=project.id, section_id=section.id),
        )

        assert await project_service.delete_project(user_id, project.id)

        kept = await storage.task_repository.get(user_id, task.id)
        assert kept.project_id is None
        assert kept.section_id is None
        with pytest.raises(NotFoundError):
            await storage.section_repository.get(user_id, section.id)

    @pytest.mark.asyncio
    async def test_linked_project_deleted_remotely(
        self, project_service, connected_user_id, fake_todoist
    ):
        project = await project_service.create_project(
            connected_user_id, ProjectCreate(name="Work"), sync_to_todoist=True
        )

        await project_service.delete_project(connected_user_id, project.id)

        assert project.todoist_id not in fake_todoist.projects
