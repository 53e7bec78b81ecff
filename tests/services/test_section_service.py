"""Tests for SectionService."""

from __future__ import annotations

import pytest

from todosync_cli.exceptions import NotFoundError
from todosync_cli.models import ProjectCreate, SectionCreate, SectionUpdate, TaskCreate
from todosync_cli.services.section_service import SectionService
from todosync_cli.services.todoist.sync_adapter import TodoistSyncAdapter


@pytest.fixture
def section_service(storage, client_factory):
    adapter = TodoistSyncAdapter(storage.user_repository, client_factory)
    return SectionService(storage, adapter)


@pytest.mark.asyncio
async def test_list_sections_in_order(section_service, storage, user_id):
    project = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))
    await section_service.create_section(
        user_id, SectionCreate(name="Later", project_id=project.id, order=5)
    )
    await section_service.create_section(
        user_id, SectionCreate(name="Now", project_id=project.id, order=1)
    )

    sections = await section_service.list_sections(user_id, project.id)

    assert [s.name for s in sections] == ["Now", "Later"]


@pytest.mark.asyncio
async def test_list_sections_of_other_users_project(
    section_service, storage, user_id, other_user_id
):
    project = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))

    with pytest.raises(NotFoundError):
        await section_service.list_sections(other_user_id, project.id)


@pytest.mark.asyncio
async def test_create_in_other_users_project(
    section_service, storage, user_id, other_user_id
):
    project = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))

    with pytest.raises(NotFoundError):
        await section_service.create_section(
            other_user_id, SectionCreate(name="Mine now", project_id=project.id)
        )


@pytest.mark.asyncio
async def test_sync_skipped_for_unlinked_project(
    section_service, storage, connected_user_id, fake_todoist
):
    project = await storage.project_repository.create(
        connected_user_id, ProjectCreate(name="Local")
    )

    section = await section_service.create_section(
        connected_user_id,
        SectionCreate(name="Todo", project_id=project.id),
        sync_to_todoist=True,
    )

    assert section.todoist_id is None
    assert fake_todoist.calls == []


@pytest.mark.asyncio
async def test_sync_creates_in_linked_project(
    section_service, storage, connected_user_id, fake_todoist
):
    project = await storage.project_repository.create(
        connected_user_id, ProjectCreate(name="Work"), todoist_id="P1"
    )

    section = await section_service.create_section(
        connected_user_id,
        SectionCreate(name="Todo", project_id=project.id),
        sync_to_todoist=True,
    )

    assert section.synced_at is not None
    assert fake_todoist.sections[section.todoist_id].project_id == "P1"


@pytest.mark.asyncio
async def test_rename_linked_section(
    section_service, storage, connected_user_id, fake_todoist
):
    project = await storage.project_repository.create(
        connected_user_id, ProjectCreate(name="Work"), todoist_id="P1"
    )
    section = await section_service.create_section(
        connected_user_id,
        SectionCreate(name="Todo", project_id=project.id),
        sync_to_todoist=True,
    )

    renamed = await section_service.update_section(
        connected_user_id, section.id, SectionUpdate(name="Doing")
    )

    assert renamed.name == "Doing"
    assert fake_todoist.sections[section.todoist_id].name == "Doing"


@pytest.mark.asyncio
async def test_delete_keeps_tasks_in_project(section_service, storage, user_id):
    project = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))
    section = await section_service.create_section(
        user_id, SectionCreate(name="Todo", project_id=project.id)
    )
    task = await storage.task_repository.create(
        user_id, TaskCreate(title="Stay", project_id=project.id, section_id=section.id)
    )

    assert await section_service.delete_section(user_id, section.id)

    kept = await storage.task_repository.get(user_id, task.id)
    assert kept.project_id == project.id
    assert kept.section_id is None
