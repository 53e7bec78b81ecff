"""Tests for the SQLite project and section repositories."""

from __future__ import annotations

import pytest

from todosync_cli.exceptions import NotFoundError, ValidationError
from todosync_cli.models import ProjectCreate, ProjectUpdate, SectionCreate, SectionUpdate


class TestProjectRepository:
    @pytest.mark.asyncio
    async def test_create_and_get(self, storage, user_id):
        repo = storage.project_repository
        project = await repo.create(
            user_id, ProjectCreate(name="Work", color="red", view_style="board")
        )

        fetched = await repo.get(user_id, project.id)
        assert fetched.name == "Work"
        assert fetched.color == "red"
        assert fetched.view_style == "board"
        assert fetched.todoist_id is None

    @pytest.mark.asyncio
    async def test_list_is_scoped_and_ordered(self, storage, user_id, other_user_id):
        repo = storage.project_repository
        await repo.create(user_id, ProjectCreate(name="B", order=2))
        await repo.create(user_id, ProjectCreate(name="A", order=1))
        await repo.create(other_user_id, ProjectCreate(name="Theirs"))

        assert [p.name for p in await repo.list_all(user_id)] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_duplicate_todoist_link(self, storage, user_id):
        repo = storage.project_repository
        await repo.create(user_id, ProjectCreate(name="A"), todoist_id="P1")

        with pytest.raises(ValidationError):
            await repo.create(user_id, ProjectCreate(name="B"), todoist_id="P1")

    @pytest.mark.asyncio
    async def test_update_and_clear_parent(self, storage, user_id):
        repo = storage.project_repository
        parent = await repo.create(user_id, ProjectCreate(name="Parent"))
        child = await repo.create(user_id, ProjectCreate(name="Child", parent_id=parent.id))

        detached = await repo.update(user_id, child.id, ProjectUpdate(parent_id=None))

        assert detached.parent_id is None
        assert detached.name == "Child"

    @pytest.mark.asyncio
    async def test_deleting_parent_detaches_children(self, storage, user_id):
        repo = storage.project_repository
        parent = await repo.create(user_id, ProjectCreate(name="Parent"))
        child = await repo.create(user_id, ProjectCreate(name="Child", parent_id=parent.id))

        await repo.delete(user_id, parent.id)

        assert (await repo.get(user_id, child.id)).parent_id is None

    @pytest.mark.asyncio
    async def test_other_users_project(self, storage, user_id, other_user_id):
        repo = storage.project_repository
        project = await repo.create(user_id, ProjectCreate(name="Mine"))

        with pytest.raises(NotFoundError):
            await repo.get(other_user_id, project.id)
        assert await repo.delete(other_user_id, project.id) is False


class TestSectionRepository:
    @pytest.mark.asyncio
    async def test_order_is_per_project(self, storage, user_id):
        projects = storage.project_repository
        sections = storage.section_repository
        work = await projects.create(user_id, ProjectCreate(name="Work"))
        home = await projects.create(user_id, ProjectCreate(name="Home"))

        first = await sections.create(user_id, SectionCreate(name="A", project_id=work.id))
        second = await sections.create(user_id, SectionCreate(name="B", project_id=work.id))
        other = await sections.create(user_id, SectionCreate(name="C", project_id=home.id))

        assert (first.order, second.order, other.order) == (1, 2, 1)

    @pytest.mark.asyncio
    async def test_duplicate_section_link_in_project_rejected(self, storage, user_id):
        work = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))
        sections = storage.section_repository
        await sections.create(
            user_id, SectionCreate(name="Todo", project_id=work.id), todoist_id="S1"
        )

        with pytest.raises(ValidationError):
            await sections.create(
                user_id, SectionCreate(name="Again", project_id=work.id), todoist_id="S1"
            )
        assert [s.name for s in await sections.list_by_project(user_id, work.id)] == ["Todo"]

    @pytest.mark.asyncio
    async def test_unlinked_sections_share_no_constraint(self, storage, user_id):
        work = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))
        sections = storage.section_repository
        await sections.create(user_id, SectionCreate(name="A", project_id=work.id))
        await sections.create(user_id, SectionCreate(name="B", project_id=work.id))

        assert len(await sections.list_by_project(user_id, work.id)) == 2

    @pytest.mark.asyncio
    async def test_same_section_link_for_two_users(self, storage, user_id, other_user_id):
        mine = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))
        theirs = await storage.project_repository.create(
            other_user_id, ProjectCreate(name="Work")
        )

        await storage.section_repository.create(
            user_id, SectionCreate(name="Todo", project_id=mine.id), todoist_id="S1"
        )
        await storage.section_repository.create(
            other_user_id, SectionCreate(name="Todo", project_id=theirs.id), todoist_id="S1"
        )

        assert await storage.section_repository.find_by_todoist_id(other_user_id, "S1")

    @pytest.mark.asyncio
    async def test_moving_onto_a_duplicate_link_rejected(self, storage, user_id):
        work = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))
        home = await storage.project_repository.create(user_id, ProjectCreate(name="Home"))
        sections = storage.section_repository
        await sections.create(
            user_id, SectionCreate(name="Todo", project_id=work.id), todoist_id="S1"
        )
        stray = await sections.create(
            user_id, SectionCreate(name="Todo", project_id=home.id), todoist_id="S1"
        )

        with pytest.raises(ValidationError):
            await sections.update(user_id, stray.id, SectionUpdate(project_id=work.id))
        assert (await sections.get(user_id, stray.id)).project_id == home.id

    @pytest.mark.asyncio
    async def test_sections_owned_through_project(self, storage, user_id, other_user_id):
        work = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))
        section = await storage.section_repository.create(
            user_id, SectionCreate(name="Todo", project_id=work.id), todoist_id="S1"
        )

        repo = storage.section_repository
        with pytest.raises(NotFoundError):
            await repo.get(other_user_id, section.id)
        assert await repo.find_by_todoist_id(other_user_id, "S1") is None
        assert await repo.list_linked(other_user_id) == []
        assert await repo.delete(other_user_id, section.id) is False
        assert [s.id for s in await repo.list_linked(user_id)] == [section.id]

    @pytest.mark.asyncio
    async def test_create_in_foreign_project(self, storage, user_id, other_user_id):
        theirs = await storage.project_repository.create(
            other_user_id, ProjectCreate(name="Theirs")
        )

        with pytest.raises(NotFoundError):
            await storage.section_repository.create(
                user_id, SectionCreate(name="Intruder", project_id=theirs.id)
            )

    @pytest.mark.asyncio
    async def test_move_to_foreign_project(self, storage, user_id, other_user_id):
        mine = await storage.project_repository.create(user_id, ProjectCreate(name="Mine"))
        theirs = await storage.project_repository.create(
            other_user_id, ProjectCreate(name="Theirs")
        )
        section = await storage.section_repository.create(
            user_id, SectionCreate(name="Todo", project_id=mine.id)
        )

        with pytest.raises(NotFoundError):
            await storage.section_repository.update(
                user_id, section.id, SectionUpdate(project_id=theirs.id)
            )

    @pytest.mark.asyncio
    async def test_rename(self, storage, user_id):
        work = await storage.project_repository.create(user_id, ProjectCreate(name="Work"))
        section = await storage.section_repository.create(
            user_id, SectionCreate(name="Todo", project_id=work.id, order=4)
        )

        renamed = await storage.section_repository.update(
            user_id, section.id, SectionUpdate(name="Doing")
        )

        assert renamed.name == "Doing"
        assert renamed.order == 4
