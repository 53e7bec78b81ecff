"""Tests for the projects and sections command groups."""

from __future__ import annotations

from contextlib import ExitStack
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from todosync_cli.commands import projects, sections
from todosync_cli.exceptions import ValidationError
from todosync_cli.models import Project, Section

runner = CliRunner()

USER_ID = "user-1"
NOW = datetime(2026, 1, 1, tzinfo=UTC)

WORK = Project(
    id="aaaa1111-0000-4000-8000-000000000001",
    name="Work",
    user_id=USER_ID,
    order=1,
    created_at=NOW,
    updated_at=NOW,
)
HOME = Project(
    id="bbbb2222-0000-4000-8000-000000000002",
    name="Home",
    user_id=USER_ID,
    order=2,
    created_at=NOW,
    updated_at=NOW,
)
TODO = Section(
    id="cccc3333-0000-4000-8000-000000000003",
    name="Todo",
    project_id=WORK.id,
    created_at=NOW,
    updated_at=NOW,
)


@pytest.fixture
def project_service():
    service = MagicMock()
    service.list_projects = AsyncMock(return_value=[WORK, HOME])
    service.create_project = AsyncMock(return_value=WORK)
    service.update_project = AsyncMock(return_value=WORK)
    service.delete_project = AsyncMock(return_value=True)
    return service


@pytest.fixture
def section_service():
    service = MagicMock()
    service.list_sections = AsyncMock(return_value=[TODO])
    service.create_section = AsyncMock(return_value=TODO)
    service.update_section = AsyncMock(return_value=TODO)
    service.delete_section = AsyncMock(return_value=True)
    return service


def _invoke(module, args, project_service, section_service=None):
    name = module.__name__
    with ExitStack() as stack:
        stack.enter_context(
            patch(f"{name}.get_project_service", return_value=project_service)
        )
        if section_service is not None:
            stack.enter_context(
                patch(f"{name}.get_section_service", return_value=section_service)
            )
        stack.enter_context(patch(f"{name}.get_current_user_id", return_value=USER_ID))
        return runner.invoke(module.app, args)


class TestProjectsCommand:
    def test_list(self, project_service):
        result = _invoke(projects, ["list"], project_service)

        assert result.exit_code == 0, result.output
        assert "Work" in result.output
        assert "Home" in result.output

    def test_add_with_parent_name(self, project_service):
        result = _invoke(
            projects, ["add", "Reports", "--parent", "work", "--color", "red"], project_service
        )

        assert result.exit_code == 0, result.output
        args = project_service.create_project.await_args
        data = args.args[1]
        assert data.name == "Reports"
        assert data.color == "red"
        assert data.parent_id == WORK.id
        assert args.kwargs["sync_to_todoist"] is False

    def test_add_sync_failure_is_reported(self, project_service):
        result = _invoke(projects, ["add", "Work", "--sync"], project_service)

        assert result.exit_code == 0, result.output
        assert "saved locally" in result.output

    def test_update_favorite(self, project_service):
        result = _invoke(projects, ["update", "Home", "--favorite"], project_service)

        assert result.exit_code == 0, result.output
        user_id, project_id, updates = project_service.update_project.await_args.args
        assert project_id == HOME.id
        assert updates.model_fields_set == {"is_favorite"}
        assert updates.is_favorite is True

    def test_update_cycle_rejected(self, project_service):
        project_service.update_project.side_effect = ValidationError(
            "A project cannot be nested inside itself"
        )

        result = _invoke(projects, ["update", "Work", "--parent", "Work"], project_service)

        assert result.exit_code == 2
        assert "nested inside itself" in result.output

    def test_update_requires_a_change(self, project_service):
        result = _invoke(projects, ["update", "Work"], project_service)
        assert result.exit_code == 1

    def test_delete(self, project_service):
        result = _invoke(projects, ["delete", "bbbb", "--yes"], project_service)

        assert result.exit_code == 0, result.output
        project_service.delete_project.assert_awaited_once_with(USER_ID, HOME.id)


class TestSectionsCommand:
    def test_list(self, project_service, section_service):
        result = _invoke(sections, ["list", "Work"], project_service, section_service)

        assert result.exit_code == 0, result.output
        section_service.list_sections.assert_awaited_once_with(USER_ID, WORK.id)
        assert "Todo" in result.output

    def test_add(self, project_service, section_service):
        result = _invoke(
            sections, ["add", "Work", "Doing", "--sync"], project_service, section_service
        )

        assert result.exit_code == 0, result.output
        args = section_service.create_section.await_args
        assert args.args[1].name == "Doing"
        assert args.args[1].project_id == WORK.id
        assert args.kwargs["sync_to_todoist"] is True

    def test_rename_by_name(self, project_service, section_service):
        result = _invoke(
            sections,
            ["update", "Work", "todo", "--name", "Doing"],
            project_service,
            section_service,
        )

        assert result.exit_code == 0, result.output
        _, section_id, updates = section_service.update_section.await_args.args
        assert section_id == TODO.id
        assert updates.name == "Doing"

    def test_delete(self, project_service, section_service):
        result = _invoke(
            sections, ["delete", "Work", "cccc", "--yes"], project_service, section_service
        )

        assert result.exit_code == 0, result.output
        section_service.delete_section.assert_awaited_once_with(USER_ID, TODO.id)
