"""Helpers shared by the command modules."""

from __future__ import annotations

from datetime import UTC, datetime

from todosync_cli.utils.uuid_utils import resolve_id


async def resolve_task_id(task_service, user_id: str, value: str) -> str:
    """Resolve a task id or id prefix among the user's tasks."""
    tasks = await task_service.list_tasks(user_id, status="all")
    return resolve_id(value, tasks, "task")


async def resolve_project_id(project_service, user_id: str, value: str) -> str:
    """Resolve a project id, id prefix or name among the user's projects."""
    projects = await project_service.list_projects(user_id)
    return resolve_id(value, projects, "project", match_name=True)


async def resolve_section_id(
    section_service, user_id: str, project_id: str, value: str
) -> str:
    """Resolve a section id, id prefix or name within one project."""
    sections = await section_service.list_sections(user_id, project_id)
    return resolve_id(value, sections, "section", match_name=True)


def as_utc(value: datetime | None) -> datetime | None:
    """Typer parses dates as naive datetimes; treat them as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
