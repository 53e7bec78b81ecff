"""Task management commands, including the GTD views."""

from datetime import datetime
from typing import Optional

import typer

from todosync_cli.models import EnergyLevel, TaskCreate, TaskType, TaskUpdate
from todosync_cli.services.project_service import get_project_service
from todosync_cli.services.section_service import get_section_service
from todosync_cli.services.task_service import get_task_service
from todosync_cli.utils.typer_helpers import SuggestingGroup
from todosync_cli.utils.ui.formatters import format_error, format_output, format_success

from .decorators import command_wrapper, get_current_user_id
from .utils import as_utc, resolve_project_id, resolve_section_id, resolve_task_id

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]


async def _placement(
    user_id: str, project: str | None, section: str | None
) -> tuple[str | None, str | None]:
    """Resolve --project/--section values to ids."""
    project_id = None
    if project:
        project_id = await resolve_project_id(get_project_service(), user_id, project)
    section_id = section
    if section and project_id:
        section_id = await resolve_section_id(
            get_section_service(), user_id, project_id, section
        )
    return project_id, section_id


@app.command("list")
@command_wrapper
async def list_tasks(
    status: str = typer.Option(
        "active", "--status", help="Filter by status: active, completed, all"
    ),
    project: str | None = typer.Option(None, "--project", "-p", help="Project ID or name"),
    task_type: TaskType | None = typer.Option(None, "--type", help="GTD bucket"),
    context: str | None = typer.Option(None, "--context", help="GTD context, e.g. @home"),
    search: str | None = typer.Option(None, "--search", help="Search title and description"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List tasks."""
    user_id = get_current_user_id()
    task_service = get_task_service()

    project_id = None
    if project:
        project_id = await resolve_project_id(get_project_service(), user_id, project)

    tasks = await task_service.list_tasks(
        user_id,
        status=status,
        project_id=project_id,
        task_type=task_type,
        context=context,
        search=search,
    )
    format_output(tasks, output)


@app.command("get")
@command_wrapper
async def get_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show one task."""
    user_id = get_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_service, user_id, task_id)
    task = await task_service.get_task(user_id, task_id)
    format_output(task, output)


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(None, "--description", "-d"),
    priority: int = typer.Option(1, "--priority", help="1 (normal) to 4 (urgent)"),
    due: datetime | None = typer.Option(None, "--due", formats=DATE_FORMATS),
    labels: Optional[list[str]] = typer.Option(None, "--label", "-l", help="Repeatable"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project ID or name"),
    section: str | None = typer.Option(None, "--section", "-s", help="Section ID or name"),
    task_type: TaskType = typer.Option(TaskType.INBOX, "--type", help="GTD bucket"),
    context: str | None = typer.Option(None, "--context"),
    energy: EnergyLevel | None = typer.Option(None, "--energy"),
    estimate: int | None = typer.Option(None, "--estimate", help="Minutes"),
    waiting_for: str | None = typer.Option(None, "--waiting-for"),
    sync: bool = typer.Option(False, "--sync/--no-sync", help="Also create in Todoist"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Create a task."""
    user_id = get_current_user_id()
    task_service = get_task_service()

    project_id, section_id = await _placement(user_id, project, section)
    task_data = TaskCreate(
        title=title,
        description=description,
        priority=priority,
        due_date=as_utc(due),
        labels=labels or [],
        project_id=project_id,
        section_id=section_id,
        task_type=task_type,
        context=context,
        energy_level=energy,
        time_estimate=estimate,
        waiting_for=waiting_for,
    )
    task = await task_service.create_task(user_id, task_data, sync_to_todoist=sync)

    format_success(f"Task created: {task.id}")
    if sync and not task.todoist_id:
        format_error("Could not create the task in Todoist; it was saved locally")
    format_output(task, output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    title: str | None = typer.Option(None, "--title"),
    description: str | None = typer.Option(None, "--description", "-d"),
    priority: int | None = typer.Option(None, "--priority"),
    due: datetime | None = typer.Option(None, "--due", formats=DATE_FORMATS),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    labels: Optional[list[str]] = typer.Option(
        None, "--label", "-l", help="Replaces all labels; repeatable"
    ),
    project: str | None = typer.Option(None, "--project", "-p"),
    section: str | None = typer.Option(None, "--section", "-s"),
    task_type: TaskType | None = typer.Option(None, "--type"),
    context: str | None = typer.Option(None, "--context"),
    energy: EnergyLevel | None = typer.Option(None, "--energy"),
    estimate: int | None = typer.Option(None, "--estimate"),
    waiting_for: str | None = typer.Option(None, "--waiting-for"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Update a task. Only the given options are changed."""
    changes = {
        "title": title,
        "description": description,
        "priority": priority,
        "due_date": as_utc(due),
        "labels": labels or None,
        "task_type": task_type,
        "context": context,
        "energy_level": energy,
        "time_estimate": estimate,
        "waiting_for": waiting_for,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    if clear_due:
        changes["due_date"] = None

    user_id = get_current_user_id()
    task_service = get_task_service()

    if project or section:
        project_id, section_id = await _placement(user_id, project, section)
        if project_id:
            changes["project_id"] = project_id
        if section_id:
            changes["section_id"] = section_id

    if not changes:
        format_error("No updates specified")
        raise typer.Exit(1)

    task_id = await resolve_task_id(task_service, user_id, task_id)
    task = await task_service.update_task(user_id, task_id, TaskUpdate(**changes))
    format_success(f"Task updated: {task.id}")
    format_output(task, output)


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
) -> None:
    """Mark a task as completed."""
    user_id = get_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_service, user_id, task_id)
    task = await task_service.complete_task(user_id, task_id)
    format_success(f"Completed: {task.title}")


@app.command("reopen")
@command_wrapper
async def reopen_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
) -> None:
    """Reopen a completed task."""
    user_id = get_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_service, user_id, task_id)
    task = await task_service.reopen_task(user_id, task_id)
    format_success(f"Reopened: {task.title}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID or prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    if not yes and not typer.confirm(f"Are you sure you want to delete task {task_id}?"):
        format_error("Cancelled")
        raise typer.Exit(0)

    user_id = get_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_service, user_id, task_id)
    await task_service.delete_task(user_id, task_id)
    format_success(f"Task deleted: {task_id}")


@app.command("inbox")
@command_wrapper
async def inbox(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show unprocessed tasks."""
    user_id = get_current_user_id()
    tasks = await get_task_service().get_inbox(user_id)
    format_output(tasks, output)


@app.command("next")
@command_wrapper
async def next_actions(
    context: str | None = typer.Option(None, "--context", help="e.g. @home"),
    energy: EnergyLevel | None = typer.Option(None, "--energy"),
    max_minutes: int | None = typer.Option(None, "--max-minutes", min=0),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show next actions that fit the given context, energy and time."""
    user_id = get_current_user_id()
    tasks = await get_task_service().get_next_actions(
        user_id, context=context, energy_level=energy, max_minutes=max_minutes
    )
    format_output(tasks, output)


@app.command("waiting")
@command_wrapper
async def waiting_for(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show tasks waiting on someone else."""
    user_id = get_current_user_id()
    tasks = await get_task_service().get_waiting_for(user_id)
    format_output(tasks, output)


@app.command("someday")
@command_wrapper
async def someday_maybe(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show someday/maybe tasks."""
    user_id = get_current_user_id()
    tasks = await get_task_service().get_someday_maybe(user_id)
    format_output(tasks, output)


@app.command("process")
@command_wrapper
async def process_inbox_item(
    task_id: str = typer.Argument(..., help="Inbox task ID or prefix"),
    task_type: TaskType = typer.Argument(..., help="Bucket to move the task to"),
    context: str | None = typer.Option(None, "--context"),
    energy: EnergyLevel | None = typer.Option(None, "--energy"),
    estimate: int | None = typer.Option(None, "--estimate", help="Minutes"),
    waiting_for: str | None = typer.Option(None, "--waiting-for"),
    project: str | None = typer.Option(None, "--project", "-p"),
    notes: str | None = typer.Option(None, "--notes", help="Appended to the description"),
) -> None:
    """Move an inbox task into a GTD bucket."""
    user_id = get_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_service, user_id, task_id)
    project_id = None
    if project:
        project_id = await resolve_project_id(get_project_service(), user_id, project)

    task = await task_service.process_inbox_item(
        user_id,
        task_id,
        task_type,
        context=context,
        energy_level=energy,
        time_estimate=estimate,
        waiting_for=waiting_for,
        project_id=project_id,
        notes=notes,
    )
    format_success(f"Moved to {task.task_type.value}: {task.title}")
