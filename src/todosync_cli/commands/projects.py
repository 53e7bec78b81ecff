"""Project management commands."""

import typer

from todosync_cli.models import ProjectCreate, ProjectUpdate
from todosync_cli.services.project_service import get_project_service
from todosync_cli.utils.typer_helpers import SuggestingGroup
from todosync_cli.utils.ui.formatters import format_error, format_output, format_success

from .decorators import command_wrapper, get_current_user_id
from .utils import resolve_project_id

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


@app.command("list")
@command_wrapper
async def list_projects(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List projects."""
    user_id = get_current_user_id()
    projects = await get_project_service().list_projects(user_id)
    format_output(projects, output)


@app.command("add")
@command_wrapper
async def add_project(
    name: str = typer.Argument(..., help="Project name"),
    color: str | None = typer.Option(None, "--color", help="Project color"),
    favorite: bool = typer.Option(False, "--favorite", help="Mark as favorite"),
    parent: str | None = typer.Option(None, "--parent", help="Parent project ID or name"),
    sync: bool = typer.Option(False, "--sync/--no-sync", help="Also create in Todoist"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Create a new project."""
    user_id = get_current_user_id()
    project_service = get_project_service()

    parent_id = None
    if parent:
        parent_id = await resolve_project_id(project_service, user_id, parent)

    project = await project_service.create_project(
        user_id,
        ProjectCreate(name=name, color=color, is_favorite=favorite, parent_id=parent_id),
        sync_to_todoist=sync,
    )
    format_success(f"Project created: {project.id}")
    if sync and not project.todoist_id:
        format_error("Could not create the project in Todoist; it was saved locally")
    format_output(project, output)


@app.command("update")
@command_wrapper
async def update_project(
    project_id: str = typer.Argument(..., help="Project ID or name"),
    name: str | None = typer.Option(None, "--name", help="Project name"),
    color: str | None = typer.Option(None, "--color", help="Project color"),
    favorite: bool | None = typer.Option(None, "--favorite/--no-favorite"),
    parent: str | None = typer.Option(None, "--parent", help="Parent project ID or name"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Update a project."""
    changes = {"name": name, "color": color, "is_favorite": favorite}
    changes = {key: value for key, value in changes.items() if value is not None}

    user_id = get_current_user_id()
    project_service = get_project_service()

    if parent:
        changes["parent_id"] = await resolve_project_id(project_service, user_id, parent)

    if not changes:
        format_error("No updates specified")
        raise typer.Exit(1)

    project_id = await resolve_project_id(project_service, user_id, project_id)
    project = await project_service.update_project(
        user_id, project_id, ProjectUpdate(**changes)
    )
    format_success(f"Project updated: {project_id}")
    format_output(project, output)


@app.command("delete")
@command_wrapper
async def delete_project(
    project_id: str = typer.Argument(..., help="Project ID or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project. Its sections are deleted; its tasks are kept."""
    if not yes and not typer.confirm(
        f"Are you sure you want to delete project {project_id}?"
    ):
        format_error("Cancelled")
        raise typer.Exit(0)

    user_id = get_current_user_id()
    project_service = get_project_service()

    project_id = await resolve_project_id(project_service, user_id, project_id)
    await project_service.delete_project(user_id, project_id)
    format_success(f"Project deleted: {project_id}")
