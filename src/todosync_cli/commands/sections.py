"""Section management commands."""

import typer

from todosync_cli.models import SectionCreate, SectionUpdate
from todosync_cli.services.project_service import get_project_service
from todosync_cli.services.section_service import get_section_service
from todosync_cli.utils.typer_helpers import SuggestingGroup
from todosync_cli.utils.ui.formatters import format_error, format_output, format_success

from .decorators import command_wrapper, get_current_user_id
from .utils import resolve_project_id, resolve_section_id

app = typer.Typer(cls=SuggestingGroup, help="Section management commands")


@app.command("list")
@command_wrapper
async def list_sections(
    project_id: str = typer.Argument(..., help="Project ID or name"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List sections in a project."""
    user_id = get_current_user_id()
    project_id = await resolve_project_id(get_project_service(), user_id, project_id)
    sections = await get_section_service().list_sections(user_id, project_id)
    format_output(sections, output)


@app.command("add")
@command_wrapper
async def add_section(
    project_id: str = typer.Argument(..., help="Project ID or name"),
    name: str = typer.Argument(..., help="Section name"),
    order: int | None = typer.Option(None, "--order", help="Display order position"),
    sync: bool = typer.Option(
        False, "--sync/--no-sync", help="Also create in Todoist (linked projects only)"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Create a new section within a project."""
    user_id = get_current_user_id()
    project_id = await resolve_project_id(get_project_service(), user_id, project_id)

    section = await get_section_service().create_section(
        user_id,
        SectionCreate(name=name, project_id=project_id, order=order),
        sync_to_todoist=sync,
    )
    format_success(f"Section created: {section.id}")
    format_output(section, output)


@app.command("update")
@command_wrapper
async def update_section(
    project_id: str = typer.Argument(..., help="Project ID or name"),
    section_id: str = typer.Argument(..., help="Section ID or name"),
    name: str | None = typer.Option(None, "--name", help="New section name"),
    order: int | None = typer.Option(None, "--order", help="New display order"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Rename or reorder a section."""
    changes = {"name": name, "order": order}
    changes = {key: value for key, value in changes.items() if value is not None}
    if not changes:
        format_error("No updates specified")
        raise typer.Exit(1)

    user_id = get_current_user_id()
    section_service = get_section_service()
    project_id = await resolve_project_id(get_project_service(), user_id, project_id)
    section_id = await resolve_section_id(section_service, user_id, project_id, section_id)

    section = await section_service.update_section(
        user_id, section_id, SectionUpdate(**changes)
    )
    format_success(f"Section updated: {section_id}")
    format_output(section, output)


@app.command("delete")
@command_wrapper
async def delete_section(
    project_id: str = typer.Argument(..., help="Project ID or name"),
    section_id: str = typer.Argument(..., help="Section ID or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a section. Its tasks stay in the project."""
    if not yes and not typer.confirm(
        f"Are you sure you want to delete section {section_id}?"
    ):
        format_error("Cancelled")
        raise typer.Exit(0)

    user_id = get_current_user_id()
    section_service = get_section_service()
    project_id = await resolve_project_id(get_project_service(), user_id, project_id)
    section_id = await resolve_section_id(section_service, user_id, project_id, section_id)

    await section_service.delete_section(user_id, section_id)
    format_success(f"Section deleted: {section_id}")
