"""Todoist connection and synchronisation commands."""

from enum import Enum

import typer

from todosync_cli.services.account_service import get_account_service
from todosync_cli.services.todoist.reconciler import get_reconciliation_service
from todosync_cli.utils.typer_helpers import SuggestingGroup
from todosync_cli.utils.ui.console import get_console
from todosync_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper, get_current_user_id

app = typer.Typer(cls=SuggestingGroup, help="Todoist integration commands")
console = get_console()


@app.command("connect")
@command_wrapper
async def connect(
    api_key: str = typer.Option(
        ...,
        "--api-key",
        envvar="TODOIST_API_KEY",
        prompt="Todoist API token",
        hide_input=True,
        help="Personal API token from Todoist settings",
    ),
) -> None:
    """Store the current user's Todoist API token."""
    user_id = get_current_user_id()
    await get_account_service().set_todoist_token(user_id, api_key)
    format_success("Todoist connected. Run 'todosync todoist sync' to import.")


@app.command("disconnect")
@command_wrapper
async def disconnect() -> None:
    """Forget the current user's Todoist API token."""
    user_id = get_current_user_id()
    await get_account_service().set_todoist_token(user_id, None)
    format_success("Todoist disconnected")


@app.command("status")
@command_wrapper
async def status(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show whether a Todoist token is stored."""
    user_id = get_current_user_id()
    connection = await get_account_service().get_connection_status(user_id)
    if output == "table":
        if connection.connected:
            console.print("[green]✓ Connected to Todoist[/green]")
        else:
            console.print("[yellow]Not connected to Todoist[/yellow]")
        return
    format_output(connection, output)


class SyncScope(str, Enum):
    projects = "projects"
    tasks = "tasks"


@app.command("sync")
@command_wrapper
async def sync(
    only: SyncScope | None = typer.Option(
        None, "--only", help="Reconcile just projects or just tasks"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Import and refresh projects, sections and tasks from Todoist."""
    user_id = get_current_user_id()
    service = get_reconciliation_service()
    if only is SyncScope.projects:
        format_output(await service.sync_projects(user_id), output)
    elif only is SyncScope.tasks:
        format_output(await service.sync_tasks(user_id), output)
    else:
        format_output(await service.sync_all(user_id), output)
