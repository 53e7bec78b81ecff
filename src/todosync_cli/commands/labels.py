"""Label commands."""

import typer

from todosync_cli.services.label_service import get_label_service
from todosync_cli.services.task_service import get_task_service
from todosync_cli.utils.typer_helpers import SuggestingGroup
from todosync_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper, get_current_user_id
from .utils import resolve_task_id

app = typer.Typer(cls=SuggestingGroup, help="Label commands")


@app.command("list")
@command_wrapper
async def list_labels(
    search: str | None = typer.Option(None, "--search", help="Search labels"),
    task: str | None = typer.Option(None, "--task", help="Only labels on this task"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List labels."""
    label_service = get_label_service()

    if task:
        user_id = get_current_user_id()
        task_id = await resolve_task_id(get_task_service(), user_id, task)
        format_output(await label_service.task_labels(user_id, task_id), output)
        return

    format_output(await label_service.list_labels(search), output)


@app.command("add")
@command_wrapper
async def add_label(
    name: str = typer.Argument(..., help="Label name"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Create a label, or show it if it already exists."""
    label = await get_label_service().add_label(name)
    format_success(f"Label ready: {label.name}")
    format_output(label, output)
