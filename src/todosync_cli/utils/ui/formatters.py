"""Output formatters for different formats."""

import json
from datetime import UTC, datetime
from typing import Any

import yaml
from pydantic import BaseModel
from rich.table import Table

from todosync_cli.models import Project, Section, SyncAllResult, Task
from todosync_cli.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("table", "json", "yaml")

PRIORITY_COLORS = {
    4: "bold red",
    3: "bold orange3",
    2: "bold yellow",
    1: "green",
}

PRIORITY_NAMES = {
    4: "urgent",
    3: "high",
    2: "medium",
    1: "normal",
}


def _to_data(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_to_data(item) for item in data]
    return data


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display models or plain data in *output_format*."""
    if output_format == "json":
        print(json.dumps(_to_data(data), indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(_to_data(data), default_flow_style=False, sort_keys=False))
    elif isinstance(data, list) and data and isinstance(data[0], Task):
        format_tasks_table(data)
    elif isinstance(data, list) and data and isinstance(data[0], Project):
        format_projects_table(data)
    elif isinstance(data, list) and data and isinstance(data[0], Section):
        format_sections_table(data)
    elif isinstance(data, SyncAllResult):
        format_sync_result(data)
    else:
        format_table(_to_data(data))


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col)) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_tasks_table(tasks: list[Task]) -> None:
    """Tasks with priority colors; a dot marks tasks linked to Todoist."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("")
    table.add_column("Title")
    table.add_column("Priority")
    table.add_column("Due")
    table.add_column("Type")
    table.add_column("Context")
    table.add_column("Labels")
    table.add_column("Todoist", justify="center")

    for task in tasks:
        status = "☑" if task.is_completed else "☐"
        title = f"[strike dim]{task.title}[/strike dim]" if task.is_completed else task.title
        color = PRIORITY_COLORS.get(task.priority, "white")
        if task.todoist_id:
            linked = "[green]●[/green]" if task.synced_at else "[yellow]●[/yellow]"
        else:
            linked = ""
        table.add_row(
            task.id[:8],
            status,
            title,
            f"[{color}]{PRIORITY_NAMES.get(task.priority, task.priority)}[/{color}]",
            format_due_date(task.due_date),
            task.task_type.value,
            task.context or "",
            ", ".join(task.labels),
            linked,
        )

    console.print(table)


def format_projects_table(projects: list[Project]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Color")
    table.add_column("Order", justify="right")
    table.add_column("Todoist", justify="center")

    for project in projects:
        name = f"⭐ {project.name}" if project.is_favorite else project.name
        table.add_row(
            project.id[:8],
            name,
            project.color or "",
            str(project.order),
            "[green]●[/green]" if project.todoist_id else "",
        )

    console.print(table)


def format_sections_table(sections: list[Section]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Order", justify="right")
    table.add_column("Todoist", justify="center")

    for section in sections:
        table.add_row(
            section.id[:8],
            section.name,
            str(section.order),
            "[green]●[/green]" if section.todoist_id else "",
        )

    console.print(table)


def format_sync_result(result: SyncAllResult) -> None:
    """Imported/updated counts per entity class."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("")
    table.add_column("Imported", justify="right")
    table.add_column("Updated", justify="right")

    for name, counts in (
        ("Projects", result.projects),
        ("Sections", result.sections),
        ("Tasks", result.tasks),
    ):
        table.add_row(name, str(counts.imported), str(counts.updated))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def format_due_date(date: datetime | None) -> str:
    """Format a due date as DD/MM DayOfWeek, adding the year when not current."""
    if date is None:
        return ""

    if date.tzinfo is None:
        date = date.replace(tzinfo=UTC)

    if date.year != datetime.now(UTC).year:
        return date.strftime("%d/%m/%Y %a")
    return date.strftime("%d/%m %a")
