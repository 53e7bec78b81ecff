"""Main entry point for todosync."""

from typing import Optional

import typer

from todosync_cli import __version__
from todosync_cli.commands import (
    config,
    labels,
    projects,
    sections,
    tasks,
    todoist,
    users,
)
from todosync_cli.config import get_config_manager
from todosync_cli.utils.logger import get_logger, set_log_level
from todosync_cli.utils.typer_helpers import SuggestingGroup
from todosync_cli.utils.ui.console import get_console

app = typer.Typer(
    name="todosync",
    cls=SuggestingGroup,
    help="GTD task manager with two-way Todoist synchronisation",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(users.app, name="users", help="User management")
app.add_typer(todoist.app, name="todoist", help="Todoist connection and sync")
app.add_typer(tasks.app, name="tasks", help="Task management and GTD views")
app.add_typer(projects.app, name="projects", help="Project management")
app.add_typer(sections.app, name="sections", help="Section management")
app.add_typer(labels.app, name="labels", help="Labels shared by all tasks")
app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def main(
    profile: Optional[str] = typer.Option(
        None, "--profile", envvar="TODOSYNC_PROFILE", help="Configuration profile"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Load the configuration profile and set up logging."""
    config_manager = get_config_manager(profile)
    get_logger()
    set_log_level("DEBUG" if verbose else config_manager.get("logging.level"))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todosync[/bold] version [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
