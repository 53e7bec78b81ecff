"""User management commands."""

import typer

from todosync_cli.config import get_config_manager
from todosync_cli.services.account_service import get_account_service
from todosync_cli.utils.typer_helpers import SuggestingGroup
from todosync_cli.utils.ui.formatters import format_info, format_output, format_success
from todosync_cli.utils.uuid_utils import resolve_id

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="User management commands")


@app.command("add")
@command_wrapper
async def add_user(
    email: str = typer.Argument(..., help="Email address"),
    name: str | None = typer.Option(None, "--name", help="Display name"),
) -> None:
    """Create a user; the first user becomes the current one."""
    user = await get_account_service().create_user(email, name)
    format_success(f"User created: {user.id}")

    config_manager = get_config_manager()
    if not config_manager.get("current_user_id"):
        config_manager.set("current_user_id", user.id)
        format_info(f"Now acting as {user.email}")


@app.command("list")
@command_wrapper
async def list_users(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List users."""
    users = await get_account_service().list_users()
    current = get_config_manager().get("current_user_id")
    rows = [
        {
            "current": user.id == current,
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "todoist": bool(user.todoist_api_token),
        }
        for user in users
    ]
    format_output(rows, output)


@app.command("use")
@command_wrapper
async def use_user(
    user: str = typer.Argument(..., help="User ID, ID prefix or email"),
) -> None:
    """Switch the user commands act as."""
    users = await get_account_service().list_users()
    by_email = [u for u in users if u.email == user]
    user_id = by_email[0].id if by_email else resolve_id(user, users, "user")

    get_config_manager().set("current_user_id", user_id)
    format_success(f"Now acting as {user_id}")
