"""Bootstrap of the storage and Todoist client used by the services."""

from __future__ import annotations

from functools import lru_cache, partial

from todosync_cli.adapters.sqlite import SqliteStorage
from todosync_cli.config import get_config_manager
from todosync_cli.services.todoist.client import create_todoist_client


@lru_cache(maxsize=1)
def get_storage() -> SqliteStorage:
    """Get the cached SqliteStorage for the configured database path."""
    db_path = get_config_manager().get("database.path")
    return SqliteStorage(db_path=db_path)


def get_client_factory():
    """Return ``create_todoist_client`` bound to the configured endpoint."""
    config = get_config_manager().config
    return partial(
        create_todoist_client,
        base_url=config.todoist.base_url,
        timeout=config.todoist.timeout,
    )
