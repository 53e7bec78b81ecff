"""Utility functions for SQLite adapter."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any


def generate_uuid() -> str:
    """Generate a new UUID as string."""
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary, mapping display_order to order."""
    if row is None:
        return {}
    data = dict(row)
    if "display_order" in data:
        data["order"] = data.pop("display_order") or 0
    return data


def to_db_value(value: Any) -> Any:
    """Convert a model value into something sqlite3 can bind."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def build_update_clause(updates: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build SQL UPDATE SET clause from an updates dictionary.

    Unlike a filter, None values are kept: they clear the column.

    Args:
        updates: Dictionary of field names to new values

    Returns:
        Tuple of (SET clause string, parameters list)
    """
    set_parts = []
    params = []

    for key, value in updates.items():
        column = "display_order" if key == "order" else key
        set_parts.append(f"{column} = ?")
        params.append(to_db_value(value))

    return ", ".join(set_parts), params
