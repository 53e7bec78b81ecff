"""SQLite implementation of LabelRepository.

Labels are global: a name maps to exactly one row no matter how many users or
tasks reference it. Tasks attach to labels through ``task_labels``.
"""

from __future__ import annotations

import sqlite3

from todosync_cli.adapters.sqlite.base import SqliteRepository
from todosync_cli.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict
from todosync_cli.models import Label
from todosync_cli.repositories import LabelRepository


def connect_or_create_label(connection: sqlite3.Connection, name: str) -> str:
    """Return the id of the label called *name*, inserting it if missing."""
    connection.execute(
        "INSERT OR IGNORE INTO labels (id, name, created_at) VALUES (?, ?, ?)",
        (generate_uuid(), name, now_iso()),
    )
    row = connection.execute("SELECT id FROM labels WHERE name = ?", (name,)).fetchone()
    return row[0]


def set_task_labels(
    connection: sqlite3.Connection, task_id: str, label_names: list[str]
) -> None:
    """Detach all labels from a task, then connect-or-create *label_names*.

    Does not commit; callers commit together with the task write.
    """
    connection.execute("DELETE FROM task_labels WHERE task_id = ?", (task_id,))

    for name in dict.fromkeys(label_names):
        label_id = connect_or_create_label(connection, name)
        connection.execute(
            "INSERT OR IGNORE INTO task_labels (task_id, label_id) VALUES (?, ?)",
            (task_id, label_id),
        )


def fetch_task_labels(connection: sqlite3.Connection, task_id: str) -> list[str]:
    """Return label names attached to a task, sorted by name."""
    cursor = connection.execute(
        """SELECT l.name FROM task_labels tl
           JOIN labels l ON l.id = tl.label_id
           WHERE tl.task_id = ?
           ORDER BY l.name""",
        (task_id,),
    )
    return [row[0] for row in cursor.fetchall()]


class SqliteLabelRepository(SqliteRepository, LabelRepository):
    """SQLite implementation of label repository."""

    async def list_all(self) -> list[Label]:
        cursor = self.connection.execute("SELECT id, name FROM labels ORDER BY name")
        return [Label(**row_to_dict(row)) for row in cursor.fetchall()]

    async def get_or_create(self, name: str) -> Label:
        label_id = connect_or_create_label(self.connection, name)
        self.connection.commit()
        return Label(id=label_id, name=name)

    async def replace_task_labels(self, task_id: str, label_names: list[str]) -> None:
        set_task_labels(self.connection, task_id, label_names)
        self.connection.commit()

    async def get_task_labels(self, task_id: str) -> list[str]:
        return fetch_task_labels(self.connection, task_id)
