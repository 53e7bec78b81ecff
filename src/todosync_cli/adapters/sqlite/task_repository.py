"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any

from todosync_cli.adapters.sqlite.base import SqliteRepository
from todosync_cli.adapters.sqlite.label_repository import (
    fetch_task_labels,
    set_task_labels,
)
from todosync_cli.adapters.sqlite.utils import (
    build_update_clause,
    generate_uuid,
    now_iso,
    row_to_dict,
    to_db_value,
)
from todosync_cli.exceptions import NotFoundError, ValidationError
from todosync_cli.models import Task, TaskCreate, TaskFilters, TaskUpdate
from todosync_cli.repositories import TaskRepository


class SqliteTaskRepository(SqliteRepository, TaskRepository):
    """SQLite implementation of task repository."""

    async def list_all(self, user_id: str, filters: TaskFilters) -> list[Task]:
        """List all tasks with filtering."""
        query = "SELECT t.* FROM tasks t WHERE t.user_id = ?"
        params: list[Any] = [user_id]

        if filters.status == "active":
            query += " AND t.is_completed = 0"
        elif filters.status == "completed":
            query += " AND t.is_completed = 1"
        # "all" means no filter on is_completed

        if filters.project_id:
            query += " AND t.project_id = ?"
            params.append(filters.project_id)

        if filters.section_id:
            query += " AND t.section_id = ?"
            params.append(filters.section_id)

        if filters.task_type is not None:
            query += " AND t.task_type = ?"
            params.append(filters.task_type.value)

        if filters.context:
            query += " AND t.context = ?"
            params.append(filters.context)

        if filters.energy_level is not None:
            query += " AND t.energy_level = ?"
            params.append(filters.energy_level.value)

        if filters.max_time_estimate is not None:
            query += " AND t.time_estimate IS NOT NULL AND t.time_estimate <= ?"
            params.append(filters.max_time_estimate)

        if filters.linked is True:
            query += " AND t.todoist_id IS NOT NULL"
        elif filters.linked is False:
            query += " AND t.todoist_id IS NULL"

        if filters.search:
            query += " AND (t.title LIKE ? OR t.description LIKE ?)"
            search_term = f"%{filters.search}%"
            params.extend([search_term, search_term])

        query += " ORDER BY t.is_completed ASC, t.display_order ASC, t.created_at DESC"

        cursor = self.connection.execute(query, params)
        return [self._to_task(row) for row in cursor.fetchall()]

    async def get(self, user_id: str, task_id: str) -> Task:
        """Get a specific task by ID."""
        cursor = self.connection.execute(
            "SELECT * FROM tasks WHERE id = ? AND user_id = ?",
            (task_id, user_id),
        )
        row = cursor.fetchone()

        if not row:
            raise NotFoundError(f"Task not found: {task_id}")

        return self._to_task(row)

    async def find_by_todoist_id(self, user_id: str, todoist_id: str) -> Task | None:
        cursor = self.connection.execute(
            "SELECT * FROM tasks WHERE todoist_id = ? AND user_id = ?",
            (todoist_id, user_id),
        )
        row = cursor.fetchone()
        return self._to_task(row) if row else None

    async def list_linked(self, user_id: str) -> list[Task]:
        return await self.list_all(user_id, TaskFilters(linked=True))

    async def create(
        self,
        user_id: str,
        task_data: TaskCreate,
        *,
        todoist_id: str | None = None,
        synced_at: datetime | None = None,
    ) -> Task:
        """Create a new task."""
        task_id = generate_uuid()
        now = now_iso()
        data = task_data.model_dump(exclude={"labels"})

        order = data.pop("order")
        if order is None:
            order = self._next_order(user_id)

        try:
            self.connection.execute(
                """INSERT INTO tasks (
                    id, todoist_id, title, description, is_completed, priority,
                    due_date, synced_at, user_id, project_id, section_id,
                    display_order, task_type, waiting_for, energy_level,
                    time_estimate, context, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    task_id,
                    todoist_id,
                    data["title"],
                    data["description"],
                    data["is_completed"],
                    data["priority"],
                    to_db_value(data["due_date"]),
                    to_db_value(synced_at),
                    user_id,
                    data["project_id"],
                    data["section_id"],
                    order,
                    to_db_value(data["task_type"]),
                    data["waiting_for"],
                    to_db_value(data["energy_level"]),
                    data["time_estimate"],
                    data["context"],
                    now,
                    now,
                ),
            )
        except sqlite3.IntegrityError as e:
            self.connection.rollback()
            if "UNIQUE constraint" in str(e):
                raise ValidationError(
                    f"A task is already linked to Todoist task {todoist_id}"
                ) from e
            raise

        if task_data.labels:
            set_task_labels(self.connection, task_id, task_data.labels)

        self.connection.commit()

        return await self.get(user_id, task_id)

    async def update(
        self,
        user_id: str,
        task_id: str,
        updates: TaskUpdate,
        *,
        synced_at: datetime | None = None,
    ) -> Task:
        """Update an existing task."""
        await self.get(user_id, task_id)

        update_dict = updates.model_dump(exclude_unset=True, exclude={"labels"})
        if synced_at is not None:
            update_dict["synced_at"] = synced_at
        update_dict["updated_at"] = now_iso()

        set_clause, params = build_update_clause(update_dict)
        params.extend([task_id, user_id])
        self.connection.execute(
            f"UPDATE tasks SET {set_clause} WHERE id = ? AND user_id = ?", params
        )

        if updates.labels is not None:
            set_task_labels(self.connection, task_id, updates.labels)

        self.connection.commit()

        return await self.get(user_id, task_id)

    async def delete(self, user_id: str, task_id: str) -> bool:
        """Delete a task; cascade removes its label associations."""
        cursor = self.connection.execute(
            "DELETE FROM tasks WHERE id = ? AND user_id = ?", (task_id, user_id)
        )
        self.connection.commit()
        return cursor.rowcount > 0

    def _next_order(self, user_id: str) -> int:
        cursor = self.connection.execute(
            "SELECT MAX(display_order) FROM tasks WHERE user_id = ?", (user_id,)
        )
        last = cursor.fetchone()[0]
        return (last or 0) + 1

    def _to_task(self, row: sqlite3.Row) -> Task:
        task_dict = row_to_dict(row)
        task_dict["labels"] = fetch_task_labels(self.connection, task_dict["id"])
        return Task(**task_dict)
