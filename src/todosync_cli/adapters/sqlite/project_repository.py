"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

import sqlite3
from datetime import datetime

from todosync_cli.adapters.sqlite.base import SqliteRepository
from todosync_cli.adapters.sqlite.utils import (
    build_update_clause,
    generate_uuid,
    now_iso,
    row_to_dict,
    to_db_value,
)
from todosync_cli.exceptions import NotFoundError, ValidationError
from todosync_cli.models import Project, ProjectCreate, ProjectUpdate
from todosync_cli.repositories import ProjectRepository


class SqliteProjectRepository(SqliteRepository, ProjectRepository):
    """SQLite implementation of project repository."""

    async def list_all(self, user_id: str) -> list[Project]:
        cursor = self.connection.execute(
            "SELECT * FROM projects WHERE user_id = ? ORDER BY display_order ASC, name",
            (user_id,),
        )
        return [Project(**row_to_dict(row)) for row in cursor.fetchall()]

    async def get(self, user_id: str, project_id: str) -> Project:
        cursor = self.connection.execute(
            "SELECT * FROM projects WHERE id = ? AND user_id = ?",
            (project_id, user_id),
        )
        row = cursor.fetchone()

        if not row:
            raise NotFoundError(f"Project not found: {project_id}")

        return Project(**row_to_dict(row))

    async def find_by_todoist_id(
        self, user_id: str, todoist_id: str
    ) -> Project | None:
        cursor = self.connection.execute(
            "SELECT * FROM projects WHERE todoist_id = ? AND user_id = ?",
            (todoist_id, user_id),
        )
        row = cursor.fetchone()
        return Project(**row_to_dict(row)) if row else None

    async def list_linked(self, user_id: str) -> list[Project]:
        cursor = self.connection.execute(
            """SELECT * FROM projects
               WHERE user_id = ? AND todoist_id IS NOT NULL
               ORDER BY display_order ASC""",
            (user_id,),
        )
        return [Project(**row_to_dict(row)) for row in cursor.fetchall()]

    async def create(
        self,
        user_id: str,
        project_data: ProjectCreate,
        *,
        todoist_id: str | None = None,
        synced_at: datetime | None = None,
    ) -> Project:
        project_id = generate_uuid()
        now = now_iso()
        data = project_data.model_dump()

        order = data["order"]
        if order is None:
            order = self._next_order(user_id)

        try:
            self.connection.execute(
                """INSERT INTO projects (
                    id, todoist_id, name, color, is_favorite, is_inbox_project,
                    view_style, display_order, parent_id, user_id, synced_at,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    project_id,
                    todoist_id,
                    data["name"],
                    data["color"],
                    data["is_favorite"],
                    data["is_inbox_project"],
                    data["view_style"],
                    order,
                    data["parent_id"],
                    user_id,
                    to_db_value(synced_at),
                    now,
                    now,
                ),
            )
            self.connection.commit()
        except sqlite3.IntegrityError as e:
            self.connection.rollback()
            if "UNIQUE constraint" in str(e):
                raise ValidationError(
                    f"A project is already linked to Todoist project {todoist_id}"
                ) from e
            raise

        return await self.get(user_id, project_id)

    async def update(
        self,
        user_id: str,
        project_id: str,
        updates: ProjectUpdate,
        *,
        synced_at: datetime | None = None,
    ) -> Project:
        await self.get(user_id, project_id)

        update_dict = updates.model_dump(exclude_unset=True)
        if synced_at is not None:
            update_dict["synced_at"] = synced_at
        update_dict["updated_at"] = now_iso()

        set_clause, params = build_update_clause(update_dict)
        params.extend([project_id, user_id])
        self.connection.execute(
            f"UPDATE projects SET {set_clause} WHERE id = ? AND user_id = ?", params
        )
        self.connection.commit()

        return await self.get(user_id, project_id)

    async def delete(self, user_id: str, project_id: str) -> bool:
        # Sections cascade; tasks and child projects are detached by the FKs
        cursor = self.connection.execute(
            "DELETE FROM projects WHERE id = ? AND user_id = ?", (project_id, user_id)
        )
        self.connection.commit()
        return cursor.rowcount > 0

    def _next_order(self, user_id: str) -> int:
        cursor = self.connection.execute(
            "SELECT MAX(display_order) FROM projects WHERE user_id = ?", (user_id,)
        )
        last = cursor.fetchone()[0]
        return (last or 0) + 1
