"""SQLite implementation of SectionRepository.

Sections have no user column; ownership is resolved through the parent
project on every query.
"""

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
from todosync_cli.models import Section, SectionCreate, SectionUpdate
from todosync_cli.repositories import SectionRepository

_OWNED_SECTIONS = """SELECT s.* FROM sections s
    JOIN projects p ON p.id = s.project_id
    WHERE p.user_id = ?"""


class SqliteSectionRepository(SqliteRepository, SectionRepository):
    """SQLite implementation of section repository."""

    async def list_by_project(self, user_id: str, project_id: str) -> list[Section]:
        cursor = self.connection.execute(
            _OWNED_SECTIONS + " AND s.project_id = ? ORDER BY s.display_order ASC",
            (user_id, project_id),
        )
        return [Section(**row_to_dict(row)) for row in cursor.fetchall()]

    async def get(self, user_id: str, section_id: str) -> Section:
        cursor = self.connection.execute(
            _OWNED_SECTIONS + " AND s.id = ?", (user_id, section_id)
        )
        row = cursor.fetchone()

        if not row:
            raise NotFoundError(f"Section not found: {section_id}")

        return Section(**row_to_dict(row))

    async def find_by_todoist_id(
        self, user_id: str, todoist_id: str
    ) -> Section | None:
        cursor = self.connection.execute(
            _OWNED_SECTIONS + " AND s.todoist_id = ?", (user_id, todoist_id)
        )
        row = cursor.fetchone()
        return Section(**row_to_dict(row)) if row else None

    async def list_linked(self, user_id: str) -> list[Section]:
        cursor = self.connection.execute(
            _OWNED_SECTIONS + " AND s.todoist_id IS NOT NULL ORDER BY s.display_order",
            (user_id,),
        )
        return [Section(**row_to_dict(row)) for row in cursor.fetchall()]

    async def create(
        self,
        user_id: str,
        section_data: SectionCreate,
        *,
        todoist_id: str | None = None,
        synced_at: datetime | None = None,
    ) -> Section:
        self._check_project(user_id, section_data.project_id)

        section_id = generate_uuid()
        now = now_iso()

        order = section_data.order
        if order is None:
            order = self._next_order(section_data.project_id)

        try:
            self.connection.execute(
                """INSERT INTO sections (
                    id, todoist_id, name, display_order, project_id, synced_at,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    section_id,
                    todoist_id,
                    section_data.name,
                    order,
                    section_data.project_id,
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
                    f"A section of this project is already linked to Todoist "
                    f"section {todoist_id}"
                ) from e
            raise

        return await self.get(user_id, section_id)

    async def update(
        self,
        user_id: str,
        section_id: str,
        updates: SectionUpdate,
        *,
        synced_at: datetime | None = None,
    ) -> Section:
        await self.get(user_id, section_id)

        update_dict = updates.model_dump(exclude_unset=True)
        if update_dict.get("project_id") is not None:
            self._check_project(user_id, update_dict["project_id"])
        if synced_at is not None:
            update_dict["synced_at"] = synced_at
        update_dict["updated_at"] = now_iso()

        set_clause, params = build_update_clause(update_dict)
        params.append(section_id)
        try:
            self.connection.execute(
                f"UPDATE sections SET {set_clause} WHERE id = ?", params
            )
            self.connection.commit()
        except sqlite3.IntegrityError as e:
            self.connection.rollback()
            if "UNIQUE constraint" in str(e):
                raise ValidationError(
                    "The target project already has a section linked to the "
                    "same Todoist section"
                ) from e
            raise

        return await self.get(user_id, section_id)

    async def delete(self, user_id: str, section_id: str) -> bool:
        try:
            await self.get(user_id, section_id)
        except NotFoundError:
            return False

        cursor = self.connection.execute(
            "DELETE FROM sections WHERE id = ?", (section_id,)
        )
        self.connection.commit()
        return cursor.rowcount > 0

    def _check_project(self, user_id: str, project_id: str) -> None:
        row = self.connection.execute(
            "SELECT 1 FROM projects WHERE id = ? AND user_id = ?",
            (project_id, user_id),
        ).fetchone()
        if not row:
            raise NotFoundError(f"Project not found: {project_id}")

    def _next_order(self, project_id: str) -> int:
        cursor: sqlite3.Cursor = self.connection.execute(
            "SELECT MAX(display_order) FROM sections WHERE project_id = ?",
            (project_id,),
        )
        last = cursor.fetchone()[0]
        return (last or 0) + 1
