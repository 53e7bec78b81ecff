"""SQLite implementation of UserRepository."""

from __future__ import annotations

import sqlite3

from todosync_cli.adapters.sqlite.base import SqliteRepository
from todosync_cli.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict
from todosync_cli.exceptions import NotFoundError, ValidationError
from todosync_cli.models import User
from todosync_cli.repositories import UserRepository


class SqliteUserRepository(SqliteRepository, UserRepository):
    """SQLite implementation of user repository."""

    async def create(self, email: str, name: str | None = None) -> User:
        user_id = generate_uuid()
        now = now_iso()

        try:
            self.connection.execute(
                """INSERT INTO users (id, email, name, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (user_id, email, name, now, now),
            )
            self.connection.commit()
        except sqlite3.IntegrityError as e:
            self.connection.rollback()
            raise ValidationError(f"User already exists: {email}") from e

        return await self.get(user_id)

    async def get(self, user_id: str) -> User:
        row = self.connection.execute(
            "SELECT * FROM users WHERE id = ?", (user_id,)
        ).fetchone()

        if not row:
            raise NotFoundError(f"User not found: {user_id}")

        return User(**row_to_dict(row))

    async def list_all(self) -> list[User]:
        cursor = self.connection.execute("SELECT * FROM users ORDER BY created_at, email")
        return [User(**row_to_dict(row)) for row in cursor.fetchall()]

    async def get_todoist_token(self, user_id: str) -> str | None:
        user = await self.get(user_id)
        return user.todoist_api_token or None

    async def set_todoist_token(self, user_id: str, token: str | None) -> None:
        await self.get(user_id)

        if token is not None:
            token = token.strip() or None

        self.connection.execute(
            "UPDATE users SET todoist_api_token = ?, updated_at = ? WHERE id = ?",
            (token, now_iso(), user_id),
        )
        self.connection.commit()
