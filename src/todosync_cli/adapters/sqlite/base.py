"""Shared connection handling for the SQLite repositories."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from todosync_cli.adapters.sqlite.connection import get_connection


class SqliteRepository:
    """Lazily opens the shared connection for *db_path*."""

    def __init__(self, db_path: str | Path | None = None):
        """Initialize the repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection
