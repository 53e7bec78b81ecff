"""Initial database schema migration.

Creates users, projects, sections, labels, tasks and the task_labels
junction table, plus their indexes.
"""

import sqlite3

from todosync_cli.adapters.sqlite import schema
from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create initial database schema."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        for create_statement in schema.ALL_TABLES:
            connection.execute(create_statement)

        for index_sql in schema.ALL_INDEXES:
            connection.execute(index_sql)


# Export singleton instance
initial_migration = InitialSchemaMigration()

ALL_MIGRATIONS = [initial_migration]
