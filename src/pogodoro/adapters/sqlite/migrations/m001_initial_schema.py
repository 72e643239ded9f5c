"""Initial database schema migration.

Creates the tasks table with per-task durations and progress counters.
"""

import sqlite3

from pogodoro.adapters.sqlite import schema
from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create the tasks table."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        """Create the tasks table and its indexes."""
        connection.execute(schema.CREATE_TASKS_TABLE)

        for index_sql in schema.CREATE_TASK_INDEXES:
            connection.execute(index_sql)


initial_migration = InitialSchemaMigration()
