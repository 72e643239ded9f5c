"""Cycle log migration.

Adds the append-only cycles table and the tasks.completed_at column used to
show tasks finished during the last day.
"""

import sqlite3

from pogodoro.adapters.sqlite import schema
from .runner import Migration


class CycleLogMigration(Migration):
    """Migration 002: Record credited cycles and completion time."""

    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Add cycles log and task completion timestamp"

    def up(self, connection: sqlite3.Connection) -> None:
        columns = {
            row[1] for row in connection.execute("PRAGMA table_info(tasks)").fetchall()
        }
        if "completed_at" not in columns:
            connection.execute(schema.ADD_TASKS_COMPLETED_AT)

        connection.execute(schema.CREATE_CYCLES_TABLE)

        for index_sql in schema.CREATE_CYCLE_INDEXES:
            connection.execute(index_sql)


cycle_log_migration = CycleLogMigration()
