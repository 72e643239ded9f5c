"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

from pydantic import ValidationError

from pogodoro.adapters.sqlite.connection import DatabaseConnection, get_connection
from pogodoro.adapters.sqlite.utils import (
    now_iso,
    parse_datetime,
    row_to_dict,
    translate_sqlite_errors,
)
from pogodoro.models import (
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
    Task,
    TaskCreate,
)
from pogodoro.repositories import TaskRepository

_TASK_COLUMNS = """
    id, desc, work_secs, short_break_secs, long_break_secs,
    pomos_finished, completed, completed_at
"""


def _row_to_task(row: sqlite3.Row) -> Task:
    data = row_to_dict(row)
    return Task(
        id=data["id"],
        description=data["desc"],
        work_duration=data["work_secs"],
        short_break_duration=data["short_break_secs"],
        long_break_duration=data["long_break_secs"],
        pomodoros_finished=data["pomos_finished"],
        completed=bool(data["completed"]),
        completed_at=parse_datetime(data["completed_at"]),
    )


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of the task store."""

    def __init__(self, db_path: str | Path | None = None):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = get_connection(self.db_path)
            except (sqlite3.Error, RuntimeError, OSError) as e:
                raise StoreUnavailableError(f"Cannot open task database: {e}") from e
        return self._connection

    def create_task(
        self,
        description: str,
        work_secs: int,
        short_break_secs: int,
        long_break_secs: int,
    ) -> int:
        """Create a new task."""
        try:
            task_data = TaskCreate(
                description=description,
                work_duration=work_secs,
                short_break_duration=short_break_secs,
                long_break_duration=long_break_secs,
            )
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            raise InvalidInputError(f"Invalid task ({fields}): {e}") from e

        with translate_sqlite_errors("creating a task"), self.connection as conn:
            cursor = conn.execute(
                """
                INSERT INTO tasks (desc, work_secs, short_break_secs, long_break_secs)
                VALUES (?, ?, ?, ?)
                """,
                (
                    task_data.description,
                    task_data.work_duration,
                    task_data.short_break_duration,
                    task_data.long_break_duration,
                ),
            )
        return cursor.lastrowid

    def list_incomplete_tasks(self) -> list[Task]:
        """List tasks that are not completed, oldest first."""
        with translate_sqlite_errors("listing tasks"):
            rows = self.connection.execute(
                f"SELECT {_TASK_COLUMNS} FROM tasks WHERE completed = 0 ORDER BY id ASC"
            ).fetchall()
        return [_row_to_task(row) for row in rows]

    def get_task(self, task_id: int) -> Task:
        """Get a specific task by ID."""
        with translate_sqlite_errors("reading a task"):
            row = self.connection.execute(
                f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,)
            ).fetchone()
        if row is None:
            raise NotFoundError(task_id)
        return _row_to_task(row)

    def increment_pomodoro_count(self, task_id: int) -> int:
        """Add one finished pomodoro and log the cycle in one transaction.

        The counter is bumped by a single UPDATE statement so concurrent
        writers can never lose an increment.
        """
        with translate_sqlite_errors("recording a pomodoro"), self.connection as conn:
            cursor = DatabaseConnection.execute_with_retry(
                conn,
                "UPDATE tasks SET pomos_finished = pomos_finished + 1 WHERE id = ?",
                (task_id,),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(task_id)
            conn.execute(
                "INSERT INTO cycles (task_id, created_at) VALUES (?, ?)",
                (task_id, now_iso()),
            )
            row = conn.execute(
                "SELECT pomos_finished FROM tasks WHERE id = ?", (task_id,)
            ).fetchone()
        return row["pomos_finished"]

    def mark_completed(self, task_id: int) -> None:
        """Mark a task completed, keeping the first completion time."""
        with translate_sqlite_errors("completing a task"), self.connection as conn:
            cursor = conn.execute(
                """
                UPDATE tasks
                SET completed = 1, completed_at = COALESCE(completed_at, ?)
                WHERE id = ?
                """,
                (now_iso(), task_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(task_id)

    def list_recently_completed(
        self, hours: int = 24, now: datetime | None = None
    ) -> list[Task]:
        """List tasks completed within the last *hours*, newest first."""
        now = now or datetime.now(UTC)
        since = (now - timedelta(hours=hours)).astimezone(UTC).isoformat()
        with translate_sqlite_errors("listing completed tasks"):
            rows = self.connection.execute(
                f"""
                SELECT {_TASK_COLUMNS} FROM tasks
                WHERE completed = 1 AND completed_at >= ?
                ORDER BY completed_at DESC
                """,
                (since,),
            ).fetchall()
        return [_row_to_task(row) for row in rows]

    def cycles_per_day(
        self, days: int = 30, now: datetime | None = None
    ) -> list[tuple[date, int]]:
        """Count credited pomodoros per local calendar day, oldest first."""
        if days <= 0:
            raise InvalidInputError("days must be positive")

        now = (now or datetime.now(UTC)).astimezone()
        today = now.date()
        first_day = today - timedelta(days=days - 1)
        window_start = datetime.combine(first_day, datetime.min.time(), now.tzinfo)

        with translate_sqlite_errors("reading cycle history"):
            rows = self.connection.execute(
                "SELECT created_at FROM cycles WHERE created_at >= ?",
                (window_start.astimezone(UTC).isoformat(),),
            ).fetchall()

        counts = {first_day + timedelta(days=offset): 0 for offset in range(days)}
        for row in rows:
            day = parse_datetime(row["created_at"]).astimezone(now.tzinfo).date()
            if day in counts:
                counts[day] += 1
        return sorted(counts.items())
