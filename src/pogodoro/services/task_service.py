"""Task service - Business logic for task operations.

This service layer sits between commands and repositories. Commands speak in
minutes and task ids; the store and the session controller speak in seconds
and Task models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from pogodoro.models import Task
from pogodoro.models.focus.controller import (
    PhaseChangedSink,
    SessionConfig,
    SessionController,
)
from pogodoro.models.focus.cycling import Durations
from pogodoro.repositories import TaskRepository


@dataclass(frozen=True)
class TaskOverview:
    """Tasks grouped the way `pogodoro list` shows them."""

    new: list[Task]
    in_progress: list[Task]
    recently_completed: list[Task]

    def to_dict(self) -> dict[str, list[dict]]:
        return {
            "new": [t.model_dump(mode="json") for t in self.new],
            "in_progress": [t.model_dump(mode="json") for t in self.in_progress],
            "recently_completed": [
                t.model_dump(mode="json") for t in self.recently_completed
            ],
        }


class TaskService:
    """Service for task business logic."""

    def __init__(self, task_repository: TaskRepository):
        self.repository = task_repository

    def add_task(
        self,
        description: str,
        work_minutes: float,
        short_break_minutes: float,
        long_break_minutes: float,
    ) -> Task:
        """Create a task from minute durations and return it.

        Raises:
            InvalidInputError: If a duration is not positive or the description is blank
        """
        durations = Durations.from_minutes(
            work_minutes, short_break_minutes, long_break_minutes
        )
        task_id = self.repository.create_task(
            description,
            durations.work,
            durations.short_break,
            durations.long_break,
        )
        return self.repository.get_task(task_id)

    def get_task(self, task_id: int) -> Task:
        return self.repository.get_task(task_id)

    def overview(self, hours: int = 24) -> TaskOverview:
        """Split open tasks into new / in progress, plus recently completed ones."""
        incomplete = self.repository.list_incomplete_tasks()
        return TaskOverview(
            new=[t for t in incomplete if t.pomodoros_finished == 0],
            in_progress=[t for t in incomplete if t.pomodoros_finished > 0],
            recently_completed=self.repository.list_recently_completed(hours=hours),
        )

    def complete_task(self, task_id: int) -> Task:
        """Mark a task completed (idempotent) and return its final state."""
        self.repository.mark_completed(task_id)
        return self.repository.get_task(task_id)

    def cycles_per_day(self, days: int = 30) -> list[tuple[date, int]]:
        return self.repository.cycles_per_day(days=days)

    def start_task_session(
        self,
        task_id: int,
        config: SessionConfig,
        notifier: PhaseChangedSink | None = None,
    ) -> SessionController:
        """Session bound to an existing task, using the task's durations.

        Raises:
            NotFoundError: If the task does not exist
        """
        task = self.repository.get_task(task_id)
        return SessionController(
            task, store=self.repository, config=config, notifier=notifier
        )


def start_free_session(
    work_minutes: float,
    short_break_minutes: float,
    long_break_minutes: float,
    config: SessionConfig,
    notifier: PhaseChangedSink | None = None,
) -> SessionController:
    """Session with no bound task; nothing is written to the store."""
    durations = Durations.from_minutes(
        work_minutes, short_break_minutes, long_break_minutes
    )
    return SessionController(overrides=durations, config=config, notifier=notifier)


def get_task_service() -> TaskService:
    """TaskService over the SQLite store at the configured path."""
    from pogodoro.adapters.sqlite import SqliteTaskRepository
    from pogodoro.config import get_config_manager

    return TaskService(SqliteTaskRepository(get_config_manager().db_path))
