"""Repository abstraction layer for Pogodoro.

This module defines the abstract base class (interface) for task persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

The session core only talks to this interface, so it can be driven by the
SQLite adapter in production and by an in-memory fake in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from pogodoro.models import Task


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Every operation is synchronous and atomic with respect to the task table.
    """

    @abstractmethod
    def create_task(
        self,
        description: str,
        work_secs: int,
        short_break_secs: int,
        long_break_secs: int,
    ) -> int:
        """Create a new task with zeroed counters.

        Args:
            description: Non-empty task description
            work_secs: Work phase length in seconds
            short_break_secs: Short break length in seconds
            long_break_secs: Long break length in seconds

        Returns:
            Identifier assigned by the store

        Raises:
            InvalidInputError: If a duration is not positive or the description is empty
        """
        raise NotImplementedError(
            "TaskRepository.create_task() must be implemented by adapter"
        )

    @abstractmethod
    def list_incomplete_tasks(self) -> list[Task]:
        """List tasks that are not completed, ordered by identifier ascending."""
        raise NotImplementedError(
            "TaskRepository.list_incomplete_tasks() must be implemented by adapter"
        )

    @abstractmethod
    def get_task(self, task_id: int) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.get_task() must be implemented by adapter"
        )

    @abstractmethod
    def increment_pomodoro_count(self, task_id: int) -> int:
        """Atomically add one finished pomodoro to a task.

        Returns:
            The task's new pomodoros_finished value

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.increment_pomodoro_count() must be implemented by adapter"
        )

    @abstractmethod
    def mark_completed(self, task_id: int) -> None:
        """Mark a task as completed. Completing twice is a no-op.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.mark_completed() must be implemented by adapter"
        )

    @abstractmethod
    def list_recently_completed(
        self, hours: int = 24, now: datetime | None = None
    ) -> list[Task]:
        """List tasks completed within the last *hours*, newest first."""
        raise NotImplementedError(
            "TaskRepository.list_recently_completed() must be implemented by adapter"
        )

    @abstractmethod
    def cycles_per_day(
        self, days: int = 30, now: datetime | None = None
    ) -> list[tuple[date, int]]:
        """Count credited pomodoros per local calendar day, oldest first.

        Exactly *days* entries are returned, ending with today.
        """
        raise NotImplementedError(
            "TaskRepository.cycles_per_day() must be implemented by adapter"
        )
