"""Pogodoro domain models.

Pydantic models for persisted entities plus the exception hierarchy shared
by the store, the session core, and the command layer.
"""

from .exceptions import (
    ClockMisuseError,
    InvalidInputError,
    NotFoundError,
    PogodoroError,
    StoreUnavailableError,
)
from .task import Task, TaskCreate

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    # Errors
    "PogodoroError",
    "InvalidInputError",
    "NotFoundError",
    "StoreUnavailableError",
    "ClockMisuseError",
]
