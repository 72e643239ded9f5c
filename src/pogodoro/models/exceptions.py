"""Custom exceptions for Pogodoro."""


class PogodoroError(Exception):
    """Base exception for all Pogodoro errors."""


class InvalidInputError(PogodoroError):
    """Raised when durations or a description are rejected before any state changes."""


class NotFoundError(PogodoroError):
    """Raised when a referenced task does not exist."""

    def __init__(self, task_id: int):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StoreUnavailableError(PogodoroError):
    """Raised when the task database cannot be reached or written."""


class ClockMisuseError(PogodoroError):
    """Raised on an internal session clock invariant violation."""
