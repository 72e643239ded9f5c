"""Task data models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Task(BaseModel):
    """A unit of work a pomodoro session can be bound to.

    Durations are whole seconds and never change after creation.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    description: str
    work_duration: int = Field(gt=0)
    short_break_duration: int = Field(gt=0)
    long_break_duration: int = Field(gt=0)
    pomodoros_finished: int = Field(default=0, ge=0)
    completed: bool = False
    completed_at: Optional[datetime] = None

    @property
    def durations(self) -> tuple[int, int, int]:
        """Return (work, short break, long break) in seconds."""
        return (
            self.work_duration,
            self.short_break_duration,
            self.long_break_duration,
        )


class TaskCreate(BaseModel):
    """Validated input for creating a task."""

    description: str = Field(min_length=1)
    work_duration: int = Field(gt=0)
    short_break_duration: int = Field(gt=0)
    long_break_duration: int = Field(gt=0)

    @field_validator("description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value
