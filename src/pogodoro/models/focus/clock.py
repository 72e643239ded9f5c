"""Countdown clock for a single pomodoro phase."""

from __future__ import annotations

from enum import Enum

from pogodoro.models.exceptions import ClockMisuseError


class ClockState(str, Enum):
    """Run state of a SessionClock."""

    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


class SessionClock:
    """Countdown driven by explicit elapsed-time ticks.

    The clock never reads wall time itself; the caller measures elapsed
    seconds and feeds them to tick(). It knows nothing about phases or tasks.
    """

    def __init__(self) -> None:
        self._duration = 0.0
        self._remaining = 0.0
        self._overflow = 0.0
        self._state = ClockState.PAUSED

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def remaining(self) -> float:
        return self._remaining

    @property
    def elapsed(self) -> float:
        return self._duration - self._remaining

    @property
    def overflow(self) -> float:
        """Seconds the last tick ran past zero (0 unless expired)."""
        return self._overflow

    def start(self, duration: float) -> None:
        """Arm the clock with *duration* seconds and start it running."""
        if duration <= 0:
            raise ClockMisuseError(f"clock duration must be positive, got {duration}")
        self._duration = float(duration)
        self._remaining = float(duration)
        self._overflow = 0.0
        self._state = ClockState.RUNNING

    def pause(self) -> None:
        if self._state is ClockState.RUNNING:
            self._state = ClockState.PAUSED

    def resume(self) -> None:
        if self._state is ClockState.PAUSED and self._duration > 0:
            self._state = ClockState.RUNNING

    def toggle_pause(self) -> None:
        if self._state is ClockState.RUNNING:
            self.pause()
        else:
            self.resume()

    def tick(self, elapsed: float) -> None:
        """Count down by *elapsed* seconds while running."""
        if self._state is not ClockState.RUNNING or elapsed <= 0:
            return
        self._remaining -= elapsed
        if self._remaining <= 0:
            self._overflow = -self._remaining
            self._remaining = 0.0
            self._state = ClockState.EXPIRED

    def is_expired(self) -> bool:
        return self._state is ClockState.EXPIRED

    def is_paused(self) -> bool:
        return self._state is ClockState.PAUSED
