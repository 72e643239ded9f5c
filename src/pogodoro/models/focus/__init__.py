"""Pomodoro session core: clock, cycle state machine and session controller."""

from .clock import ClockState, SessionClock
from .controller import AdvanceResult, SessionConfig, SessionController, SessionSnapshot
from .cycling import (
    DEFAULT_LONG_BREAK_INTERVAL,
    CycleStateMachine,
    Durations,
    Phase,
    PhaseChanged,
    SkipPolicy,
)

__all__ = [
    "ClockState",
    "SessionClock",
    "CycleStateMachine",
    "Durations",
    "Phase",
    "PhaseChanged",
    "SkipPolicy",
    "DEFAULT_LONG_BREAK_INTERVAL",
    "SessionConfig",
    "SessionController",
    "SessionSnapshot",
    "AdvanceResult",
]
