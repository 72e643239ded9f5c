"""Session controller binding the cycle state machine to a task.

The controller is the only object the renderer talks to. It owns one
CycleStateMachine, one SessionClock, and optionally one Task. Every credited
Work → Break transition is written to the task store before the new phase
becomes visible through snapshot() or the notification sink.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pogodoro.models.exceptions import (
    InvalidInputError,
    NotFoundError,
    PogodoroError,
    StoreUnavailableError,
)
from pogodoro.models.task import Task
from pogodoro.repositories import TaskRepository

from .clock import ClockState, SessionClock
from .cycling import (
    DEFAULT_LONG_BREAK_INTERVAL,
    CycleStateMachine,
    Durations,
    Phase,
    PhaseChanged,
    SkipPolicy,
)

logger = logging.getLogger(__name__)

PhaseChangedSink = Callable[[PhaseChanged], None]


@dataclass(frozen=True)
class SessionConfig:
    """Process-wide settings the controller needs, passed in explicitly."""

    long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL
    skip_policy: SkipPolicy = SkipPolicy.NEVER


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of advance() or skip().

    ``event`` is None when no transition happened. ``error`` carries a store
    failure that left a credit unpersisted; the transition itself stands.
    """

    event: PhaseChanged | None = None
    new_count: int | None = None
    error: PogodoroError | None = None

    @property
    def changed(self) -> bool:
        return self.event is not None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a running session for rendering."""

    phase: Phase
    remaining: float
    duration: float
    clock_state: ClockState
    pomodoros_finished_this_session: int
    bound_task: Task | None
    task_completed: bool
    unpersisted_credits: int
    completed_work_cycles_in_set: int
    long_break_interval: int
    progress_dots: str


class SessionController:
    """Drives one pomodoro session, bound to a task or free."""

    def __init__(
        self,
        task: Task | None = None,
        overrides: Durations | tuple[int, int, int] | None = None,
        *,
        store: TaskRepository | None = None,
        config: SessionConfig | None = None,
        notifier: PhaseChangedSink | None = None,
    ):
        """Create a session and start its first work phase.

        Args:
            task: Task to credit finished pomodoros to, or None for a free session
            overrides: Durations in seconds; take precedence over the task's
            store: Task store, required when a task is bound
            config: Long break cadence and skip policy
            notifier: Called once per phase change, after any store write

        Raises:
            InvalidInputError: If no durations are available, an override is
                not positive, or a task is bound without a store
        """
        if overrides is not None:
            durations = (
                overrides if isinstance(overrides, Durations) else Durations(*overrides)
            )
        elif task is not None:
            durations = Durations(*task.durations)
        else:
            raise InvalidInputError(
                "A session needs either a task or explicit work/short/long durations"
            )
        if task is not None and store is None:
            raise InvalidInputError("A task-bound session needs a task store")

        config = config or SessionConfig()
        self._task = task
        self._store = store
        self._notifier = notifier
        self._machine = CycleStateMachine(
            durations,
            long_break_interval=config.long_break_interval,
            skip_policy=config.skip_policy,
        )
        self._clock = SessionClock()
        self._clock.start(self._machine.duration_for(Phase.WORK))
        self._credits = 0
        self._unpersisted = 0
        self._task_completed = task.completed if task is not None else False

        logger.info(
            "session started: task=%s durations=%s/%s/%s",
            task.id if task is not None else "free",
            durations.work,
            durations.short_break,
            durations.long_break,
        )

    @property
    def task(self) -> Task | None:
        return self._task

    @property
    def phase(self) -> Phase:
        return self._machine.phase

    def advance(self, elapsed: float) -> AdvanceResult:
        """Feed *elapsed* seconds to the clock and transition on expiry."""
        self._clock.tick(elapsed)
        if not self._clock.is_expired():
            return AdvanceResult()

        carry = self._clock.overflow
        return self._apply(self._machine.expire(), carry=carry)

    def skip(self) -> AdvanceResult:
        """Jump to the next phase immediately."""
        return self._apply(self._machine.skip_phase(), carry=0.0)

    def pause(self) -> None:
        self._clock.pause()

    def resume(self) -> None:
        self._clock.resume()

    def toggle_pause(self) -> None:
        self._clock.toggle_pause()

    def complete_task(self) -> Task:
        """Mark the bound task completed. The session keeps running.

        Raises:
            InvalidInputError: If this is a free session
            NotFoundError: If the task no longer exists
        """
        if self._task is None:
            raise InvalidInputError("No task is bound to this session")
        self._store.mark_completed(self._task.id)
        self._task_completed = True
        self._task = self._task.model_copy(update={"completed": True})
        logger.info("task %s marked completed from session", self._task.id)
        return self._task

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self._machine.phase,
            remaining=self._clock.remaining,
            duration=self._clock.duration,
            clock_state=self._clock.state,
            pomodoros_finished_this_session=self._credits,
            bound_task=self._task,
            task_completed=self._task_completed,
            unpersisted_credits=self._unpersisted,
            completed_work_cycles_in_set=self._machine.completed_work_cycles_in_set,
            long_break_interval=self._machine.long_break_interval,
            progress_dots=self._machine.progress_dots(),
        )

    def _apply(self, event: PhaseChanged, carry: float) -> AdvanceResult:
        new_count = None
        error = None

        if event.credited:
            self._credits += 1
            if self._task is not None:
                new_count, error = self._persist_credit(self._task.id)

        duration = self._machine.duration_for(event.to_phase)
        self._clock.start(duration)
        if 0 < carry < duration:
            self._clock.tick(carry)

        logger.info(
            "phase changed: %s -> %s (credited=%s, skipped=%s)",
            event.from_phase.value,
            event.to_phase.value,
            event.credited,
            event.skipped,
        )
        if self._notifier is not None:
            try:
                self._notifier(event)
            except Exception:
                # The transition and any credit are already recorded
                logger.warning(
                    "notifier failed for %s -> %s",
                    event.from_phase.value,
                    event.to_phase.value,
                    exc_info=True,
                )

        return AdvanceResult(event=event, new_count=new_count, error=error)

    def _persist_credit(self, task_id: int) -> tuple[int | None, PogodoroError | None]:
        try:
            new_count = self._store.increment_pomodoro_count(task_id)
        except (NotFoundError, StoreUnavailableError) as e:
            self._unpersisted += 1
            logger.warning(
                "pomodoro credit for task %s not persisted (%d pending): %s",
                task_id,
                self._unpersisted,
                e,
            )
            return None, e

        self._task = self._task.model_copy(update={"pomodoros_finished": new_count})
        return new_count, None
