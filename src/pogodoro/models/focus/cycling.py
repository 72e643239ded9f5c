"""Work / break cycle state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pogodoro.models.exceptions import InvalidInputError

DEFAULT_LONG_BREAK_INTERVAL = 4


class Phase(str, Enum):
    """Interval type the timer is currently in."""

    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not Phase.WORK

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def emoji(self) -> str:
        if self is Phase.WORK:
            return "🍅"
        if self is Phase.SHORT_BREAK:
            return "☕"
        return "🌴"


class SkipPolicy(str, Enum):
    """Whether skipping a work phase credits a pomodoro."""

    NEVER = "never"
    CREDIT = "credit"


@dataclass(frozen=True)
class Durations:
    """Phase lengths in seconds."""

    work: int
    short_break: int
    long_break: int

    def __post_init__(self) -> None:
        for name in ("work", "short_break", "long_break"):
            if getattr(self, name) <= 0:
                raise InvalidInputError(f"{name} duration must be a positive number of seconds")

    @classmethod
    def from_minutes(cls, work: float, short_break: float, long_break: float) -> Durations:
        return cls(
            work=int(work * 60),
            short_break=int(short_break * 60),
            long_break=int(long_break * 60),
        )

    def for_phase(self, phase: Phase) -> int:
        if phase is Phase.WORK:
            return self.work
        if phase is Phase.SHORT_BREAK:
            return self.short_break
        return self.long_break


@dataclass(frozen=True)
class PhaseChanged:
    """One transition of the cycle. ``credited`` marks a finished pomodoro."""

    from_phase: Phase
    to_phase: Phase
    credited: bool
    skipped: bool = False


class CycleStateMachine:
    """Sequences Work → ShortBreak → ... → Work → LongBreak phases.

    Every transition alternates between Work and a break. A long break
    replaces the short one after every ``long_break_interval`` work phases.
    """

    def __init__(
        self,
        durations: Durations,
        long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL,
        skip_policy: SkipPolicy = SkipPolicy.NEVER,
    ):
        if long_break_interval < 1:
            raise InvalidInputError("long_break_interval must be at least 1")
        self.durations = durations
        self.long_break_interval = long_break_interval
        self.skip_policy = skip_policy
        self.phase = Phase.WORK
        self.completed_work_cycles_in_set = 0

    def duration_for(self, phase: Phase | None = None) -> int:
        """Seconds configured for *phase* (default: the current one)."""
        return self.durations.for_phase(self.phase if phase is None else phase)

    def next_phase(self) -> Phase:
        """The phase a transition from the current one would enter."""
        if self.phase is Phase.WORK:
            if (self.completed_work_cycles_in_set + 1) % self.long_break_interval == 0:
                return Phase.LONG_BREAK
            return Phase.SHORT_BREAK
        return Phase.WORK

    def expire(self) -> PhaseChanged:
        """Handle the current phase's clock reaching zero."""
        return self._transition(skipped=False)

    def skip_phase(self) -> PhaseChanged:
        """Leave the current phase early.

        The transition is identical to expiry; a skipped work phase credits a
        pomodoro only under SkipPolicy.CREDIT.
        """
        return self._transition(skipped=True)

    def _transition(self, skipped: bool) -> PhaseChanged:
        from_phase = self.phase
        to_phase = self.next_phase()

        if from_phase is Phase.WORK:
            self.completed_work_cycles_in_set += 1
            credited = not skipped or self.skip_policy is SkipPolicy.CREDIT
        else:
            credited = False
            if from_phase is Phase.LONG_BREAK:
                # New set starts after every long break
                self.completed_work_cycles_in_set = 0

        self.phase = to_phase
        return PhaseChanged(
            from_phase=from_phase,
            to_phase=to_phase,
            credited=credited,
            skipped=skipped,
        )

    def progress_dots(self) -> str:
        """Position within the current set, e.g. ``⬤ ◉ ○ ○``."""
        dots = []
        done = self.completed_work_cycles_in_set
        for i in range(1, self.long_break_interval + 1):
            if i <= done:
                dots.append("⬤")
            elif i == done + 1 and self.phase is Phase.WORK:
                dots.append("◉")
            else:
                dots.append("○")
        return " ".join(dots)
