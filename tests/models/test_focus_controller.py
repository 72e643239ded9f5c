"""Unit tests for SessionController.

Uses an in-memory TaskRepository so failure modes can be injected, plus a
few end-to-end scenarios against the real SQLite store.
"""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest

from pogodoro.models import InvalidInputError, NotFoundError, StoreUnavailableError, Task
from pogodoro.models.focus import controller as controller_mod
from pogodoro.models.focus.clock import ClockState
from pogodoro.models.focus.controller import SessionConfig, SessionController
from pogodoro.models.focus.cycling import Durations, Phase, SkipPolicy
from pogodoro.repositories import TaskRepository


class MemoryTaskRepository(TaskRepository):
    """Dict-backed store with switchable failures."""

    def __init__(self):
        self.tasks: dict[int, Task] = {}
        self.increment_calls: list[int] = []
        self.fail_with: Exception | None = None

    def create_task(self, description, work_secs, short_break_secs, long_break_secs):
        task_id = len(self.tasks) + 1
        self.tasks[task_id] = Task(
            id=task_id,
            description=description,
            work_duration=work_secs,
            short_break_duration=short_break_secs,
            long_break_duration=long_break_secs,
        )
        return task_id

    def list_incomplete_tasks(self):
        return [t for t in self.tasks.values() if not t.completed]

    def get_task(self, task_id):
        if task_id not in self.tasks:
            raise NotFoundError(task_id)
        return self.tasks[task_id]

    def increment_pomodoro_count(self, task_id):
        self.increment_calls.append(task_id)
        if self.fail_with is not None:
            raise self.fail_with
        task = self.get_task(task_id)
        self.tasks[task_id] = task.model_copy(
            update={"pomodoros_finished": task.pomodoros_finished + 1}
        )
        return self.tasks[task_id].pomodoros_finished

    def mark_completed(self, task_id):
        task = self.get_task(task_id)
        self.tasks[task_id] = task.model_copy(update={"completed": True})

    def list_recently_completed(self, hours=24, now: datetime | None = None):
        return []

    def cycles_per_day(self, days=30, now: datetime | None = None) -> list[tuple[date, int]]:
        return []


@pytest.fixture()
def store() -> MemoryTaskRepository:
    return MemoryTaskRepository()


@pytest.fixture()
def task(store) -> Task:
    return store.get_task(store.create_task("Write report", 1500, 300, 900))


def _bound(store, task, **kwargs) -> SessionController:
    return SessionController(task, store=store, **kwargs)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_bound_session_uses_task_durations(self, store, task):
        c = _bound(store, task)
        snap = c.snapshot()
        assert snap.phase is Phase.WORK
        assert snap.remaining == 1500
        assert snap.clock_state is ClockState.RUNNING
        assert snap.bound_task == task

    def test_free_session_with_overrides(self):
        c = SessionController(overrides=(60, 10, 30))
        snap = c.snapshot()
        assert snap.bound_task is None
        assert snap.remaining == 60

    def test_overrides_take_precedence_over_task(self, store, task):
        c = SessionController(task, overrides=Durations(10, 5, 7), store=store)
        assert c.snapshot().remaining == 10

    def test_no_durations_rejected(self):
        with pytest.raises(InvalidInputError):
            SessionController()

    @pytest.mark.parametrize("overrides", [(0, 5, 15), (25, -5, 15), (25, 5, 0)])
    def test_non_positive_overrides_rejected(self, overrides):
        with pytest.raises(InvalidInputError):
            SessionController(overrides=overrides)

    def test_bound_task_without_store_rejected(self, task):
        with pytest.raises(InvalidInputError):
            SessionController(task)


# ---------------------------------------------------------------------------
# advance
# ---------------------------------------------------------------------------


class TestAdvance:
    def test_partial_tick_reports_no_change(self, store, task):
        c = _bound(store, task)
        result = c.advance(100)
        assert not result.changed
        assert c.snapshot().remaining == 1400

    def test_advance_zero_is_idempotent(self, store, task):
        c = _bound(store, task)
        c.advance(1500)
        before = c.snapshot()
        for _ in range(5):
            assert not c.advance(0).changed
        after = c.snapshot()
        assert after.phase is before.phase
        assert after.pomodoros_finished_this_session == before.pomodoros_finished_this_session
        assert store.increment_calls == [task.id]

    def test_work_expiry_credits_task_once(self, store, task):
        c = _bound(store, task)
        result = c.advance(1500)
        assert result.event.from_phase is Phase.WORK
        assert result.event.to_phase is Phase.SHORT_BREAK
        assert result.event.credited
        assert result.new_count == 1
        assert store.tasks[task.id].pomodoros_finished == 1
        assert c.snapshot().bound_task.pomodoros_finished == 1

    def test_break_expiry_does_not_credit(self, store, task):
        c = _bound(store, task)
        c.advance(1500)
        result = c.advance(300)
        assert result.event.to_phase is Phase.WORK
        assert result.new_count is None
        assert store.tasks[task.id].pomodoros_finished == 1

    def test_new_phase_is_armed_and_running(self, store, task):
        c = _bound(store, task)
        c.advance(1500)
        snap = c.snapshot()
        assert snap.remaining == 300
        assert snap.duration == 300
        assert snap.clock_state is ClockState.RUNNING

    def test_overflow_carries_into_next_phase(self, store, task):
        c = _bound(store, task)
        c.advance(1502)
        assert c.snapshot().remaining == pytest.approx(298)

    def test_huge_tick_triggers_a_single_transition(self, store, task):
        c = _bound(store, task)
        c.advance(100_000)
        snap = c.snapshot()
        assert snap.phase is Phase.SHORT_BREAK
        assert snap.remaining == 300
        assert store.increment_calls == [task.id]

    def test_paused_session_does_not_advance(self, store, task):
        c = _bound(store, task)
        c.pause()
        assert not c.advance(5000).changed
        assert c.snapshot().clock_state is ClockState.PAUSED
        c.resume()
        assert c.advance(1500).changed

    def test_free_session_counts_without_store(self):
        c = SessionController(overrides=(60, 10, 30))
        result = c.advance(60)
        assert result.event.credited
        assert result.new_count is None
        assert c.snapshot().pomodoros_finished_this_session == 1


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_work_then_short_break(self, store, task):
        c = _bound(store, task)
        c.advance(1500)
        assert c.snapshot().phase is Phase.SHORT_BREAK
        assert store.tasks[task.id].pomodoros_finished == 1
        c.advance(300)
        assert c.snapshot().phase is Phase.WORK
        assert store.tasks[task.id].pomodoros_finished == 1

    def test_fourth_break_is_long(self, store, task):
        c = _bound(store, task, config=SessionConfig(long_break_interval=4))
        breaks = []
        for _ in range(4):
            breaks.append(c.advance(1500).event.to_phase)
            c.advance(c.snapshot().remaining)
        assert breaks == [Phase.SHORT_BREAK] * 3 + [Phase.LONG_BREAK]
        assert store.tasks[task.id].pomodoros_finished == 4

    def test_counter_never_decreases(self, store, task):
        c = _bound(store, task)
        seen = []
        for step in [1500, 0, "skip", 300, "skip", 10, 1490, "skip", 900]:
            if step == "skip":
                c.skip()
            else:
                c.advance(step)
            seen.append(store.tasks[task.id].pomodoros_finished)
        assert seen == sorted(seen)

    def test_against_sqlite_store(self, repo):
        task_id = repo.create_task("Write report", 1500, 300, 900)
        c = SessionController(repo.get_task(task_id), store=repo)
        c.advance(1500)
        c.advance(300)
        c.advance(1500)
        assert repo.get_task(task_id).pomodoros_finished == 2
        assert sum(n for _, n in repo.cycles_per_day(1)) == 2


# ---------------------------------------------------------------------------
# skip
# ---------------------------------------------------------------------------


class TestSkip:
    def test_skip_never_credits_by_default(self, store, task):
        c = _bound(store, task)
        result = c.skip()
        assert result.event.skipped
        assert not result.event.credited
        assert store.increment_calls == []
        assert c.snapshot().pomodoros_finished_this_session == 0

    def test_skip_credits_under_credit_policy(self, store, task):
        c = _bound(store, task, config=SessionConfig(skip_policy=SkipPolicy.CREDIT))
        result = c.skip()
        assert result.new_count == 1

    def test_skip_rearms_clock_without_carry(self, store, task):
        c = _bound(store, task)
        c.advance(1000)
        c.skip()
        assert c.snapshot().remaining == 300

    def test_skip_while_paused_starts_next_phase(self, store, task):
        c = _bound(store, task)
        c.pause()
        c.skip()
        assert c.snapshot().clock_state is ClockState.RUNNING


# ---------------------------------------------------------------------------
# Store failures
# ---------------------------------------------------------------------------


class TestStoreFailures:
    @pytest.mark.parametrize(
        "error", [NotFoundError(1), StoreUnavailableError("disk gone")]
    )
    def test_failed_credit_keeps_transition(self, store, task, error):
        store.fail_with = error
        c = _bound(store, task)
        result = c.advance(1500)
        assert result.event.to_phase is Phase.SHORT_BREAK
        assert result.error is error
        assert result.new_count is None
        snap = c.snapshot()
        assert snap.phase is Phase.SHORT_BREAK
        assert snap.unpersisted_credits == 1
        assert snap.pomodoros_finished_this_session == 1

    def test_failed_credit_is_logged_as_warning(self, store, task):
        store.fail_with = StoreUnavailableError("disk gone")
        c = _bound(store, task)
        with patch.object(controller_mod.logger, "warning") as warning:
            c.advance(1500)
        warning.assert_called_once()

    def test_session_continues_after_task_deleted(self, store, task):
        c = _bound(store, task)
        c.advance(1500)
        del store.tasks[task.id]
        c.advance(300)
        result = c.advance(1500)
        assert isinstance(result.error, NotFoundError)
        assert c.snapshot().unpersisted_credits == 1
        assert c.snapshot().pomodoros_finished_this_session == 2


# ---------------------------------------------------------------------------
# Notifier
# ---------------------------------------------------------------------------


class TestNotifier:
    def test_called_once_per_transition(self, store, task):
        notifier = MagicMock()
        c = _bound(store, task, notifier=notifier)
        c.advance(1500)
        c.advance(0)
        c.skip()
        assert notifier.call_count == 2

    def test_called_after_store_write(self, store, task):
        counts = []
        c = _bound(
            store,
            task,
            notifier=lambda event: counts.append(store.tasks[task.id].pomodoros_finished),
        )
        c.advance(1500)
        assert counts == [1]

    def test_called_even_when_store_fails(self, store, task):
        store.fail_with = StoreUnavailableError("locked")
        notifier = MagicMock()
        c = _bound(store, task, notifier=notifier)
        c.advance(1500)
        notifier.assert_called_once()

    def test_failing_notifier_does_not_lose_the_transition(self, store, task):
        notifier = MagicMock(side_effect=OSError("notification daemon gone"))
        c = _bound(store, task, notifier=notifier)

        with patch.object(controller_mod.logger, "warning") as warning:
            result = c.advance(1500)

        assert result.event.to_phase is Phase.SHORT_BREAK
        assert result.new_count == 1
        assert store.tasks[task.id].pomodoros_finished == 1
        assert c.phase is Phase.SHORT_BREAK
        warning.assert_called_once()


# ---------------------------------------------------------------------------
# complete_task
# ---------------------------------------------------------------------------


class TestCompleteTask:
    def test_marks_task_and_keeps_running(self, store, task):
        c = _bound(store, task)
        c.advance(100)
        completed = c.complete_task()
        assert completed.completed
        assert store.tasks[task.id].completed
        snap = c.snapshot()
        assert snap.task_completed
        assert snap.clock_state is ClockState.RUNNING
        assert snap.remaining == 1400

    def test_complete_twice_is_noop(self, store, task):
        c = _bound(store, task)
        c.complete_task()
        c.complete_task()
        assert store.tasks[task.id].completed

    def test_free_session_rejects_complete(self):
        c = SessionController(overrides=(60, 10, 30))
        with pytest.raises(InvalidInputError):
            c.complete_task()


# ---------------------------------------------------------------------------
# snapshot
# ---------------------------------------------------------------------------


class TestSnapshot:
    def test_snapshot_is_side_effect_free(self, store, task):
        c = _bound(store, task)
        c.advance(10)
        assert c.snapshot() == c.snapshot()
        assert c.snapshot().remaining == 1490

    def test_snapshot_exposes_set_progress(self, store, task):
        c = _bound(store, task)
        c.advance(1500)
        snap = c.snapshot()
        assert snap.completed_work_cycles_in_set == 1
        assert snap.long_break_interval == 4
        assert snap.progress_dots == "⬤ ○ ○ ○"
