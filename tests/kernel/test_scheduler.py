from __future__ import annotations

import pytest

from prime_stream.adapters.clocks import ManualClock
from prime_stream.kernel.scheduler import CancellationToken, CooperativeScheduler


def test_tasks_run_in_due_then_insertion_order() -> None:
    clock = ManualClock()
    scheduler = CooperativeScheduler(clock)
    calls: list[str] = []
    scheduler.call_later(5, lambda: calls.append("late"))
    scheduler.call_soon(lambda: calls.append("a"))
    scheduler.call_soon(lambda: calls.append("b"))

    steps = scheduler.run_for(10)

    assert steps == 3
    assert calls == ["a", "b", "late"]
    assert clock.monotonic_ms() == 10


def test_run_once_only_runs_due_tasks() -> None:
    clock = ManualClock()
    scheduler = CooperativeScheduler(clock)
    calls: list[int] = []
    scheduler.call_later(3, lambda: calls.append(1))
    assert scheduler.run_once() is False
    clock.advance(3)
    assert scheduler.run_once() is True
    assert calls == [1]


def test_call_every_repeats_until_token_cancelled() -> None:
    clock = ManualClock()
    scheduler = CooperativeScheduler(clock)
    token = CancellationToken()
    ticks: list[float] = []
    scheduler.call_every(30, lambda: ticks.append(clock.monotonic_ms()), token=token)

    scheduler.run_for(100)
    assert ticks == [30, 60, 90]

    token.cancel()
    scheduler.run_for(100)
    assert ticks == [30, 60, 90]
    assert scheduler.pending() == 0


def test_cancelled_handle_is_skipped() -> None:
    clock = ManualClock()
    scheduler = CooperativeScheduler(clock)
    calls: list[str] = []
    handle = scheduler.call_later(1, lambda: calls.append("x"))
    handle.cancel()
    assert scheduler.pending() == 0
    scheduler.run_for(5)
    assert calls == []


def test_handle_reports_done_after_last_run() -> None:
    clock = ManualClock()
    scheduler = CooperativeScheduler(clock)
    once = scheduler.call_later(1, lambda: None)
    periodic = scheduler.call_every(1, lambda: None)
    assert once.done is False

    scheduler.run_for(3)

    assert once.done is True
    assert periodic.done is False


def test_self_rescheduling_task_does_not_starve_timers() -> None:
    # A step that always reschedules itself must still let periodic ticks through.
    clock = ManualClock()
    scheduler = CooperativeScheduler(clock)
    events: list[str] = []

    def _step() -> None:
        events.append("step")
        scheduler.call_later(1, _step)

    scheduler.call_soon(_step)
    scheduler.call_every(30, lambda: events.append("tick"))
    scheduler.run_for(90)

    assert events.count("tick") == 3
    assert events.count("step") == 91


def test_error_without_handler_propagates() -> None:
    scheduler = CooperativeScheduler(ManualClock())

    def _boom() -> None:
        raise RuntimeError("boom")

    scheduler.call_soon(_boom)
    with pytest.raises(RuntimeError):
        scheduler.run_for(1)


def test_error_handler_receives_task_name_and_periodic_task_survives() -> None:
    errors: list[tuple[str, str]] = []
    clock = ManualClock()
    scheduler = CooperativeScheduler(clock, on_error=lambda name, exc: errors.append((name, str(exc))))
    runs: list[float] = []

    def _flaky() -> None:
        runs.append(clock.monotonic_ms())
        if len(runs) == 1:
            raise RuntimeError("first tick fails")

    scheduler.call_every(10, _flaky, name="flaky")
    scheduler.run_for(30)

    assert errors == [("flaky", "first tick fails")]
    assert runs == [10, 20, 30]


def test_invalid_intervals_rejected() -> None:
    scheduler = CooperativeScheduler(ManualClock())
    with pytest.raises(ValueError):
        scheduler.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.call_every(0, lambda: None)


def test_max_steps_bounds_zero_delay_loops() -> None:
    clock = ManualClock()
    scheduler = CooperativeScheduler(clock)
    count = 0

    def _spin() -> None:
        nonlocal count
        count += 1
        scheduler.call_soon(_spin)

    scheduler.call_soon(_spin)
    assert scheduler.run_for(10, max_steps=25) == 25
    assert count == 25
