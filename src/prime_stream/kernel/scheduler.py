from __future__ import annotations

import heapq
from collections.abc import Callable
from dataclasses import dataclass, field

from prime_stream.ports.clock import Clock

Task = Callable[[], None]
ErrorHandler = Callable[[str, Exception], None]


@dataclass(slots=True)
class CancellationToken:
    # Checked at the top of every periodic/self-rescheduling step.
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(slots=True)
class TimerHandle:
    # done is set once the handle has no queued run left.
    name: str
    cancelled: bool = False
    done: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(order=True, slots=True)
class _Timer:
    due: float
    seq: int
    task: Task = field(compare=False)
    handle: TimerHandle = field(compare=False)


class CooperativeScheduler:
    """Single-threaded timer queue.

    Callbacks run one at a time, each to completion, ordered by (due time,
    insertion order). Nothing runs concurrently with anything else, so state
    shared between tasks needs no locking; long work must be split into steps
    that reschedule themselves.

    Errors raised by a task go to on_error when one is given. Without a
    handler the error propagates out of run_until/run_once to the caller.
    """

    def __init__(self, clock: Clock, *, on_error: ErrorHandler | None = None) -> None:
        self._clock = clock
        self._on_error = on_error
        self._timers: list[_Timer] = []
        self._seq = 0

    def now(self) -> float:
        return self._clock.monotonic_ms()

    def call_soon(self, task: Task, *, name: str = "task") -> TimerHandle:
        return self.call_later(0, task, name=name)

    def call_later(self, delay_ms: float, task: Task, *, name: str = "task") -> TimerHandle:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        handle = TimerHandle(name=name)
        self._push(self.now() + delay_ms, task, handle)
        return handle

    def call_every(
        self,
        interval_ms: float,
        task: Task,
        *,
        token: CancellationToken | None = None,
        name: str = "periodic",
    ) -> TimerHandle:
        # Fixed-rate repetition; the next run is queued before the task body runs so
        # a failing tick does not stop the series.
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        handle = TimerHandle(name=name)

        def _tick() -> None:
            if handle.cancelled or (token is not None and token.cancelled):
                return
            self._push(self.now() + interval_ms, _tick, handle)
            task()

        self._push(self.now() + interval_ms, _tick, handle)
        return handle

    def pending(self) -> int:
        return sum(1 for timer in self._timers if not timer.handle.cancelled)

    def next_due(self) -> float | None:
        self._drop_cancelled()
        if not self._timers:
            return None
        return self._timers[0].due

    def run_once(self) -> bool:
        # Run the earliest timer if it is already due. Returns whether anything ran.
        self._drop_cancelled()
        if not self._timers or self._timers[0].due > self.now():
            return False
        timer = heapq.heappop(self._timers)
        self._execute(timer)
        return True

    def run_until(self, deadline_ms: float, *, max_steps: int | None = None) -> int:
        # Drive timers until the deadline, sleeping on the clock between due times.
        steps = 0
        while max_steps is None or steps < max_steps:
            due = self.next_due()
            if due is None or due > deadline_ms:
                remaining = deadline_ms - self.now()
                if remaining > 0:
                    self._clock.sleep_ms(remaining)
                break
            wait = due - self.now()
            if wait > 0:
                self._clock.sleep_ms(wait)
            timer = heapq.heappop(self._timers)
            self._execute(timer)
            steps += 1
        return steps

    def run_for(self, duration_ms: float, *, max_steps: int | None = None) -> int:
        return self.run_until(self.now() + duration_ms, max_steps=max_steps)

    def _push(self, due: float, task: Task, handle: TimerHandle) -> None:
        handle.done = False
        self._seq += 1
        heapq.heappush(self._timers, _Timer(due=due, seq=self._seq, task=task, handle=handle))

    def _drop_cancelled(self) -> None:
        while self._timers and self._timers[0].handle.cancelled:
            heapq.heappop(self._timers)

    def _execute(self, timer: _Timer) -> None:
        if timer.handle.cancelled:
            return
        timer.handle.done = True
        try:
            timer.task()
        except Exception as exc:
            if self._on_error is None:
                raise
            self._on_error(timer.handle.name, exc)
