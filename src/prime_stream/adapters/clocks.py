from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from prime_stream.ports.clock import Clock


@dataclass(slots=True)
class SystemClock(Clock):
    # Real clock; time sources are injectable so the adapter itself stays testable.
    wall_fn: Callable[[], float] = time.time
    monotonic_fn: Callable[[], float] = time.monotonic
    sleep_fn: Callable[[float], None] = time.sleep

    def wall_ms(self) -> int:
        return int(self.wall_fn() * 1000)

    def monotonic_ms(self) -> float:
        return self.monotonic_fn() * 1000.0

    def sleep_ms(self, duration_ms: float) -> None:
        if duration_ms > 0:
            self.sleep_fn(duration_ms / 1000.0)


@dataclass(slots=True)
class ManualClock(Clock):
    # Deterministic clock: time moves only through advance()/sleep_ms().
    wall: float = 0
    monotonic: float = 0.0

    def wall_ms(self) -> int:
        return int(self.wall)

    def monotonic_ms(self) -> float:
        return self.monotonic

    def sleep_ms(self, duration_ms: float) -> None:
        self.advance(duration_ms)

    def advance(self, duration_ms: float) -> None:
        if duration_ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        self.monotonic += duration_ms
        self.wall += duration_ms
