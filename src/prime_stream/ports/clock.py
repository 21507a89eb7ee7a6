from __future__ import annotations

from typing import Protocol, runtime_checkable


# Clock port separates wall-clock reads (cursor derivation) from scheduling time.
@runtime_checkable
class Clock(Protocol):
    def wall_ms(self) -> int:
        """Milliseconds since the Unix epoch, used to resolve the stream cursor."""
        raise NotImplementedError("Clock is a port; use a concrete adapter.")

    def monotonic_ms(self) -> float:
        """Monotonic milliseconds, used to order scheduler deadlines."""
        raise NotImplementedError("Clock is a port; use a concrete adapter.")

    def sleep_ms(self, duration_ms: float) -> None:
        """Block until duration_ms has elapsed on this clock."""
        raise NotImplementedError("Clock is a port; use a concrete adapter.")
