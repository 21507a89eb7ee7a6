from __future__ import annotations

from typing import Protocol, runtime_checkable

from prime_stream.observability import LogMessage


# LogSink port receives structured log records from the engine.
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Write one structured log record."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Release any underlying resource."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")
