from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prime_stream.ports.log_sink import LogSink


@dataclass(frozen=True, slots=True)
class LogMessage:
    # Structured log payload emitted by the stream engine.
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.level or not self.message:
            raise ValueError("LogMessage requires non-empty level/message")


@dataclass(frozen=True, slots=True)
class StreamLogger:
    # Thin facade that builds LogMessage records and forwards them to a sink.
    sink: "LogSink"
    component: str = "prime_stream"

    def debug(self, message: str, **fields: object) -> None:
        self._emit("debug", message, fields)

    def info(self, message: str, **fields: object) -> None:
        self._emit("info", message, fields)

    def warning(self, message: str, **fields: object) -> None:
        self._emit("warning", message, fields)

    def error(self, message: str, **fields: object) -> None:
        self._emit("error", message, fields)

    def child(self, component: str) -> StreamLogger:
        return StreamLogger(sink=self.sink, component=f"{self.component}.{component}")

    def _emit(self, level: str, message: str, fields: dict[str, object]) -> None:
        payload = {"component": self.component, **fields}
        self.sink.emit(LogMessage(level=level, message=message, fields=payload))
