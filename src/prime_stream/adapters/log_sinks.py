from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TextIO

from prime_stream.observability import LogMessage
from prime_stream.ports.log_sink import LogSink


class StdoutLogSink(LogSink):
    # Minimal structured log sink: one compact JSON object per line.
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def emit(self, message: LogMessage) -> None:
        self._stream.write(_dumps(message) + "\n")

    def close(self) -> None:
        self._stream.flush()


class JsonlLogSink(LogSink):
    # File-backed structured log sink for engine lifecycle diagnostics.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        self._file.write(_dumps(message) + "\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()


class MemoryLogSink(LogSink):
    # Collects records in memory; used by tests and embedding callers.
    def __init__(self) -> None:
        self.records: list[LogMessage] = []

    def emit(self, message: LogMessage) -> None:
        self.records.append(message)

    def close(self) -> None:
        return None

    def messages(self, level: str | None = None) -> list[str]:
        return [r.message for r in self.records if level is None or r.level == level]


class NullLogSink(LogSink):
    def emit(self, message: LogMessage) -> None:
        _ = message

    def close(self) -> None:
        return None


def build_log_sink(kind: str, path: str | None = None) -> LogSink:
    # Sink selector for the logging config section.
    if kind == "stdout":
        return StdoutLogSink()
    if kind == "jsonl":
        if not path:
            raise ValueError("logging.path must be a non-empty string for the jsonl sink")
        return JsonlLogSink(Path(path))
    if kind == "none":
        return NullLogSink()
    raise ValueError(f"Unknown log sink kind: {kind}")


def log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }


def _dumps(message: LogMessage) -> str:
    # Stream values are unbounded ints; default=str keeps huge values exact in the log.
    return json.dumps(log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)
