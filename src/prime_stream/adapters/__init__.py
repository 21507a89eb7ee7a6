from .clocks import ManualClock, SystemClock
from .log_sinks import (
    JsonlLogSink,
    MemoryLogSink,
    NullLogSink,
    StdoutLogSink,
    build_log_sink,
)

__all__ = [
    "JsonlLogSink",
    "ManualClock",
    "MemoryLogSink",
    "NullLogSink",
    "StdoutLogSink",
    "SystemClock",
    "build_log_sink",
]
