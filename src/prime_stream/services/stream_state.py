from __future__ import annotations

from dataclasses import dataclass, field

from prime_stream.domain.entries import HistoryEntry
from prime_stream.domain.tunables import MAX_BUFFER_SIZE, SYNC_THRESHOLD
from prime_stream.services.history_buffer import HistoryBuffer


def is_live(reveal_cursor: int, length: int, sync_threshold: int = SYNC_THRESHOLD) -> bool:
    # Live means within sync_threshold of the true edge, not exactly at it.
    return reveal_cursor >= length - sync_threshold


@dataclass(slots=True)
class StreamState:
    """Single owner of all mutable stream state.

    Components receive this aggregate explicitly; nothing is module-global, so
    several engines can coexist in one process.

    Invariant: 0 <= reveal_cursor <= len(buffer). append() is the only way
    entries enter the buffer, and it pairs every eviction with a reveal
    cursor decrement so the revealed prefix keeps pointing at the same entries.
    """

    stream_cursor: int = 2
    buffer: HistoryBuffer = field(default_factory=lambda: HistoryBuffer(MAX_BUFFER_SIZE))
    reveal_cursor: int = 0
    consumer_live: bool = False
    sync_threshold: int = SYNC_THRESHOLD

    def append(self, entry: HistoryEntry) -> int:
        self.buffer.push(entry)
        evicted = self.buffer.evict_if_over_capacity()
        if evicted:
            self.reveal_cursor = max(0, self.reveal_cursor - evicted)
        return evicted

    def reveal(self, count: int) -> int:
        # Advance the reveal cursor by up to count; returns how far it actually moved.
        if count <= 0:
            return 0
        target = min(self.reveal_cursor + count, len(self.buffer))
        moved = target - self.reveal_cursor
        self.reveal_cursor = target
        return moved

    def snapshot(self) -> tuple[HistoryEntry, ...]:
        return self.buffer.snapshot(self.reveal_cursor)

    @property
    def length(self) -> int:
        return len(self.buffer)

    @property
    def backlog(self) -> int:
        return len(self.buffer) - self.reveal_cursor

    @property
    def is_live(self) -> bool:
        return is_live(self.reveal_cursor, len(self.buffer), self.sync_threshold)
