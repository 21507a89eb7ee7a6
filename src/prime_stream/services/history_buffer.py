from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from itertools import islice

from prime_stream.domain.entries import HistoryEntry
from prime_stream.domain.tunables import MAX_BUFFER_SIZE


class HistoryBuffer:
    # Bounded FIFO log of values and markers in insertion order.
    # Callers that track a reveal cursor must go through StreamState.append so the
    # eviction below is paired with the cursor decrement.
    def __init__(self, capacity: int = MAX_BUFFER_SIZE) -> None:
        if capacity < 1:
            raise ValueError("HistoryBuffer capacity must be >= 1")
        self._capacity = capacity
        self._entries: deque[HistoryEntry] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)

    def evict_if_over_capacity(self) -> int:
        # At most one net entry is added per push, so at most one is evicted.
        if len(self._entries) > self._capacity:
            self._entries.popleft()
            return 1
        return 0

    def snapshot(self, upto: int | None = None) -> tuple[HistoryEntry, ...]:
        if upto is None:
            return tuple(self._entries)
        if upto < 0:
            raise ValueError("snapshot bound must be non-negative")
        return tuple(islice(self._entries, upto))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)
