from __future__ import annotations

import math
from dataclasses import dataclass

from prime_stream.domain.tunables import BATCH_SIZE
from prime_stream.services.stream_state import StreamState


def trickle_increment(backlog: int) -> int:
    """How many entries one trickle tick reveals for a given backlog.

    Tiers keep catch-up proportional: big jumps while far behind, then a
    geometric-like slowdown near the edge so the consumer never sees a stall
    or a snap.
    """
    if backlog <= 0:
        return 0
    if backlog > 500:
        return 100
    if backlog > 100:
        return 20
    return max(1, math.ceil(backlog / 10))


@dataclass(slots=True)
class RevealScheduler:
    # Pacing policy over StreamState.reveal_cursor. This is the only writer of the
    # cursor besides the eviction decrement in StreamState.append.
    state: StreamState
    batch_size: int = BATCH_SIZE

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be >= 1")

    def on_demand(self) -> int:
        # Consumer scrolled the sentinel into view and wants more of the backlog.
        backlog = self.state.backlog
        if backlog <= 0:
            return 0
        return self.state.reveal(min(self.batch_size, backlog))

    def on_tick(self) -> int:
        # Trickle only runs while the consumer sits at the live edge.
        if not self.state.consumer_live:
            return 0
        return self.state.reveal(trickle_increment(self.state.backlog))

    def ensure_initial_window(self) -> int:
        # A consumer with nothing revealed gets a first batch instead of an empty log.
        if self.state.reveal_cursor == 0 and self.state.length > 0:
            return self.state.reveal(min(self.state.length, self.batch_size))
        return 0
