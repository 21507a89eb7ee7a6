from .entries import HistoryEntry, MarkerEntry, MarkerKind, ValueEntry, is_marker
from .tunables import (
    BATCH_SIZE,
    GENESIS_EPOCH_MS,
    LIVE_EDGE_PX,
    MAX_BUFFER_SIZE,
    PREFILL_COUNT,
    STREAM_VELOCITY,
    SYNC_THRESHOLD,
    TRICKLE_INTERVAL_MS,
)

# Public domain exports keep imports explicit across layers.
__all__ = [
    "BATCH_SIZE",
    "GENESIS_EPOCH_MS",
    "HistoryEntry",
    "LIVE_EDGE_PX",
    "MAX_BUFFER_SIZE",
    "MarkerEntry",
    "MarkerKind",
    "PREFILL_COUNT",
    "STREAM_VELOCITY",
    "SYNC_THRESHOLD",
    "TRICKLE_INTERVAL_MS",
    "ValueEntry",
    "is_marker",
]
