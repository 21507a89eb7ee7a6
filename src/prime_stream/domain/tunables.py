from __future__ import annotations

# Stream tunables shared by every process joining the stream.
# Changing EPOCH or VELOCITY forks the stream: viewers would no longer agree on the cursor.

# 2025-03-14 03:14:00 UTC in milliseconds since the Unix epoch.
GENESIS_EPOCH_MS = 1741922040000
# Cursor units advanced per elapsed millisecond.
STREAM_VELOCITY = 1

BATCH_SIZE = 100
SYNC_THRESHOLD = 50
MAX_BUFFER_SIZE = 5000
PREFILL_COUNT = 100
TRICKLE_INTERVAL_MS = 30
# Scroll distance from the bottom (px) under which the consumer counts as at the live edge.
LIVE_EDGE_PX = 150
