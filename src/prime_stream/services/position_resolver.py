from __future__ import annotations

from datetime import UTC, datetime

from prime_stream.domain.tunables import GENESIS_EPOCH_MS, STREAM_VELOCITY


def resolve(
    now: int | datetime,
    *,
    epoch_ms: int = GENESIS_EPOCH_MS,
    velocity: int = STREAM_VELOCITY,
) -> int:
    """Map wall-clock time to the global stream cursor.

    Every process evaluating this at the same instant gets the same cursor,
    which is what keeps independent viewers in sync without talking to each other.
    A clock reading before the epoch clamps to zero elapsed time.
    """
    now_ms = to_epoch_ms(now)
    elapsed = max(0, now_ms - epoch_ms)
    cursor = 2 + elapsed * velocity
    # Forward search only visits odd candidates beyond 2.
    if cursor % 2 == 0:
        cursor += 1
    return cursor


def to_epoch_ms(value: int | datetime) -> int:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")
        delta = value.astimezone(UTC) - datetime(1970, 1, 1, tzinfo=UTC)
        return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000
    return int(value)


def genesis_label(epoch_ms: int = GENESIS_EPOCH_MS) -> str:
    # Human label for the epoch, e.g. "Mar 14, 2025, 03:14:00" (UTC, 24h).
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=UTC)
    return f"{moment:%b} {moment.day}, {moment:%Y, %H:%M:%S}"
