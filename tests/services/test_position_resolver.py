from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from prime_stream.domain.tunables import GENESIS_EPOCH_MS
from prime_stream.services.position_resolver import genesis_label, resolve, to_epoch_ms


def test_resolve_at_epoch_is_three() -> None:
    # 2 + 0 elapsed is even, so the cursor is bumped to the next odd value.
    assert resolve(GENESIS_EPOCH_MS) == 3


def test_resolve_before_epoch_clamps_to_zero_elapsed() -> None:
    assert resolve(GENESIS_EPOCH_MS - 1_000_000) == 3
    assert resolve(0) == 3


def test_resolve_is_always_odd_after_epoch() -> None:
    for offset in range(0, 50):
        assert resolve(GENESIS_EPOCH_MS + offset) % 2 == 1


def test_resolve_uses_velocity() -> None:
    assert resolve(1_001, epoch_ms=1_000, velocity=1) == 3
    assert resolve(1_010, epoch_ms=1_000, velocity=1) == 13
    assert resolve(1_010, epoch_ms=1_000, velocity=3) == 33


def test_resolve_is_deterministic_and_monotonic() -> None:
    samples = [GENESIS_EPOCH_MS + step * 7_919 for step in range(200)]
    first = [resolve(t) for t in samples]
    second = [resolve(t) for t in samples]
    assert first == second
    assert all(a <= b for a, b in zip(first, first[1:]))


def test_resolve_accepts_aware_datetime() -> None:
    moment = datetime(2025, 3, 14, 3, 14, 1, tzinfo=UTC)
    assert to_epoch_ms(moment) == GENESIS_EPOCH_MS + 1000
    shifted = moment.astimezone(timezone(timedelta(hours=5)))
    assert resolve(shifted) == resolve(GENESIS_EPOCH_MS + 1000)


def test_resolve_rejects_naive_datetime() -> None:
    with pytest.raises(ValueError):
        resolve(datetime(2025, 3, 14))


def test_genesis_label_format() -> None:
    assert genesis_label() == "Mar 14, 2025, 03:14:00"
