from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from prime_stream.domain.entries import HistoryEntry, MarkerEntry, MarkerKind
from prime_stream.domain.tunables import GENESIS_EPOCH_MS, LIVE_EDGE_PX
from prime_stream.services.position_resolver import genesis_label
from prime_stream.services.stream_state import StreamState


@dataclass(frozen=True, slots=True)
class ValueGroup:
    # Run of consecutive values sharing a digit count; rendered as one column grid.
    digits: int
    values: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class MarkerGroup:
    marker: MarkerEntry


HistoryGroup = ValueGroup | MarkerGroup


@dataclass(frozen=True, slots=True)
class StreamView:
    # Read model handed to a renderer; built from state on demand, never stored.
    current_prime: int
    buffered: int
    capacity: int
    pending: int
    live: bool
    genesis: str
    groups: tuple[HistoryGroup, ...] = field(default_factory=tuple)


def group_history(entries: Iterable[HistoryEntry]) -> list[HistoryGroup]:
    """Split the revealed window into display groups.

    Values are grouped by magnitude (digit count) so each group can use a
    column width that fits its numbers. Every marker breaks the current run
    and stands alone.
    """
    groups: list[HistoryGroup] = []
    run: list[int] = []
    run_digits = 0

    def _flush() -> None:
        if run:
            groups.append(ValueGroup(digits=run_digits, values=tuple(run)))
            run.clear()

    for entry in entries:
        if isinstance(entry, MarkerEntry):
            _flush()
            groups.append(MarkerGroup(marker=entry))
            continue
        digits = entry.digits
        if run and digits != run_digits:
            _flush()
        run_digits = digits
        run.append(entry.value)
    _flush()
    return groups


def build_view(state: StreamState, *, epoch_ms: int = GENESIS_EPOCH_MS) -> StreamView:
    return StreamView(
        current_prime=state.stream_cursor,
        buffered=state.length,
        capacity=state.buffer.capacity,
        pending=state.backlog,
        live=state.is_live,
        genesis=genesis_label(epoch_ms),
        groups=tuple(group_history(state.snapshot())),
    )


def is_near_bottom(
    scroll_height: float,
    scroll_top: float,
    client_height: float,
    threshold_px: float = LIVE_EDGE_PX,
) -> bool:
    # ConsumerState derivation from a scroll container's geometry.
    return scroll_height - scroll_top - client_height < threshold_px


def format_value(value: int) -> str:
    return f"{value:,}"


def render_status(view: StreamView) -> str:
    status = "LIVE - UP TO DATE" if view.live else f"SYNCING HISTORY ({view.pending:,} PENDING)"
    return (
        f"GENESIS: {view.genesis} | CURRENT: {format_value(view.current_prime)} | "
        f"BUFFER: {view.buffered} / {view.capacity} | {status}"
    )


def render_groups(groups: Iterable[HistoryGroup], *, width: int = 100) -> list[str]:
    lines: list[str] = []
    for group in groups:
        if isinstance(group, MarkerGroup):
            lines.append(_render_marker(group.marker))
            continue
        cell = max(len(format_value(v)) for v in group.values) + 1
        per_line = max(1, width // cell)
        for start in range(0, len(group.values), per_line):
            chunk = group.values[start : start + per_line]
            lines.append("".join(format_value(v).rjust(cell) for v in chunk))
    return lines


def _render_marker(marker: MarkerEntry) -> str:
    stamp = marker.timestamp.isoformat().replace("+00:00", "Z")
    if marker.kind is MarkerKind.CONNECTION_ESTABLISHED:
        return f"--- CONNECTED TO GLOBAL STREAM ({stamp}) ---"
    return f"--- OFFLINE ({stamp}) ---"
