from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class MarkerKind(str, Enum):
    # Out-of-band events recorded in the history log alongside primes.
    CONNECTION_ESTABLISHED = "CONNECTION_ESTABLISHED"
    OFFLINE = "OFFLINE"


@dataclass(frozen=True, slots=True)
class ValueEntry:
    # A produced prime. Arbitrary precision comes from Python int.
    value: int

    @property
    def digits(self) -> int:
        return len(str(self.value))


@dataclass(frozen=True, slots=True)
class MarkerEntry:
    # Marker occupies a buffer slot exactly like a value and is evicted the same way.
    kind: MarkerKind
    timestamp: datetime


# Tagged union of history entries; dispatch with isinstance.
HistoryEntry = ValueEntry | MarkerEntry


def is_marker(entry: HistoryEntry) -> bool:
    return isinstance(entry, MarkerEntry)
