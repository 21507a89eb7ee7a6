from __future__ import annotations

from dataclasses import dataclass

from prime_stream.ports.prime_checker import PrimeChecker


def next_prime(cursor: int, oracle: PrimeChecker) -> int:
    """Return the smallest prime strictly greater than cursor.

    No upper time bound: the engine runs this as one cooperative step, or
    through ForwardSearch when a per-step budget is configured.
    """
    search = ForwardSearch(cursor)
    found = search.step(oracle)
    assert found is not None
    return found


def previous_primes(n: int, count: int, oracle: PrimeChecker) -> list[int]:
    """Return up to count primes strictly below n, oldest first.

    Fewer than count come back when the walk reaches 2 first.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    found: list[int] = []
    candidate = n - 1
    if candidate > 2 and candidate % 2 == 0:
        candidate -= 1
    while len(found) < count and candidate >= 2:
        if oracle.is_prime(candidate):
            found.append(candidate)
        if candidate == 3:
            candidate = 2
        elif candidate == 2:
            break
        else:
            candidate -= 2
    found.reverse()
    return found


@dataclass(slots=True)
class ForwardSearch:
    # Resumable forward search. The candidate survives across steps, so a search
    # cut short by its budget continues where it stopped instead of restarting.
    cursor: int
    _candidate: int | None = None

    @property
    def candidate(self) -> int:
        if self._candidate is None:
            self._candidate = _first_candidate(self.cursor)
        return self._candidate

    def step(self, oracle: PrimeChecker, budget: int | None = None) -> int | None:
        # budget caps how many candidates are tested in this call; None means until found.
        if budget is not None and budget < 1:
            raise ValueError("budget must be positive")
        candidate = self.candidate
        tested = 0
        while budget is None or tested < budget:
            tested += 1
            if oracle.is_prime(candidate):
                self.cursor = candidate
                self._candidate = None
                return candidate
            candidate += 1 if candidate == 2 else 2
            self._candidate = candidate
        return None


def _first_candidate(cursor: int) -> int:
    candidate = cursor + 1
    if candidate > 2 and candidate % 2 == 0:
        candidate += 1
    return max(candidate, 2)
