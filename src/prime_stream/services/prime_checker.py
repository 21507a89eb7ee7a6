from __future__ import annotations

import math
from dataclasses import dataclass

from prime_stream.ports.prime_checker import PrimeChecker

# The first 13 primes are a proven witness set for n < 3.317e24; larger n use the Bach bound.
_MR_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)
_MR_EXACT_LIMIT = 3_317_044_064_679_887_385_961_981


@dataclass(frozen=True, slots=True)
class TrialDivisionPrimeChecker(PrimeChecker):
    # Exact trial division; cost grows with sqrt(n), fine for cursors reachable at 1 unit/ms.
    def is_prime(self, n: int) -> bool:
        return is_prime_trial_division(n)


@dataclass(frozen=True, slots=True)
class MillerRabinPrimeChecker(PrimeChecker):
    # Drop-in replacement for large cursors. Same contract: total, pure, deterministic.
    def is_prime(self, n: int) -> bool:
        if n < 2:
            return False
        for p in _MR_BASES:
            if n == p:
                return True
            if n % p == 0:
                return False
        d = n - 1
        s = 0
        while d % 2 == 0:
            d //= 2
            s += 1
        bases = _MR_BASES if n < _MR_EXACT_LIMIT else _bach_bases(n)
        return all(_mr_round(n, a, d, s) for a in bases)


def is_prime_trial_division(n: int) -> bool:
    # n < 2 is not prime; 2 and 3 are; even values above 2 are rejected before the loop.
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False
    limit = math.isqrt(n)
    for d in range(3, limit + 1, 2):
        if n % d == 0:
            return False
    return True


def build_prime_checker(kind: str) -> PrimeChecker:
    if kind == "trial":
        return TrialDivisionPrimeChecker()
    if kind == "miller_rabin":
        return MillerRabinPrimeChecker()
    raise ValueError(f"Unknown primality oracle: {kind}")


def _mr_round(n: int, a: int, d: int, s: int) -> bool:
    x = pow(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(s - 1):
        x = pow(x, 2, n)
        if x == n - 1:
            return True
    return False


def _bach_bases(n: int) -> range:
    # Every base up to 2*ln(n)^2 is a complete witness set under GRH (Bach bound).
    limit = min(n - 2, int(2 * math.log(n) ** 2))
    return range(2, limit + 1)
