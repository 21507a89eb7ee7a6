from __future__ import annotations

import math

import pytest

from prime_stream.ports.prime_checker import PrimeChecker
from prime_stream.services.prime_checker import (
    MillerRabinPrimeChecker,
    TrialDivisionPrimeChecker,
    build_prime_checker,
    is_prime_trial_division,
)


def _reference_table(limit: int) -> list[bool]:
    # Independent sieve used as the reference for the oracles.
    table = [True] * (limit + 1)
    table[0] = table[1] = False
    for p in range(2, math.isqrt(limit) + 1):
        if table[p]:
            table[p * p :: p] = [False] * len(table[p * p :: p])
    return table


def test_trial_division_basic_values() -> None:
    checker = TrialDivisionPrimeChecker()
    assert checker.is_prime(-7) is False
    assert checker.is_prime(0) is False
    assert checker.is_prime(1) is False
    assert checker.is_prime(2) is True
    assert checker.is_prime(3) is True
    assert checker.is_prime(4) is False
    assert checker.is_prime(9) is False
    assert checker.is_prime(97) is True


def test_trial_division_matches_reference_up_to_10000() -> None:
    table = _reference_table(10_000)
    for n, expected in enumerate(table):
        assert is_prime_trial_division(n) is expected, n


def test_trial_division_squares_of_primes_are_composite() -> None:
    # Divisor exactly at isqrt(n) must be tested.
    for p in (3, 7, 101, 9973):
        assert is_prime_trial_division(p * p) is False


def test_miller_rabin_matches_reference_up_to_10000() -> None:
    table = _reference_table(10_000)
    checker = MillerRabinPrimeChecker()
    for n, expected in enumerate(table):
        assert checker.is_prime(n) is expected, n


def test_miller_rabin_large_values() -> None:
    checker = MillerRabinPrimeChecker()
    assert checker.is_prime(1_000_000_007) is True
    assert checker.is_prime(2**61 - 1) is True
    # Carmichael numbers and a strong pseudoprime to bases 2, 3, 5, 7.
    assert checker.is_prime(561) is False
    assert checker.is_prime(41041) is False
    assert checker.is_prime(3_215_031_751) is False
    assert checker.is_prime((2**61 - 1) * 1_000_000_007) is False


def test_miller_rabin_beyond_proven_bound() -> None:
    checker = MillerRabinPrimeChecker()
    assert checker.is_prime(2**89 - 1) is True
    assert checker.is_prime(2**89 + 1) is False


def test_checkers_satisfy_port() -> None:
    assert isinstance(TrialDivisionPrimeChecker(), PrimeChecker)
    assert isinstance(MillerRabinPrimeChecker(), PrimeChecker)


def test_build_prime_checker_selects_strategy() -> None:
    assert isinstance(build_prime_checker("trial"), TrialDivisionPrimeChecker)
    assert isinstance(build_prime_checker("miller_rabin"), MillerRabinPrimeChecker)
    with pytest.raises(ValueError):
        build_prime_checker("sieve")
