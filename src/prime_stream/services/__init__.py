from .history_buffer import HistoryBuffer
from .position_resolver import genesis_label, resolve, to_epoch_ms
from .prime_checker import (
    MillerRabinPrimeChecker,
    TrialDivisionPrimeChecker,
    build_prime_checker,
    is_prime_trial_division,
)
from .prime_generator import ForwardSearch, next_prime, previous_primes
from .reveal_scheduler import RevealScheduler, trickle_increment
from .stream_state import StreamState, is_live

__all__ = [
    "ForwardSearch",
    "HistoryBuffer",
    "MillerRabinPrimeChecker",
    "RevealScheduler",
    "StreamState",
    "TrialDivisionPrimeChecker",
    "build_prime_checker",
    "genesis_label",
    "is_live",
    "is_prime_trial_division",
    "next_prime",
    "previous_primes",
    "resolve",
    "to_epoch_ms",
    "trickle_increment",
]
