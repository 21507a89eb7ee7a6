from .engine import StreamEngine
from .scheduler import CancellationToken, CooperativeScheduler, TimerHandle

# Kernel exports are public for composition and tests.
__all__ = [
    "CancellationToken",
    "CooperativeScheduler",
    "StreamEngine",
    "TimerHandle",
]
