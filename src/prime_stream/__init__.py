"""Time-synchronized prime number stream engine."""

from prime_stream.kernel.engine import StreamEngine
from prime_stream.services.position_resolver import resolve

__all__ = ["StreamEngine", "resolve"]
