from .clock import Clock
from .log_sink import LogSink
from .prime_checker import PrimeChecker

# Ports are protocol-only boundaries.
__all__ = ["Clock", "LogSink", "PrimeChecker"]
