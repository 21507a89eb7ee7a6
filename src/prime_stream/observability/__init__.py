from .logging import LogMessage, StreamLogger

__all__ = ["LogMessage", "StreamLogger"]
