"""Storage module."""

from .storage import ITraceStorage, TraceStorage

__all__ = ["ITraceStorage", "TraceStorage"]
