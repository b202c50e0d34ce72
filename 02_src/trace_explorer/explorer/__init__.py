"""Explorer module."""

from .session import NO_TRACE_SELECTED, ITraceExplorer, TraceExplorer

__all__ = ["NO_TRACE_SELECTED", "ITraceExplorer", "TraceExplorer"]
