"""Core data models for Trace Explorer."""

from .records import MISSING_PLAN, TraceRecord
from .tree import NodeStatus, TraceNode
from .trace import Trace
from .document import TraceDocument, TraceRecordModel
from .diff import ChangeKind, PathSegment, PlanLine, TraceComparison

__all__ = [
    # Records
    "MISSING_PLAN",
    "TraceRecord",
    # Tree
    "NodeStatus",
    "TraceNode",
    "Trace",
    # Wire format
    "TraceDocument",
    "TraceRecordModel",
    # Comparison
    "ChangeKind",
    "PathSegment",
    "PlanLine",
    "TraceComparison",
]
