"""Trace Explorer: optimizer trace reconstruction and analysis."""

from .analysis import (
    aggregate_time,
    compare_entries,
    diff_paths,
    diff_plans,
    format_duration,
    split_annotation,
)
from .errors import MalformedInputError, StructuralInconsistencyError, TraceError
from .explorer import ITraceExplorer, TraceExplorer
from .ingest import normalize_records, parse_document, records_from_rows, repair_records
from .models import (
    MISSING_PLAN,
    ChangeKind,
    NodeStatus,
    PathSegment,
    PlanLine,
    Trace,
    TraceComparison,
    TraceDocument,
    TraceNode,
    TraceRecord,
)
from .pipeline import ingest_document, ingest_records, ingest_rows, load_trace, to_document
from .reconstruction import build_trace_tree, compute_noop_flags, index_trace_tree
from .storage import ITraceStorage, TraceStorage

__all__ = [
    # Pipeline
    "load_trace",
    "ingest_document",
    "ingest_records",
    "ingest_rows",
    "to_document",
    # Stages
    "normalize_records",
    "parse_document",
    "records_from_rows",
    "repair_records",
    "build_trace_tree",
    "index_trace_tree",
    "compute_noop_flags",
    "aggregate_time",
    "format_duration",
    "compare_entries",
    "diff_paths",
    "diff_plans",
    "split_annotation",
    # Models
    "MISSING_PLAN",
    "ChangeKind",
    "NodeStatus",
    "PathSegment",
    "PlanLine",
    "Trace",
    "TraceComparison",
    "TraceDocument",
    "TraceNode",
    "TraceRecord",
    # Errors
    "TraceError",
    "MalformedInputError",
    "StructuralInconsistencyError",
    # Components
    "ITraceExplorer",
    "TraceExplorer",
    "ITraceStorage",
    "TraceStorage",
]
