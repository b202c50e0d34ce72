"""Analysis module."""

from .diff import compare_entries, diff_paths, diff_plans, split_annotation
from .timing import aggregate_time, decompose_duration, format_duration

__all__ = [
    "compare_entries",
    "diff_paths",
    "diff_plans",
    "split_annotation",
    "aggregate_time",
    "decompose_duration",
    "format_duration",
]
