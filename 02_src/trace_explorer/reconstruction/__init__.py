"""Tree reconstruction module."""

from .builder import build_trace_tree
from .indexer import descendants, index_trace_tree, post_order
from .noop import compute_noop_flags, non_descendant_predecessor

__all__ = [
    "build_trace_tree",
    "descendants",
    "index_trace_tree",
    "post_order",
    "compute_noop_flags",
    "non_descendant_predecessor",
]
