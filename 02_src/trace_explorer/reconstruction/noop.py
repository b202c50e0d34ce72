"""Detection of stages that left the plan unchanged."""

from ..models import TraceNode
from .indexer import descendants


def non_descendant_predecessor(index: list[TraceNode], position: int) -> TraceNode | None:
    """Closest entry before ``position`` that is not nested under it."""
    nested = set(descendants(index[position]))
    for candidate in reversed(index[:position]):
        if candidate not in nested:
            return candidate
    return None


def compute_noop_flags(index: list[TraceNode]) -> int:
    """Mark entries whose plan equals that of their non-descendant predecessor.

    Returns the number of entries flagged.
    """
    flagged = 0
    for position, node in enumerate(index):
        pred = non_descendant_predecessor(index, position)
        node.noop = pred is not None and node.plan == pred.plan
        flagged += node.noop
    return flagged
