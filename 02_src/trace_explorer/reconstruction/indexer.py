"""Flat, id-ordered index over a stage tree."""

from ..errors import StructuralInconsistencyError
from ..models import TraceNode


def post_order(node: TraceNode) -> list[TraceNode]:
    """All nodes of the subtree, children left to right before their parent."""
    nodes: list[TraceNode] = []
    for child in node.children:
        nodes.extend(post_order(child))
    nodes.append(node)
    return nodes


def descendants(node: TraceNode) -> list[TraceNode]:
    """All nodes strictly below ``node``."""
    return post_order(node)[:-1]


def index_trace_tree(
    root: TraceNode | None, expected: int | None = None
) -> list[TraceNode]:
    """Create an index of the tree nodes in ascending id order.

    Ids follow arrival order, so the index is the chronological record view
    with every composite stage placed where its closing record arrived.
    ``expected`` is the number of records the tree was built from.
    """
    nodes = post_order(root) if root is not None else []

    unsealed = [node.path for node in nodes if not node.is_sealed]
    if unsealed:
        raise StructuralInconsistencyError(
            f"Stages without a closing record: {unsealed}"
        )

    index = sorted(nodes, key=lambda node: node.id)

    if expected is not None and len(index) != expected:
        raise StructuralInconsistencyError(
            f"Trace list and trace index sizes don't match: "
            f"{expected} records, {len(index)} index entries"
        )
    return index
