"""Stage tree construction from a repaired record sequence."""

from typing import Iterable

from ..errors import StructuralInconsistencyError
from ..logging_config import get_logger
from ..models import TraceNode, TraceRecord

logger = get_logger(__name__)


def build_trace_tree(records: Iterable[TraceRecord]) -> TraceNode | None:
    """Convert a list of trace records into a tree of stages.

    Each record walks the tree from the top, one path segment at a time. The
    last child of the current node is reused while it has the same partial
    path and is still open; otherwise a new open child is appended. Writing a
    record onto a node seals it, so a later record with the same path starts
    a new sibling.

    Returns the unique root stage, or None when there are no records.
    """
    super_root = TraceNode(path="")
    count = 0

    for record in records:
        node, path = super_root, ""
        for segment in record.path.split("/"):
            path = f"{path}/{segment}" if path else segment
            last = node.children[-1] if node.children else None
            if last is None or last.is_sealed or last.path != path:
                last = TraceNode(path=path)
                node.children.append(last)
            node = last

        node.seal(record)
        count += 1

    if not super_root.children:
        return None

    if len(super_root.children) != 1:
        roots = [child.path for child in super_root.children]
        raise StructuralInconsistencyError(f"Root node is not unique: {roots}")

    logger.debug("Built trace tree from %d records", count)
    return super_root.children[0]
