"""Stage tree data models."""

from dataclasses import dataclass, field
from enum import Enum

from ..errors import StructuralInconsistencyError
from .records import TraceRecord


class NodeStatus(str, Enum):
    """Lifecycle of a stage node during tree construction."""

    OPEN = "open"  # may still receive children through path continuation
    SEALED = "sealed"  # closing record written, subtree complete


@dataclass(eq=False)
class TraceNode:
    """A stage in the optimization pipeline.

    Nodes compare and hash by identity; the same path may legitimately occur
    in several sibling nodes.
    """

    path: str
    id: int | None = None
    time: int = 0
    plan: str = ""
    noop: bool = False
    status: NodeStatus = NodeStatus.OPEN
    children: list["TraceNode"] = field(default_factory=list)

    @property
    def segment(self) -> str:
        """Last path segment, used as the stage label."""
        return self.path.split("/")[-1]

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_sealed(self) -> bool:
        return self.status is NodeStatus.SEALED

    def seal(self, record: TraceRecord) -> None:
        """Write the closing record onto this node."""
        if self.is_sealed:
            raise StructuralInconsistencyError(
                f"Stage {self.path!r} (id={self.id}) is already sealed"
            )
        self.id = record.id
        self.time = record.time
        self.plan = record.plan
        self.status = NodeStatus.SEALED

    def to_record(self) -> TraceRecord:
        """Project the node back onto a trace record."""
        return TraceRecord(id=self.id, time=self.time, path=self.path, plan=self.plan)
