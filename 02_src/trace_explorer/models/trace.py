"""Ingested trace model."""

from dataclasses import dataclass, field
from typing import Any

from .records import TraceRecord
from .tree import TraceNode


@dataclass
class Trace:
    """A fully reconstructed trace.

    ``records`` is the repaired record sequence, ``tree`` its stage tree
    (``None`` for an empty trace) and ``index`` the id-ordered view of every
    tree node.
    """

    explainee: dict[str, Any] = field(default_factory=dict)
    records: list[TraceRecord] = field(default_factory=list)
    tree: TraceNode | None = None
    index: list[TraceNode] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.index
