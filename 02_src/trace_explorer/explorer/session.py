"""Interactive exploration state over an ingested trace."""

import json
from pathlib import Path
from typing import Any, Iterable, Protocol, Sequence

from ..analysis import compare_entries
from ..config import PathLike
from ..errors import TraceError
from ..logging_config import get_logger
from ..models import Trace, TraceComparison, TraceNode
from ..pipeline import ingest_document, ingest_rows, load_trace, to_document
from ..storage import ITraceStorage, TraceStorage

logger = get_logger(__name__)

NO_TRACE_SELECTED = "No trace has been selected yet."


class ITraceExplorer(Protocol):
    """Navigating a trace and comparing its stages."""

    def ingest(self, data: str | bytes | dict[str, Any]) -> Trace | None:
        """Replace the current trace. Failures are kept in ``error``."""
        ...

    async def load(self, path: PathLike) -> Trace | None:
        """Read a trace document from storage and ingest it."""
        ...

    def select(self, position: int) -> TraceNode:
        """Make the entry at ``position`` the active one."""
        ...

    def compare(self, a: int, b: int) -> TraceComparison:
        """Diff two entries and aggregate the time between them."""
        ...


class TraceExplorer:
    """Holds one ingested trace along with selection and collapse state."""

    def __init__(self, storage: ITraceStorage | None = None):
        self._storage = storage or TraceStorage()
        self._trace: Trace | None = None
        self._error: str | None = NO_TRACE_SELECTED
        self._active: int | None = None
        self._closed: set[int] = set()

    # Ingestion

    def ingest(self, data: str | bytes | dict[str, Any]) -> Trace | None:
        """Replace the current trace. Failures are kept in ``error``."""
        try:
            trace = load_trace(data)
        except TraceError as e:
            return self._fail(e)
        return self._accept(trace)

    def ingest_rows(
        self, rows: Iterable[Sequence[Any]], explainee: dict[str, Any] | None = None
    ) -> Trace | None:
        """Replace the current trace with one built from query result rows."""
        try:
            trace = ingest_rows(rows, explainee)
        except TraceError as e:
            return self._fail(e)
        return self._accept(trace)

    async def load(self, path: PathLike) -> Trace | None:
        """Read a trace document from storage and ingest it."""
        try:
            document = await self._storage.load(path)
            trace = ingest_document(document)
        except (TraceError, OSError) as e:
            return self._fail(e)
        return self._accept(trace)

    async def export(self, path: PathLike | None = None) -> Path:
        """Write the current trace back as a JSON document."""
        return await self._storage.save(to_document(self.trace), path)

    def _accept(self, trace: Trace) -> Trace:
        self._trace = trace
        self._error = None
        self._active = None if trace.is_empty else 0
        self._closed = set()
        return trace

    def _fail(self, error: Exception) -> None:
        logger.error("Trace ingestion failed: %s", error, exc_info=True)
        self._trace = None
        self._error = str(error)
        self._active = None
        self._closed = set()
        return None

    # State

    @property
    def trace(self) -> Trace:
        """Get the current trace."""
        if self._trace is None:
            raise RuntimeError(self._error or NO_TRACE_SELECTED)
        return self._trace

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def active(self) -> int | None:
        return self._active

    @property
    def active_entry(self) -> TraceNode | None:
        if self._active is None:
            return None
        return self.trace.index[self._active]

    # Navigation

    def select(self, position: int) -> TraceNode:
        """Make the entry at ``position`` the active one."""
        index = self.trace.index
        if not 0 <= position < len(index):
            raise IndexError(f"Index position {position} out of range")
        self._active = position
        return index[position]

    def is_selectable(self, position: int) -> bool:
        """Noop stages are shown but cannot be focused."""
        return not self.trace.index[position].noop

    def next_change(self) -> TraceNode | None:
        """Jump to the next entry whose plan differs from the active one.

        Wraps around to the first entry when no later plan differs.
        """
        index = self.trace.index
        if self._active is None:
            return None

        current = index[self._active].plan
        self._active = next(
            (pos for pos in range(self._active, len(index)) if index[pos].plan != current),
            0,
        )
        return index[self._active]

    def previous_change(self) -> TraceNode | None:
        """Jump to the first entry carrying the plan that preceded the active one.

        From the first entry the plan of the last entry is used. Falls back to
        the last entry when no earlier entry carries that plan.
        """
        index = self.trace.index
        if self._active is None:
            return None

        previous = index[self._active - 1].plan
        self._active = next(
            (pos for pos in range(self._active) if index[pos].plan == previous),
            len(index) - 1,
        )
        return index[self._active]

    # Collapse state

    def hide_all(self) -> None:
        """Collapse every stage except the root."""
        trace = self.trace
        self._closed = {node.id for node in trace.index if node is not trace.tree}

    def show_all(self) -> None:
        self._closed = set()

    def toggle(self, position: int) -> bool:
        """Flip the collapsed state of an entry. Returns True if now collapsed."""
        node_id = self.trace.index[position].id
        if node_id in self._closed:
            self._closed.discard(node_id)
            return False
        self._closed.add(node_id)
        return True

    def is_collapsed(self, position: int) -> bool:
        return self.trace.index[position].id in self._closed

    # Presentation helpers

    def copy_text(self, position: int | None = None) -> str:
        """Path and plan of an entry (the active one by default) as plain text."""
        if position is None:
            position = self._active
        if position is None:
            raise RuntimeError("No active trace entry")
        node = self.trace.index[position]
        return node.path + "\n" + node.plan

    def explainee_text(self) -> str:
        """The explained SQL query, or the raw explainee for other kinds."""
        explainee = self.trace.explainee
        if explainee.get("query"):
            return explainee["query"]
        return json.dumps(explainee)

    def compare(self, a: int, b: int) -> TraceComparison:
        """Diff two entries and aggregate the time between them."""
        return compare_entries(self.trace.index, a, b)
