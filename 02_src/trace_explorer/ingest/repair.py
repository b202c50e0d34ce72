"""Completion of trace record lists with unterminated stages.

EXPLAIN trace emitters may skip the closing record of a stage that was
pruned or never reached. Left as is, the tree builder would nest the
following records under the wrong parent. The repair pass inserts a
``(missing plan)`` record for every stage that was opened but not closed
before a record outside of it arrived.
"""

from dataclasses import replace
from typing import Iterable, Sequence

from ..logging_config import get_logger
from ..models import MISSING_PLAN, TraceRecord

logger = get_logger(__name__)


def split_path(path: str) -> list[str]:
    """Split a stage path into segments, ignoring trailing ``~`` markers."""
    return path.rstrip("~").split("/")


class OpenPathStack:
    """Segments of the stage chain that is currently open."""

    def __init__(self, segments: Iterable[str] = ()):
        self._segments: list[str] = list(segments)

    def __len__(self) -> int:
        return len(self._segments)

    @property
    def segments(self) -> list[str]:
        return self._segments.copy()

    def common_prefix(self, segments: Sequence[str]) -> int:
        """Number of leading segments shared with ``segments``."""
        common = 0
        for open_segment, segment in zip(self._segments, segments):
            if open_segment != segment:
                break
            common += 1
        return common

    def path(self, depth: int) -> str:
        """Path of the open ancestor with ``depth`` segments."""
        return "/".join(self._segments[:depth])

    def pop(self) -> str:
        return self._segments.pop()

    def truncate(self, depth: int) -> None:
        del self._segments[depth:]

    def extend(self, segments: Iterable[str]) -> None:
        self._segments.extend(segments)


def enclosed_time(records: Sequence[TraceRecord], path: str) -> int:
    """Time spent in the direct children of ``path`` at the tail of ``records``.

    Only the trailing run of records nested under ``path`` is considered.
    Grandchildren are skipped: their time is already carried by the closing
    record of the child they belong to.
    """
    prefix = f"{path}/"
    start = 0
    for position in range(len(records) - 1, -1, -1):
        if not records[position].path.startswith(prefix):
            start = position + 1
            break

    return sum(
        record.time
        for record in records[start:]
        if "/" not in record.path[len(prefix):]
    )


def _close_ancestors(
    open_segments: OpenPathStack, repaired: list[TraceRecord], depth: int
) -> None:
    """Emit missing-plan records for open ancestors deeper than ``depth``.

    The innermost open segment is the record that was just seen and needs no
    closing record. Ancestors are closed deepest first.
    """
    for length in range(len(open_segments) - 1, depth, -1):
        path = open_segments.path(length)
        repaired.append(
            TraceRecord(
                id=len(repaired),
                time=enclosed_time(repaired, path),
                path=path,
                plan=MISSING_PLAN,
            )
        )
    open_segments.truncate(depth)


def repair_records(records: Iterable[TraceRecord]) -> list[TraceRecord]:
    """Insert missing-plan records so that every opened stage gets closed.

    Ids are regenerated densely from 0 in output order. A sequence without
    gaps comes back with the same paths, times and plans.
    """
    open_segments = OpenPathStack()
    repaired: list[TraceRecord] = []
    inserted = 0

    for record in records:
        segments = split_path(record.path)
        common = open_segments.common_prefix(segments)
        closed = len(open_segments) - common

        if closed == 1:
            # Sibling or parent of the last seen stage
            open_segments.pop()
        elif closed > 1:
            logger.debug(
                "Missing segments before %s: %s",
                record.path,
                open_segments.segments[common:-1],
            )
            before = len(repaired)
            _close_ancestors(open_segments, repaired, common)
            inserted += len(repaired) - before

        open_segments.extend(segments[common:])
        repaired.append(replace(record, id=len(repaired)))

    if len(open_segments) > 1:
        # The trace did not end at its root stage
        logger.debug("Missing segments at the end: %s", open_segments.segments)
        before = len(repaired)
        _close_ancestors(open_segments, repaired, 0)
        inserted += len(repaired) - before

    if inserted:
        logger.info(
            "Inserted %d missing plan records",
            inserted,
            extra={"context": {"inserted": inserted, "records": len(repaired)}},
        )
    return repaired
