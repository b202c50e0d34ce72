"""Trace ingestion pipeline: normalize, repair, build, index, flag."""

from typing import Any, Iterable, Sequence

from .ingest import normalize_records, parse_document, records_from_rows, repair_records
from .logging_config import get_logger
from .models import Trace, TraceDocument, TraceRecord
from .reconstruction import build_trace_tree, compute_noop_flags, index_trace_tree

logger = get_logger(__name__)


def ingest_records(
    records: Iterable[TraceRecord], explainee: dict[str, Any] | None = None
) -> Trace:
    """Run the reconstruction stages over already validated records.

    Any failure propagates; a partially built trace is never returned.
    """
    normalized = normalize_records(records)
    repaired = repair_records(normalized)
    tree = build_trace_tree(repaired)
    index = index_trace_tree(tree, expected=len(repaired))
    noops = compute_noop_flags(index)

    logger.info(
        "Trace ingested",
        extra={
            "context": {
                "records": len(normalized),
                "repaired": len(repaired),
                "noops": noops,
            }
        },
    )
    return Trace(
        explainee=dict(explainee or {}),
        records=repaired,
        tree=tree,
        index=index,
    )


def ingest_document(document: TraceDocument) -> Trace:
    return ingest_records(document.to_records(), document.explainee)


def ingest_rows(
    rows: Iterable[Sequence[Any]], explainee: dict[str, Any] | None = None
) -> Trace:
    """Ingest tabular ``(time, path, plan)`` rows from a query result."""
    return ingest_records(records_from_rows(rows), explainee)


def load_trace(data: str | bytes | dict[str, Any]) -> Trace:
    """Parse a JSON trace document and ingest it."""
    return ingest_document(parse_document(data))


def to_document(trace: Trace) -> dict[str, Any]:
    """Serialize a trace to the document shape accepted by ``load_trace``."""
    return {
        "explainee": trace.explainee,
        "list": [node.to_record().to_dict() for node in trace.index],
    }
