"""Record normalization and document parsing."""

from typing import Any, Iterable, Sequence

from pydantic import ValidationError

from ..errors import MalformedInputError
from ..logging_config import get_logger
from ..models import TraceDocument, TraceRecord, TraceRecordModel

logger = get_logger(__name__)


def parse_document(data: str | bytes | dict[str, Any]) -> TraceDocument:
    """Validate a trace document given as JSON text or an already decoded dict."""
    try:
        if isinstance(data, (str, bytes)):
            return TraceDocument.model_validate_json(data)
        return TraceDocument.model_validate(data)
    except ValidationError as e:
        raise MalformedInputError(f"Invalid trace document: {e}") from e


def records_from_rows(rows: Iterable[Sequence[Any]]) -> list[TraceRecord]:
    """Adapt raw ``(time, path, plan)`` result rows, numbering them by position."""
    records = []
    for position, row in enumerate(rows):
        try:
            if len(row) != 3:
                raise MalformedInputError(
                    f"Row {position} has {len(row)} columns, expected (time, path, plan)"
                )
            time, path, plan = row
        except TypeError as e:
            raise MalformedInputError(f"Row {position} is not a (time, path, plan) row: {e}") from e
        try:
            model = TraceRecordModel(id=position, time=time, path=path, plan=plan)
        except ValidationError as e:
            raise MalformedInputError(f"Invalid row {position}: {e}") from e
        records.append(model.to_record())
    return records


def normalize_records(records: Iterable[TraceRecord]) -> list[TraceRecord]:
    """Return the records in ascending id order.

    The sort is stable, so records sharing an id keep their arrival order.
    Nothing is dropped or modified.
    """
    normalized = sorted(records, key=lambda record: record.id)
    logger.debug("Normalized %d trace records", len(normalized))
    return normalized
