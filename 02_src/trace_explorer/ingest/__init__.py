"""Ingest module."""

from .normalizer import normalize_records, parse_document, records_from_rows
from .repair import OpenPathStack, enclosed_time, repair_records, split_path

__all__ = [
    "normalize_records",
    "parse_document",
    "records_from_rows",
    "OpenPathStack",
    "enclosed_time",
    "repair_records",
    "split_path",
]
