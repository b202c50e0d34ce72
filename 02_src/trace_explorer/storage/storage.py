"""JSON file storage for trace documents."""

import asyncio
import json
from pathlib import Path
from typing import Any, Protocol

from ..config import PathLike, resolve_trace_path
from ..errors import MalformedInputError
from ..ingest import parse_document
from ..logging_config import get_logger
from ..models import TraceDocument

logger = get_logger(__name__)


def _write(target: Path, text: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")


class ITraceStorage(Protocol):
    """Reading and writing trace documents."""

    async def load(self, path: PathLike) -> TraceDocument:
        """Read and validate a trace document."""
        ...

    async def save(self, document: dict[str, Any], path: PathLike | None = None) -> Path:
        """Write a trace document, returning the resolved location."""
        ...


class TraceStorage:
    """Trace documents stored as JSON files.

    File access runs in a worker thread so callers on an event loop are not
    blocked while a large trace is read.
    """

    def __init__(self, base_dir: PathLike | None = None):
        self._base_dir = Path(base_dir) if base_dir is not None else None

    def resolve(self, path: PathLike | None) -> Path:
        return resolve_trace_path(path, self._base_dir)

    async def load(self, path: PathLike) -> TraceDocument:
        """Read and validate a trace document."""
        target = self.resolve(path)
        try:
            raw = await asyncio.to_thread(target.read_text, encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"Trace document {target} is not valid UTF-8: {e}") from e
        logger.debug("Read %d bytes from %s", len(raw), target)
        return parse_document(raw)

    async def save(self, document: dict[str, Any], path: PathLike | None = None) -> Path:
        """Write a trace document, returning the resolved location."""
        target = self.resolve(path)
        text = json.dumps(document, indent=2, ensure_ascii=False)

        await asyncio.to_thread(_write, target, text)
        logger.info("Trace exported to %s", target)
        return target
