"""Project-level configuration and path helpers."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_EXPORT_DIR = DATA_DIR / "exports"
DEFAULT_EXPORT_PATH = DEFAULT_EXPORT_DIR / "trace.json"
DEFAULT_LOG_PATH = LOGS_DIR / "trace_explorer.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_trace_path(
    value: PathLike | None = None, base_dir: PathLike | None = None
) -> Path:
    """Resolve a trace document location to an absolute path.

    Relative paths are taken relative to ``base_dir`` (the data directory
    by default). An empty value falls back to TRACE_EXPORT_PATH and then to
    the default export file.
    """
    if not value:
        value = os.getenv("TRACE_EXPORT_PATH") or DEFAULT_EXPORT_PATH

    candidate = Path(value)
    if candidate.is_absolute():
        return candidate

    base = Path(base_dir) if base_dir is not None else DATA_DIR
    return base / candidate
