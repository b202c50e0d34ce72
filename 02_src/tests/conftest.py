"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_document(*entries, explainee=None) -> dict:
    """Build a trace document from (time, path, plan) tuples numbered by position."""
    return {
        "explainee": explainee if explainee is not None else {"query": "SELECT * FROM t"},
        "list": [
            {"id": i, "time": time, "path": path, "plan": plan}
            for i, (time, path, plan) in enumerate(entries)
        ],
    }


@pytest.fixture
def nested_document():
    """A complete trace: two nested stages, a sibling and the closing root."""
    return make_document(
        (10, "optimize/local/logical", "Get t0"),
        (20, "optimize/local/physical", "Get t1"),
        (35, "optimize/local", "Get t2"),
        (5, "optimize/global", "Get t3"),
        (45, "optimize", "Get t4"),
    )


@pytest.fixture
def gapped_document():
    """A trace that jumps from root/a/x straight to root/b."""
    return make_document(
        (5, "root/a/x", "P1"),
        (7, "root/b", "P2"),
    )


@pytest.fixture
def repeated_plan_document():
    """Sibling stages where the second one leaves the plan unchanged."""
    return make_document(
        (1, "root/a", "P"),
        (2, "root/b", "P"),
        (3, "root/c", "Q"),
        (6, "root", "R"),
    )


@pytest.fixture
def storage(tmp_path):
    """Create storage rooted in a temporary directory."""
    from trace_explorer.storage import TraceStorage

    return TraceStorage(base_dir=tmp_path)


@pytest.fixture
def nested_document_path(tmp_path, nested_document):
    """Write the nested trace to disk."""
    path = tmp_path / "nested.json"
    path.write_text(json.dumps(nested_document), encoding="utf-8")
    return path


@pytest_asyncio.fixture
async def loaded_explorer(storage, nested_document_path):
    """Create an explorer with the nested trace loaded from storage."""
    from trace_explorer.explorer import TraceExplorer

    explorer = TraceExplorer(storage=storage)
    await explorer.load(nested_document_path)
    yield explorer
