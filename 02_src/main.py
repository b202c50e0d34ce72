"""Main entry point for Trace Explorer."""

import argparse
import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from trace_explorer.explorer import TraceExplorer
from trace_explorer.logging_config import setup_logging
from trace_explorer.models import ChangeKind, TraceComparison, TraceNode

_DIFF_PREFIX = {
    ChangeKind.EQUAL: " ",
    ChangeKind.INSERT: "+",
    ChangeKind.DELETE: "-",
}


def render_outline(node: TraceNode, depth: int = 0) -> list[str]:
    """Indented stage outline, most recent stage first as in the explorer UI."""
    marker = "." if node.noop else "*"
    lines = [f"{'  ' * depth}{marker} [{node.id}] {node.segment}"]
    for child in reversed(node.children):
        lines.extend(render_outline(child, depth + 1))
    return lines


def render_comparison(comparison: TraceComparison, show_annotations: bool) -> list[str]:
    path = "".join(
        segment.text if segment.kind is ChangeKind.EQUAL
        else f"[{_DIFF_PREFIX[segment.kind]}{segment.text}]"
        for segment in comparison.path_diff
    )
    lines = [path, f"time: {comparison.duration_text}"]
    lines.extend(
        _DIFF_PREFIX[line.kind] + line.render(show_annotations)
        for line in comparison.plan_diff
    )
    return lines


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Explore an optimizer trace.")
    parser.add_argument("trace", help="Trace JSON document")
    parser.add_argument(
        "--compare",
        nargs=2,
        type=int,
        metavar=("FROM", "TO"),
        help="Diff two index positions and show the time between them",
    )
    parser.add_argument(
        "--hide-annotations",
        action="store_true",
        help="Drop trailing '// {...}' attribute blocks from plan lines",
    )
    parser.add_argument(
        "--export",
        nargs="?",
        const="",
        default=None,
        help="Write the repaired trace (defaults to TRACE_EXPORT_PATH)",
    )
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    explorer = TraceExplorer()
    await explorer.load(Path(args.trace).resolve())

    if explorer.error:
        print(f"error: {explorer.error}", file=sys.stderr)
        return 1

    trace = explorer.trace
    if trace.tree is None:
        print("(empty trace)")
    else:
        print("\n".join(render_outline(trace.tree)))

    if args.compare:
        try:
            comparison = explorer.compare(*args.compare)
        except IndexError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        print()
        print("\n".join(render_comparison(comparison, not args.hide_annotations)))

    if args.export is not None:
        target = await explorer.export(args.export or None)
        print(f"exported to {target}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line explorer."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    args = parse_args(argv)
    setup_logging(log_level=args.log_level or os.getenv("LOG_LEVEL", "WARNING"))

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
