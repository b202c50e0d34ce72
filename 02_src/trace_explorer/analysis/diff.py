"""Pairwise diff of two trace entries."""

import re
from difflib import SequenceMatcher

from ..models import ChangeKind, PathSegment, PlanLine, TraceComparison, TraceNode
from .timing import aggregate_time, format_duration

ANNOTATION_MARKER = " // {"

_WORD_TOKEN = re.compile(r"\w+|\s+|[^\w\s]")


def split_annotation(line: str) -> tuple[str, str | None]:
    """Split a plan line at its trailing ``// {...}`` attribute block."""
    marker = line.rfind(ANNOTATION_MARKER)
    if marker < 0 or not line.rstrip().endswith("}"):
        return line, None
    return line[:marker], line[marker:]


def _append_segment(segments: list[PathSegment], kind: ChangeKind, text: str) -> None:
    if segments and segments[-1].kind is kind:
        segments[-1].text += text
    else:
        segments.append(PathSegment(kind=kind, text=text))


def diff_paths(old: str, new: str) -> list[PathSegment]:
    """Word-level diff of two stage paths."""
    old_tokens = _WORD_TOKEN.findall(old)
    new_tokens = _WORD_TOKEN.findall(new)
    matcher = SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)

    segments: list[PathSegment] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            _append_segment(segments, ChangeKind.EQUAL, "".join(new_tokens[j1:j2]))
            continue
        if i2 > i1:
            _append_segment(segments, ChangeKind.DELETE, "".join(old_tokens[i1:i2]))
        if j2 > j1:
            _append_segment(segments, ChangeKind.INSERT, "".join(new_tokens[j1:j2]))
    return segments


def _plan_line(kind: ChangeKind, line: str) -> PlanLine:
    text, annotation = split_annotation(line)
    return PlanLine(kind=kind, text=text, annotation=annotation)


def _plan_lines(plan: str) -> list[str]:
    # only "\n" ends a line; a final newline does not open an empty one
    if not plan:
        return []
    return plan.removesuffix("\n").split("\n")


def diff_plans(old: str, new: str) -> list[PlanLine]:
    """Line-level diff of two plans.

    Lines are matched with their leading whitespace removed, so a change of
    indentation alone is not reported. Unchanged lines keep the indentation
    of the new plan.
    """
    old_lines = _plan_lines(old)
    new_lines = _plan_lines(new)
    matcher = SequenceMatcher(
        None,
        [line.lstrip() for line in old_lines],
        [line.lstrip() for line in new_lines],
        autojunk=False,
    )

    lines: list[PlanLine] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            lines.extend(_plan_line(ChangeKind.EQUAL, line) for line in new_lines[j1:j2])
            continue
        lines.extend(_plan_line(ChangeKind.DELETE, line) for line in old_lines[i1:i2])
        lines.extend(_plan_line(ChangeKind.INSERT, line) for line in new_lines[j1:j2])
    return lines


def compare_entries(index: list[TraceNode], a: int, b: int) -> TraceComparison:
    """Compare the entry at position ``a`` (old side) with the one at ``b``."""
    old, new = index[a], index[b]
    duration = aggregate_time(index, a, b)
    return TraceComparison(
        path_diff=diff_paths(old.path, new.path),
        plan_diff=diff_plans(old.plan, new.plan),
        duration=duration,
        duration_text=format_duration(duration),
    )
