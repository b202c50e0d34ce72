"""Pairwise comparison result models."""

from dataclasses import dataclass, field
from enum import Enum


class ChangeKind(str, Enum):
    """Classification of a diffed run."""

    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


@dataclass
class PathSegment:
    """A run of path tokens sharing one change kind."""

    kind: ChangeKind
    text: str


@dataclass
class PlanLine:
    """A displayed plan line with its trailing attribute block split off."""

    kind: ChangeKind
    text: str
    annotation: str | None = None

    def render(self, show_annotations: bool = True) -> str:
        if show_annotations and self.annotation:
            return self.text + self.annotation
        return self.text


@dataclass
class TraceComparison:
    """Everything shown when two index entries are compared."""

    path_diff: list[PathSegment] = field(default_factory=list)
    plan_diff: list[PlanLine] = field(default_factory=list)
    duration: int = 0  # nanoseconds
    duration_text: str = "0ns"
