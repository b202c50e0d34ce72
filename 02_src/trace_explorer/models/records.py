"""Trace record data models."""

from dataclasses import dataclass

MISSING_PLAN = "(missing plan)"


@dataclass
class TraceRecord:
    """A single optimizer-stage record as emitted by an EXPLAIN trace."""

    id: int
    time: int  # elapsed nanoseconds
    path: str  # '/'-delimited stage path from the root
    plan: str

    @property
    def is_missing_plan(self) -> bool:
        """True for placeholders inserted to close an unterminated stage."""
        return self.plan == MISSING_PLAN

    def to_dict(self) -> dict:
        """Serialize to the JSON trace list entry shape."""
        return {
            "id": self.id,
            "time": self.time,
            "path": self.path,
            "plan": self.plan,
        }
