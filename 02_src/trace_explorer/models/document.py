"""Wire models for the JSON trace document."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .records import TraceRecord


class TraceRecordModel(BaseModel):
    """One entry of the document's ``list``."""

    id: int
    time: int = Field(ge=0, description="Elapsed nanoseconds")
    path: str
    plan: str

    def to_record(self) -> TraceRecord:
        return TraceRecord(id=self.id, time=self.time, path=self.path, plan=self.plan)


class TraceDocument(BaseModel):
    """An exported trace: the explained statement plus its stage records."""

    model_config = ConfigDict(populate_by_name=True)

    explainee: dict[str, Any] = Field(
        default_factory=dict,
        description='Either {"query": ...} or {"view": ...}',
    )
    records: list[TraceRecordModel] = Field(alias="list")

    def to_records(self) -> list[TraceRecord]:
        return [entry.to_record() for entry in self.records]
