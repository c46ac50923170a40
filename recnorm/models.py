from __future__ import annotations

from typing import List, Optional, Sequence
from pydantic import BaseModel, Field

from .rules import FIELD_NAMES


class Record(BaseModel):
    """
    One data row of the fixed 8-column layout.

    Field order matches the input columns. The caller checks the field count
    before building a Record; values are expected to be valid text already.
    """

    timestamp: str
    address: str
    zip: str
    full_name: str
    foo_duration: str
    bar_duration: str
    total_duration: str
    notes: str

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "Record":
        return cls(**dict(zip(FIELD_NAMES, fields)))

    def to_fields(self) -> List[str]:
        """Current values in column order, ready for a csv writer."""
        return [getattr(self, name) for name in FIELD_NAMES]


class NormalizedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class ReportSummary(BaseModel):
    rows_read: int = 0
    rows_written: int = 0
    rows_failed: int = 0
    rows_skipped: int = 0
    header_written: bool = False


class ReportItem(BaseModel):
    row: Optional[int] = None
    issue: str
    value: Optional[str] = None
    message: str
    action: str


class NormalizationReport(BaseModel):
    summary: ReportSummary = Field(default_factory=ReportSummary)
    errors: List[ReportItem] = Field(default_factory=list)


class NormalizeResponse(BaseModel):
    normalized_csv: NormalizedCsv
    report: NormalizationReport

class HealthResponse(BaseModel):
    ok: bool = True
