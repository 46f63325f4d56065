from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class CleanedCsv(BaseModel):
    filename: str
    sha256: str
    encoding: str = Field(default="utf-8")
    content: str


class ReportSummary(BaseModel):
    rows: int = 0
    columns: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0


class EncodingInfo(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class CleaningReport(BaseModel):
    summary: ReportSummary
    message: str
    encoding: EncodingInfo
    warnings: List[ReportItem] = Field(default_factory=list)
    errors: List[ReportItem] = Field(default_factory=list)


class CleanResponse(BaseModel):
    cleaned_csv: CleanedCsv
    report: CleaningReport


class HealthResponse(BaseModel):
    ok: bool = True
