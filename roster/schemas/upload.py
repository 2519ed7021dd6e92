"""Upload schemas."""

import enum
from typing import Any

from roster.schemas.common import BaseSchema
from roster.schemas.student import StudentBase


class ImportStatus(str, enum.Enum):
    """Import outcome enumeration."""

    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"


class RejectionEntry(BaseSchema):
    """A spreadsheet row that failed validation."""

    position: int
    original_row: dict[str, Any]
    errors: list[str]


class SummaryEntry(BaseSchema):
    """Accepted student count for one grade and class."""

    grade_name: str
    class_name: str
    count: int


class PreviewRow(StudentBase):
    """Cleaned row as shown in the upload preview."""

    position: int
    has_error: bool


class ImportPreview(BaseSchema):
    """Classification of an uploaded workbook, nothing stored."""

    total_rows: int
    accepted_rows: int
    rejected_rows: int
    rows: list[PreviewRow] = []
    rejections: list[RejectionEntry] = []
    summary: list[SummaryEntry] = []


class ImportResult(BaseSchema):
    """Result of an import attempt."""

    status: ImportStatus
    total_rows: int
    imported_rows: int
    rejections: list[RejectionEntry] = []
    summary: list[SummaryEntry] = []
    message: str
