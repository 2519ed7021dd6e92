"""Row classification and grade/class summaries for roster imports."""

from collections.abc import Iterable, Mapping
from typing import Any

from roster.schemas.common import BaseSchema
from roster.schemas.student import StudentBase, ValidationResult
from roster.schemas.upload import PreviewRow, RejectionEntry, SummaryEntry
from roster.services.validation import STUDENT_FIELDS, validate_student_data


class ClassifiedRow(BaseSchema):
    """One spreadsheet row after validation."""

    position: int
    original_row: dict[str, Any]
    result: ValidationResult

    @property
    def accepted(self) -> StudentBase | None:
        """Cleaned record, or None when the row was rejected."""
        return self.result.cleaned_data if self.result.is_valid else None

    @property
    def rejection(self) -> RejectionEntry | None:
        if self.result.is_valid:
            return None
        return RejectionEntry(
            position=self.position,
            original_row=self.original_row,
            errors=self.result.errors,
        )

    def to_preview(self) -> PreviewRow:
        return PreviewRow(
            **self.result.cleaned_data.model_dump(),
            position=self.position,
            has_error=not self.result.is_valid,
        )


def classify_row(position: int, raw_row: Mapping[str, Any]) -> ClassifiedRow:
    """Validate the roster columns of a row; any other columns are ignored."""
    fields = {field: raw_row.get(field) for field in STUDENT_FIELDS}
    return ClassifiedRow(
        position=position,
        original_row={str(key): value for key, value in raw_row.items()},
        result=validate_student_data(fields),
    )


def classify_rows(rows: Iterable[Mapping[str, Any]]) -> list[ClassifiedRow]:
    """Classify rows in order, numbering them from 1."""
    return [classify_row(position, row) for position, row in enumerate(rows, start=1)]


def accepted_records(classified: Iterable[ClassifiedRow]) -> list[StudentBase]:
    return [row.accepted for row in classified if row.accepted is not None]


def rejections(classified: Iterable[ClassifiedRow]) -> list[RejectionEntry]:
    return [row.rejection for row in classified if row.rejection is not None]


def summarize(records: Iterable[StudentBase]) -> dict[str, dict[str, int]]:
    """
    Count records per grade, then per class.

    Keys are the cleaned names, so grouping is whitespace-insensitive at the
    edges but case-sensitive. Groups keep the order they were first seen in.
    """
    summary: dict[str, dict[str, int]] = {}
    for record in records:
        classes = summary.setdefault(record.grade_name.strip(), {})
        class_name = record.class_name.strip()
        classes[class_name] = classes.get(class_name, 0) + 1
    return summary


def summary_entries(records: Iterable[StudentBase]) -> list[SummaryEntry]:
    """Flatten the grade/class summary into rows for display."""
    return [
        SummaryEntry(grade_name=grade, class_name=class_name, count=count)
        for grade, classes in summarize(records).items()
        for class_name, count in classes.items()
    ]
