"""Student schemas."""

from datetime import datetime

from roster.schemas.common import BaseSchema


class StudentBase(BaseSchema):
    """The six roster fields as plain strings."""

    student_id: str = ""
    student_name: str = ""
    grade_name: str = ""
    class_name: str = ""
    phone: str = ""
    email: str = ""


class StudentPayload(BaseSchema):
    """
    Raw student fields as sent by a form or read from a sheet.

    Values are loosely typed; the field validator coerces and reports
    on them itself.
    """

    student_id: str | int | float | None = None
    student_name: str | int | float | None = None
    grade_name: str | int | float | None = None
    class_name: str | int | float | None = None
    phone: str | int | float | None = None
    email: str | int | float | None = None


class StudentResponse(BaseSchema):
    """Student response schema."""

    id: int
    student_id: str
    student_name: str
    grade_name: str | None
    class_name: str | None
    phone: str | None
    email: str | None
    created_at: datetime
    updated_at: datetime


class FieldViolation(BaseSchema):
    """One failed field rule."""

    field: str
    value: str
    message: str


class ValidationResult(BaseSchema):
    """Cleaned fields plus every rule they failed."""

    cleaned_data: StudentBase
    violations: list[FieldViolation] = []

    @property
    def errors(self) -> list[str]:
        return [v.message for v in self.violations]

    @property
    def field_errors(self) -> dict[str, str]:
        return {v.field: v.message for v in self.violations}

    @property
    def is_valid(self) -> bool:
        return not self.violations


class ValidationResponse(BaseSchema):
    """Validation outcome as returned to the UI."""

    valid: bool
    cleaned_data: StudentBase
    errors: list[str]
    field_errors: dict[str, str]
