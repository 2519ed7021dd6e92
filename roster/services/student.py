"""Student management service."""

from collections.abc import Mapping
from typing import Any

from roster.core.exceptions import (
    NotFoundError,
    RecordValidationError,
    StorageFailure,
    StorageFailureKind,
)
from roster.schemas.student import StudentResponse, ValidationResponse
from roster.services.store import DuplicateKeyError, StoreError, StudentStore
from roster.services.validation import validate_student_data


class StudentService:
    """Student record listing and editing service."""

    def __init__(self, store: StudentStore):
        self.store = store

    def list_students(self) -> list[StudentResponse]:
        try:
            students = self.store.select_all()
        except StoreError:
            raise StorageFailure(StorageFailureKind.UNKNOWN, "Error fetching students")
        return [StudentResponse.model_validate(s) for s in students]

    def get_student(self, id: int) -> StudentResponse:
        """Get student by internal ID."""
        try:
            student = self.store.get(id)
        except StoreError:
            raise StorageFailure(StorageFailureKind.UNKNOWN, "Error fetching student")
        if student is None:
            raise NotFoundError("Student", str(id))
        return StudentResponse.model_validate(student)

    def validate(self, payload: Mapping[str, Any]) -> ValidationResponse:
        """Run the field rules without storing anything."""
        result = validate_student_data(payload)
        return ValidationResponse(
            valid=result.is_valid,
            cleaned_data=result.cleaned_data,
            errors=result.errors,
            field_errors=result.field_errors,
        )

    def update_student(self, id: int, payload: Mapping[str, Any]) -> StudentResponse:
        """
        Validate a payload and overwrite all fields of one student.

        The business student_id may change; the store's unique constraint
        still applies.
        """
        result = validate_student_data(payload)
        if not result.is_valid:
            raise RecordValidationError(result.errors, result.field_errors)

        try:
            affected = self.store.update_one(id, result.cleaned_data)
        except DuplicateKeyError:
            raise StorageFailure(
                StorageFailureKind.DUPLICATE_KEY,
                "Duplicate Student ID found. Please ensure Student ID is unique.",
            )
        except StoreError:
            raise StorageFailure(StorageFailureKind.UNKNOWN, "Error updating student")

        if affected == 0:
            raise NotFoundError("Student", str(id))
        return self.get_student(id)

    def delete_student(self, id: int) -> None:
        """Delete a student."""
        try:
            affected = self.store.delete_one(id)
        except StoreError:
            raise StorageFailure(StorageFailureKind.UNKNOWN, "Error deleting student")
        if affected == 0:
            raise NotFoundError("Student", str(id))
