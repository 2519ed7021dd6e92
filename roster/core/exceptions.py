"""Custom exception classes and error handling."""

import enum
from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error": {
                    "code": code,
                    "message": message,
                    "details": details or {},
                },
            },
        )


class ValidationError(AppException):
    """Data validation failed."""

    def __init__(
        self,
        message: str = "Validation error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="VALIDATION_ERROR",
            message=message,
            details=details,
        )


class RecordValidationError(ValidationError):
    """A single student payload failed the field rules."""

    def __init__(self, errors: list[str], field_errors: dict[str, str]):
        self.errors = errors
        super().__init__(
            message="Validation errors in update data.",
            details={"errors": errors, "field_errors": field_errors},
        )


class UploadError(AppException):
    """File upload failed."""

    def __init__(
        self,
        message: str = "Upload failed",
        details: dict[str, Any] | None = None,
        code: str = "UPLOAD_FAILED",
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code=code,
            message=message,
            details=details,
        )


class MalformedSpreadsheetError(UploadError):
    """The uploaded file could not be read as a workbook."""

    def __init__(self, message: str = "Error processing file."):
        super().__init__(message=message, code="MALFORMED_SPREADSHEET")


class NothingToImportError(UploadError):
    """The workbook contained no data rows."""

    def __init__(self, message: str = "No valid student data found to insert."):
        super().__init__(message=message, code="NOTHING_TO_IMPORT")


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(
        self,
        resource: str = "Resource",
        identifier: str | None = None,
    ):
        details = {}
        if identifier:
            details["identifier"] = identifier
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code="NOT_FOUND",
            message=f"{resource} not found",
            details=details,
        )


class StorageFailureKind(str, enum.Enum):
    """Storage failure classification."""

    DUPLICATE_KEY = "duplicate_key"
    UNKNOWN = "unknown"


class StorageFailure(AppException):
    """The record store rejected a write."""

    def __init__(
        self,
        kind: StorageFailureKind,
        message: str | None = None,
    ):
        self.kind = kind
        if kind == StorageFailureKind.DUPLICATE_KEY:
            super().__init__(
                status_code=status.HTTP_409_CONFLICT,
                code="DUPLICATE_KEY",
                message=message or "Duplicate Student ID found.",
                details={"kind": kind.value},
            )
        else:
            super().__init__(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                code="STORAGE_ERROR",
                message=message or "Error storing data in database.",
                details={"kind": kind.value},
            )
