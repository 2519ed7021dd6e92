"""Field rules shared by spreadsheet imports, record edits and the UI."""

import re
from collections.abc import Mapping
from typing import Any

import email_validator
from email_validator import EmailNotValidError, validate_email

from roster.schemas.student import FieldViolation, StudentBase, ValidationResult

STUDENT_ID_PATTERN = re.compile(r"[A-Za-z0-9]+")
PHONE_PATTERN = re.compile(r"[0-9]{9}")
GROUP_NAME_PATTERN = re.compile(r"[A-Za-z0-9\s]+")

# Reserved names such as .local or .test are still valid address syntax
email_validator.SPECIAL_USE_DOMAIN_NAMES[:] = []

# Roster fields in storage order
STUDENT_FIELDS = (
    "student_id",
    "student_name",
    "grade_name",
    "class_name",
    "phone",
    "email",
)


def clean_value(value: Any) -> str:
    """Render a cell or form value as a trimmed string."""
    if value is None:
        return ""
    # Spreadsheets hand back whole numbers as floats
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def is_valid_email(value: str) -> bool:
    """Syntax check only; the domain needs a dot and a non-numeric top label."""
    try:
        result = validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    labels = result.ascii_domain.split(".")
    return len(labels) > 1 and not labels[-1].isdigit()


def validate_student_data(raw: Mapping[str, Any]) -> ValidationResult:
    """
    Clean a raw student field bag and check it against the roster rules.

    Every rule is evaluated, so the result lists all violations in a fixed
    order: student_id, student_name, phone, grade_name, class_name, email.
    Fields other than the six roster fields are ignored.
    """
    cleaned = {field: clean_value(raw.get(field)) for field in STUDENT_FIELDS}
    violations: list[FieldViolation] = []

    def reject(field: str, message: str) -> None:
        violations.append(FieldViolation(field=field, value=cleaned[field], message=message))

    if not STUDENT_ID_PATTERN.fullmatch(cleaned["student_id"]):
        reject(
            "student_id",
            f"Invalid student_id: {cleaned['student_id']}. Only alphanumeric characters are allowed.",
        )

    if not cleaned["student_name"]:
        reject("student_name", "Student name is required.")

    if not PHONE_PATTERN.fullmatch(cleaned["phone"]):
        reject(
            "phone",
            f"Invalid phone number: {cleaned['phone']}. Must be a 9-digit number.",
        )

    for field in ("grade_name", "class_name"):
        if not GROUP_NAME_PATTERN.fullmatch(cleaned[field]):
            reject(
                field,
                f"Invalid {field}: {cleaned[field]}. "
                "Only alphanumeric characters and spaces are allowed.",
            )

    if not is_valid_email(cleaned["email"]):
        reject("email", f"Invalid email: {cleaned['email']}.")

    return ValidationResult(
        cleaned_data=StudentBase(**cleaned),
        violations=violations,
    )
