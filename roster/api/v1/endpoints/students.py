"""Student management endpoints."""

import logging
from io import BytesIO

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from roster.core.dependencies import StudentServiceDep
from roster.schemas.common import ErrorResponse, MessageResponse
from roster.schemas.student import StudentPayload, StudentResponse, ValidationResponse
from roster.services.spreadsheet import build_template

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[StudentResponse])
def list_students(service: StudentServiceDep):
    """List all students."""
    return service.list_students()


@router.get("/template")
def download_student_template():
    """Download Excel template for roster upload."""
    return StreamingResponse(
        BytesIO(build_template()),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=students_template.xlsx"},
    )


@router.post("/validate", response_model=ValidationResponse)
def validate_student(request: StudentPayload, service: StudentServiceDep):
    """
    Check student fields against the roster rules without saving.

    Forms call this for instant feedback; the same rules guard imports and edits.
    """
    return service.validate(request.model_dump())


@router.get(
    "/{id}",
    response_model=StudentResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_student(id: int, service: StudentServiceDep):
    """Get a student by internal ID."""
    return service.get_student(id)


@router.put(
    "/{id}",
    response_model=StudentResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
def update_student(id: int, request: StudentPayload, service: StudentServiceDep):
    """Validate and replace all fields of a student."""
    student = service.update_student(id, request.model_dump())
    logger.info(f"Student {id} updated (student_id={student.student_id})")
    return student


@router.delete(
    "/{id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
def delete_student(id: int, service: StudentServiceDep):
    """Delete a student."""
    service.delete_student(id)
    logger.info(f"Student {id} deleted")
    return MessageResponse(message="Student deleted successfully")
