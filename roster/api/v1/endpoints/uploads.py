"""Upload endpoints for roster Excel files."""

import logging

from fastapi import APIRouter, Response, status

from roster.core.dependencies import UploadContent, UploadServiceDep
from roster.schemas.common import ErrorResponse
from roster.schemas.upload import ImportPreview, ImportResult, ImportStatus

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/students/preview",
    response_model=ImportPreview,
    responses={400: {"model": ErrorResponse}},
)
def preview_students(content: UploadContent, service: UploadServiceDep):
    """
    Validate a roster workbook and summarise it without importing.

    Returns every row with its cleaned values, all rejected rows with
    their errors, and accepted students counted per grade and class.
    """
    return service.preview_upload(content)


@router.post(
    "/students",
    response_model=ImportResult,
    responses={
        400: {"model": ImportResult, "description": "Rows failed validation, nothing imported"},
        409: {"model": ErrorResponse},
    },
)
def upload_students(content: UploadContent, service: UploadServiceDep, response: Response):
    """
    Import students from an Excel file.

    STRICT VALIDATION:
    - Any invalid row rejects the whole file
    - All rows are validated before any insertion
    - Duplicate student IDs (in the file or already stored) fail the import

    Expected columns: student_id, student_name, grade_name, class_name, phone, email
    """
    result = service.process_upload(content)

    if result.status == ImportStatus.VALIDATION_FAILED:
        logger.warning(
            f"[STUDENT UPLOAD] Rejected: {len(result.rejections)} of "
            f"{result.total_rows} rows failed validation"
        )
        response.status_code = status.HTTP_400_BAD_REQUEST
    else:
        logger.info(f"[STUDENT UPLOAD] Imported {result.imported_rows} students")

    return result
