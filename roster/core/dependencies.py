"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, File, UploadFile

from roster.core.config import settings
from roster.core.database import DbSession
from roster.core.exceptions import UploadError
from roster.services.store import StudentStore
from roster.services.student import StudentService
from roster.services.upload import UploadService


def get_store(db: DbSession) -> StudentStore:
    return StudentStore(db)


def get_student_service(store: Annotated[StudentStore, Depends(get_store)]) -> StudentService:
    return StudentService(store)


def get_upload_service(store: Annotated[StudentStore, Depends(get_store)]) -> UploadService:
    return UploadService(store)


def read_upload(file: UploadFile = File(...)) -> bytes:
    """Check an uploaded workbook's name and size and return its bytes."""
    if not file.filename:
        raise UploadError("No file uploaded.")

    if not file.filename.lower().endswith(tuple(settings.ALLOWED_EXTENSIONS)):
        raise UploadError(
            f"Only {', '.join(settings.ALLOWED_EXTENSIONS)} files are allowed"
        )

    content = file.file.read()
    if len(content) > settings.max_upload_size_bytes:
        raise UploadError(f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB}MB limit")
    return content


StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
UploadContent = Annotated[bytes, Depends(read_upload)]
