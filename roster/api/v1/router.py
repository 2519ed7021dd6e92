"""Main API router aggregating all module routers."""

from fastapi import APIRouter

from roster.api.v1.endpoints import students, uploads

api_router = APIRouter()

# Students
api_router.include_router(
    students.router,
    prefix="/students",
    tags=["Students"],
)

# Uploads
api_router.include_router(
    uploads.router,
    prefix="/uploads",
    tags=["Uploads"],
)
