# submission_api/routers/health.py — Service status

from fastapi import APIRouter

from submission_api.models.submission import ServiceStatus

router = APIRouter()


@router.get("/", response_model=ServiceStatus)
def read_root():
    return ServiceStatus(
        message="Photo submission service is running",
        upload_endpoint="/upload",
    )
