import time

from fastapi import APIRouter

from app.models.chat import HealthStatus

router = APIRouter()


@router.get("/healthz", response_model=HealthStatus)
def health_check() -> HealthStatus:
    return HealthStatus(time=int(time.time() * 1000))
