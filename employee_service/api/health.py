from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from employee_service.core.db import get_mongo_client, ping
from employee_service.schemas.envelope import HealthResponse

router = APIRouter(
    prefix="/health",
    tags=["health"],
)

HEALTH_MESSAGE = "Employee App API is running"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("", response_model=HealthResponse)
async def health_check():
    return HealthResponse(message=HEALTH_MESSAGE, timestamp=_timestamp())


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(request: Request):
    """
    MongoDB ping까지 확인. 실패하면 503.
    """
    client = get_mongo_client(request)
    if client is None or not await ping(client):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "message": "Database unavailable"},
        )
    return HealthResponse(
        message="Database connection is healthy",
        timestamp=_timestamp(),
    )
