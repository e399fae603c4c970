"""Health & Readiness - liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 whenever SELECT 1 cannot complete (readiness),
      including before startup finished and when the server refuses connections
    - A 503 carries the driver's failure text, mirroring storage failures elsewhere
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from favorites_api.infrastructure.database import get_db_manager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "favorites-api"
SERVICE_VERSION = "1.0.0"


def _not_ready(reason: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason, "detail": detail},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness: returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness: pings the favorites database."""
    db_manager = get_db_manager(request)
    if db_manager is None:
        return _not_ready("database_unavailable", "database not initialized")
    failure = await db_manager.check_connectivity()
    if failure is not None:
        logger.warning(
            f"Readiness failed: {failure}", extra={"path": request.url.path},
        )
        return _not_ready("database_unavailable", failure)
    return {"status": "ready", "checks": {"database": "healthy"}}
