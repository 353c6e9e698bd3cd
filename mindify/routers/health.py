"""Health check routes for Mindify.

This module provides liveness and readiness endpoints for monitoring the
application and its database.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mindify.api.dependencies import get_mongodb
from mindify.core.config import Settings, get_settings
from mindify.database.mongodb import MongoDB
from mindify.utils.datetime_utils import utc_now
from mindify.utils.logger import get_logger

router = APIRouter(prefix="/health", tags=["Health"])
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Health check status response."""
    status: str
    timestamp: datetime
    service: str
    version: str
    environment: str


@router.get("", response_model=HealthStatus)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthStatus:
    """Basic liveness check. Does not touch the database."""
    return HealthStatus(
        status="healthy",
        timestamp=utc_now(),
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )


@router.get("/ready", responses={503: {"description": "Not ready"}})
async def readiness_probe(
    mongodb: Optional[MongoDB] = Depends(get_mongodb),
) -> JSONResponse:
    """Readiness probe: 200 when MongoDB answers a ping, 503 otherwise."""
    services: Dict[str, Any] = {"database": "unavailable"}

    if mongodb is not None and await mongodb.ping():
        services["database"] = "ok"
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"status": "ready", "services": services},
        )

    logger.warning("Readiness probe failed", extra={"services": services})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "services": services},
    )
