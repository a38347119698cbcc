"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from catalog_api.domain.exceptions import StoreError
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import get_catalog_store

logger = structlog.get_logger()

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="catalog-api",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Check if the document store is reachable.

    Returns:
        200 when ready, 503 when the store cannot be reached.
    """
    try:
        await get_catalog_store().ping()
    except StoreError as e:
        logger.warning("Readiness check failed", error=e.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": e.error_code},
        )
    return JSONResponse(content={"status": "ready"})
