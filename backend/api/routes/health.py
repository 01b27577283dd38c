"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from shared.exceptions import PatbinError

from ..dependencies import ServiceContainer, get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(container: ServiceContainer = Depends(get_container)):
    """
    Readiness check endpoint.

    Pings both stores. Returns 503 if either is unreachable.
    """
    try:
        reachable = container.user_repository.ping() and container.paste_repository.ping()
    except PatbinError as e:
        logger.error(f"Readiness check failed: {e}")
        reachable = False

    body = ReadinessResponse(
        status="ready" if reachable else "unavailable",
        storage=get_settings().storage_backend,
        database="connected" if reachable else "unreachable",
    )
    if not reachable:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
