"""
Health check router.

Provides liveness and readiness checks.
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..config import settings
from ..dependencies import get_optional_document_store
from ..repositories.document_store import IDocumentStore

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    ready: bool
    checks: dict
    timestamp: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health_check():
    """
    Basic health check.

    Always returns 200 OK if the service is running.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=settings.SERVICE_NAME,
        version=__version__,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    responses={503: {"description": "Document store not initialized or unreachable"}},
)
async def readiness_check(
    store: Optional[IDocumentStore] = Depends(get_optional_document_store),
):
    """
    Readiness check.

    Pings the document store. Returns 503 if startup has not wired the store
    yet or if it is unreachable.
    """
    if store is None:
        store_ok = False
        store_status = "not_initialized"
    else:
        store_ok = await store.ping()
        store_status = "healthy" if store_ok else "unhealthy"

    response = ReadinessResponse(
        ready=store_ok,
        checks={"document_store": store_status},
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

    if not store_ok:
        logger.warning("Readiness check failed", checks=response.checks)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )

    return response
