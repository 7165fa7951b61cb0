"""
Main FastAPI application.

Wires together all layers:
- Domain: Customer and order records
- Repositories: Document store backends and typed repositories
- Services: Customer-order aggregation
- Routers: HTTP endpoints
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Tuple
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, settings
from .database import MongoConnectionManager
from .dependencies import set_document_store
from .logging_config import setup_logging
from .metrics import metrics_endpoint, track_request_metrics
from .repositories.customer_repository import CustomerRepository
from .repositories.document_store import IDocumentStore
from .repositories.memory_store import MemoryDocumentStore
from .repositories.mongo_store import MongoDocumentStore
from .routers import customer_router, health_router

setup_logging(log_level=settings.LOG_LEVEL, use_json=settings.LOG_JSON)

logger = structlog.get_logger(__name__)


def create_document_store(
    config: Settings,
) -> Tuple[IDocumentStore, Optional[MongoConnectionManager]]:
    """
    Create the document store selected by ``STORAGE_BACKEND``.

    Returns:
        (store, connection manager); the manager is None for the memory backend
    """
    if config.STORAGE_BACKEND == "memory":
        return MemoryDocumentStore(), None

    connection_manager = MongoConnectionManager(config)
    return MongoDocumentStore(connection_manager.database), connection_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(
        "Starting Customer Order Service",
        version=__version__,
        storage_backend=settings.STORAGE_BACKEND,
    )

    store, connection_manager = create_document_store(settings)

    try:
        await CustomerRepository(store).ensure_indexes()
    except Exception as e:
        logger.error("Failed to initialize document store", error=str(e))
        if connection_manager is not None:
            await connection_manager.close()
        raise

    set_document_store(store)
    logger.info("Customer Order Service started")

    yield

    logger.info("Shutting down Customer Order Service")
    set_document_store(None)
    if connection_manager is not None:
        await connection_manager.close()
    logger.info("Customer Order Service stopped")


app = FastAPI(
    title="Customer Order Service",
    description="CRUD for customers and orders with a customer-order aggregation view",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "request_id": getattr(request.state, "request_id", None)
            or request.headers.get("X-Request-ID"),
        },
    )


# Metrics middleware
@app.middleware("http")
async def track_metrics(request: Request, call_next):
    """Track Prometheus request metrics, including unhandled failures as 500."""
    start_time = time.time()
    status_code = 500

    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        route = request.scope.get("route")
        track_request_metrics(
            method=request.method,
            endpoint=getattr(route, "path", request.url.path),
            status_code=status_code,
            duration=time.time() - start_time,
        )

    return response


# Request ID middleware (added last so it runs first)
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """
    Add request ID for distributed tracing.

    Unhandled exceptions are turned into the 500 response here so that it
    also carries the X-Request-ID header.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id

    structlog.contextvars.bind_contextvars(request_id=request_id)
    try:
        response = await call_next(request)
    except Exception as exc:
        response = await global_exception_handler(request, exc)
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(customer_router.router)
app.include_router(health_router.router)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return await metrics_endpoint()
