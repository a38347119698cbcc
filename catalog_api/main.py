"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_api.api.catalog import router as catalog_router
from catalog_api.api.health import router as health_router
from catalog_api.api.middleware import setup_middleware
from catalog_api.catalog.seed import seed_catalog
from catalog_api.domain.exceptions import (
    CatalogError,
    InvalidRequestError,
    ProductAlreadyExistsError,
    ProductNotFoundError,
    StoreTimeoutError,
    StoreUnavailableError,
)
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import close_mongo_client, get_catalog_store
from catalog_api.infrastructure.log_config import configure_logging

configure_logging(settings.log_level)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Catalog API",
        version=settings.api_version,
        debug=settings.debug,
        store=settings.catalog_store,
        count_scope=settings.catalog_count_scope,
    )

    if settings.seed_on_startup:
        await seed_catalog(get_catalog_store())

    yield

    logger.info("Shutting down Catalog API")
    await close_mongo_client()


app = FastAPI(
    title="Catalog API",
    description="Product catalog query service",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(catalog_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


# Most specific class first; see error_status()
ERROR_STATUS_CODES: list[tuple[type[CatalogError], int]] = [
    (InvalidRequestError, status.HTTP_400_BAD_REQUEST),
    (ProductNotFoundError, status.HTTP_404_NOT_FOUND),
    (ProductAlreadyExistsError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StoreTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
]


def error_status(exc: CatalogError) -> int:
    """Map a catalog error to an HTTP status code.

    Unlisted catalog errors (including the generic ``StoreError``) map to 502.
    """
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return status.HTTP_502_BAD_GATEWAY


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Handle catalog errors with consistent format."""
    request_id = getattr(request.state, "request_id", None)
    status_code = error_status(exc)

    log = logger.warning if status_code < 500 else logger.error
    log(
        "Catalog request failed",
        path=request.url.path,
        error_code=exc.error_code,
        status_code=status_code,
        error=exc.message,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": [
                {"field": key, "message": str(value)}
                for key, value in exc.details.items()
            ],
            "request_id": request_id,
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": request_id,
        },
    )


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
