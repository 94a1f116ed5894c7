"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.api.auth import router as auth_router
from catalog_api.api.health import router as health_router
from catalog_api.api.middleware import setup_middleware
from catalog_api.api.products import router as products_router
from catalog_api.api.search import router as search_router
from catalog_api.api.variants import router as variants_router
from catalog_api.domain.exceptions import (
    DomainError,
    NotFoundError,
    UserAlreadyExistsError,
)
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import Database
from catalog_api.infrastructure.logging_config import configure_logging

configure_logging(settings)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    logger.info(
        "Starting Catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    database = Database(settings.database_url, echo=settings.debug)
    if settings.auto_create_tables:
        await database.create_all()
        logger.info("Database tables ensured")
    app.state.database = database

    yield

    # Shutdown
    logger.info("Shutting down Catalog API")
    await database.dispose()


app = FastAPI(
    title="Catalog API",
    description="Product and variant catalog backend",
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

# Setup custom middleware (request ID, bearer auth, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(auth_router)
app.include_router(products_router)
app.include_router(variants_router)
app.include_router(search_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _error_status(exc: DomainError) -> int:
    """Map a domain error to its HTTP status code."""
    if isinstance(exc, UserAlreadyExistsError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    # InvalidInputError, DuplicateSkuError, InvalidStateError
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate domain errors into the response envelope."""
    status_code = _error_status(exc)

    logger.info(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        status_code=status_code,
        details=exc.details,
    )

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as invalid input."""
    logger.info(
        "Request validation failed",
        path=request.url.path,
        method=request.method,
        errors=[
            {"loc": list(error.get("loc", ())), "type": error.get("type")}
            for error in exc.errors()
        ],
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Invalid data provided in the request",
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTP exceptions with consistent format.

    Unmatched routes and unsupported methods are both reported as 404.
    """
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": "Invalid request."},
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )
