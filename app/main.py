"""FastAPI application for tenant asset storage.

This module provides the main FastAPI application with health endpoints,
API routes, and lifecycle management.

Run with:
    uvicorn app.main:app --reload

Examples:
    >>> # Health check
    >>> curl http://localhost:8000/health

    >>> # List assets of a tenant
    >>> curl -H "X-Tenant-Slug: acme" http://localhost:8000/api/v1/assets

Tests:
    - tests/unit/test_main.py::TestHealthEndpoint
    - tests/integration/test_api_assets.py
"""

import logging
import os
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app import __version__
from app.api.v1 import router as v1_router
from app.config import Settings, get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Response models
class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    web_root: bool
    writable: bool


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    detail: str | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Logs the storage layout on startup.
    """
    logger.info(f"Starting asset storage v{__version__}")
    logger.info(f"Web root: {settings.web_root} (uploads under '{settings.UPLOAD_FOLDER}')")

    yield

    logger.info("Shutting down asset storage")


app = FastAPI(
    title="Asset Storage",
    description="Per-tenant upload storage for web content",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API v1 routes
app.include_router(v1_router)


def _error(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(),
    )


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions with consistent response format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "detail": None},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(FileNotFoundError)
async def not_found_handler(request, exc: FileNotFoundError):
    """Missing files surface as 404."""
    return _error(status.HTTP_404_NOT_FOUND, "File not found", exc.filename and os.path.basename(exc.filename))


@app.exception_handler(FileExistsError)
async def conflict_handler(request, exc: FileExistsError):
    """Exhausted name generation surfaces as 409."""
    return _error(status.HTTP_409_CONFLICT, "File name conflict", str(exc))


@app.exception_handler(ValueError)
async def bad_request_handler(request, exc: ValueError):
    """Malformed payloads and paths surface as 400."""
    return _error(status.HTTP_400_BAD_REQUEST, "Bad request", str(exc))


@app.exception_handler(httpx.HTTPError)
async def upstream_error_handler(request, exc: httpx.HTTPError):
    """Remote fetch failures surface as 502."""
    logger.warning(f"Remote fetch failed: {exc}")
    return _error(status.HTTP_502_BAD_GATEWAY, "Remote fetch failed", str(exc))


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")

    if settings.DEBUG:
        detail = str(exc)
    else:
        detail = None

    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", detail)


# Health endpoints
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(current: Settings = Depends(get_settings)) -> HealthResponse:
    """Check application health.

    Returns status of:
    - Application
    - Web root presence
    - Web root writability

    Returns:
        HealthResponse with status information.
    """
    web_root = current.web_root
    exists = web_root.is_dir()
    writable = exists and os.access(web_root, os.W_OK)

    return HealthResponse(
        status="healthy" if writable else "degraded",
        version=__version__,
        web_root=exists,
        writable=writable,
    )


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint with basic info.

    Returns:
        Basic application information.
    """
    return {
        "name": "Asset Storage",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


# Entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
