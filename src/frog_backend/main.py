# src/frog_backend/main.py
"""Main entry point for the FROG social backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from frog_backend.api.v1 import leaderboard_router, posts_router, tips_router
from frog_backend.core.settings import settings
from frog_backend.db import create_tables
from frog_backend.services.chain import get_chain_verifier
from frog_backend.services.errors import TipError
from frog_backend.services.storage import UPLOADS_ROUTE, get_blob_store

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Off-chain post store and tip ledger for FROG social",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(tips_router, prefix="/api/v1")
app.include_router(leaderboard_router, prefix="/api/v1")

# Uploaded images are served straight from the blob store directory.
app.mount(
    UPLOADS_ROUTE,
    StaticFiles(directory=get_blob_store().root, check_dir=False),
    name="uploads",
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(TipError)
async def tip_error_handler(_request: Request, exc: TipError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    location = errors[0].get("loc", ()) if errors else ()
    field = location[-1] if location else "request"
    return _error(status.HTTP_400_BAD_REQUEST, f"invalid {field}")


@app.exception_handler(Exception)
async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")


@app.on_event("startup")
async def on_startup() -> None:
    if settings.auto_create_tables:
        create_tables()
    get_blob_store().ensure()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_chain_verifier().close()


@app.get("/health")
async def health_check() -> dict[str, bool]:
    """Health check endpoint to verify the service is running."""
    return {"ok": True}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("frog_backend.main:app", host="0.0.0.0", port=8787, reload=settings.debug)
