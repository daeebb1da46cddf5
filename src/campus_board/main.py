# src/campus_board/main.py
"""Main entry point for the Campus Board application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from campus_board.api.v1 import (
    admin_router,
    auth_router,
    feed_router,
    posts_router,
    reports_router,
    system_router,
)
from campus_board.core.logging import configure_logging
from campus_board.core.settings import settings
from campus_board.db.session import SessionLocal, create_tables
from campus_board.services.compaction import ExpirySweepWorker
from campus_board.services.realtime import get_snapshot_hub

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Anonymous, ephemeral campus confession board API",
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
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")
app.include_router(feed_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging(settings.log_level)
    if settings.auto_create_tables:
        create_tables()
    if settings.expiry_sweep_enabled:
        worker = ExpirySweepWorker(SessionLocal, get_snapshot_hub())
        await worker.start()
        app.state.sweep_worker = worker
    else:
        app.state.sweep_worker = None
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    worker: ExpirySweepWorker | None = getattr(app.state, "sweep_worker", None)
    if worker:
        await worker.stop()

@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}

@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Anonymous, ephemeral campus confession board API",
        "docs": "/docs",
        "redoc": "/redoc"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("campus_board.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
