# src/roadmap_votes/main.py
"""Main entry point for the Roadmap Votes application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from roadmap_votes.api.errors import register_exception_handlers
from roadmap_votes.api.v1 import (
    api_keys_router,
    auth_router,
    dashboard_features_router,
    features_router,
    users_router,
    votes_router,
)
from roadmap_votes.core.settings import settings
from roadmap_votes.db.session import create_tables, engine

logger = logging.getLogger(__name__)

# Uvicorn's log level only covers its own loggers, not ours.
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="Roadmap Votes API",
    description="Anonymous feature voting for product roadmaps",
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

register_exception_handlers(app)

# Include API routers
app.include_router(features_router, prefix=settings.api_prefix)
app.include_router(votes_router, prefix=settings.api_prefix)
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(dashboard_features_router, prefix=settings.api_prefix)
app.include_router(api_keys_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)


@app.on_event("startup")
async def on_startup() -> None:
    if settings.auto_create_tables:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check with database connectivity verification."""
    database = "ok"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        database = "error"
        logger.exception("Health check: database connectivity failed")

    return {"status": "ok" if database == "ok" else "degraded", "database": database}


@app.get("/")
async def root() -> dict[str, str]:
    """Landing endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Anonymous feature voting for product roadmaps",
        "docs": "/docs",
        "dashboard": f"{settings.api_prefix}/dashboard/features",
    }


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("roadmap_votes.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()
