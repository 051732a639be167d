"""
app/main.py

FastAPI application factory for the failure insights API.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from app.config import load_env_files


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    _configure_logging()

    application = FastAPI(
        title="Failure Insights API",
        version="1.0.0",
    )

    from app.api.routers import dashboard_router, export_router

    application.include_router(dashboard_router)
    application.include_router(export_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    logging.getLogger(__name__).info("Application created routes=%d", len(application.routes))
    return application


app = create_app()
