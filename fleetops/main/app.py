"""
Main Application - Main Layer

This module serves as the entry point for the FastAPI application.
It initializes the container, creates the FastAPI app, and includes
the API routers.
"""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from fleetops.main.config import get_settings
from fleetops.main.container import app_lifespan, init_container
from fleetops.presentation.controllers import (
    deployment_router,
    health_router,
    metrics_router,
    system_router,
)
from fleetops.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first - before configuration is loaded
configure_logging()

# Load settings
settings = get_settings()

# Update logging with complete settings
update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Records the startup time used for uptime reporting and delegates resource
    management to the container's ``app_lifespan``.
    """
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    # Initialize dependency injection container
    container = init_container(settings)
    api_usage_tracker = container.api_usage_tracker()

    app = FastAPI(
        title=settings.ge.title,
        description=settings.ge.description,
        version=settings.ge.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def track_api_usage(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            api_usage_tracker.record(500, (time.perf_counter() - started) * 1000)
            raise
        api_usage_tracker.record(
            response.status_code, (time.perf_counter() - started) * 1000
        )
        return response

    app.include_router(deployment_router)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(system_router)

    return app


app = create_app()
