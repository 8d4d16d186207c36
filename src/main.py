"""
Main FastAPI application entry point.

Builds the FastAPI application: routers generated from the route registry,
trace middleware, CORS for gallery viewers on other origins, RFC 9457
exception handlers, and (in local storage mode) the static mount that
serves stored photos.

Run with:
    uvicorn src.main:app --host 0.0.0.0 --port 8000
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.core.config import Settings, get_settings
from src.core.container import (
    get_heartbeat_scheduler,
    get_logger,
    get_storage_router,
    get_topic_registry,
    get_upload_photo_handler,
)
from src.core.enums import StorageBackendType
from src.presentation.routers import system_router
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Build the storage router so configuration errors fail the boot
    - Shutdown: Finish in-flight announcements, close every open stream,
      stop heartbeats

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    storage = get_storage_router()
    logger.info("application_started", storage_mode=storage.mode)

    yield

    await get_upload_photo_handler().drain()
    closed = await get_topic_registry().close_all()
    await get_heartbeat_scheduler().stop()
    logger.info("application_stopped", subscribers_closed=closed)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to build with (defaults to get_settings()).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Real-time event photo uploads and live galleries",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Wire trace middleware (request correlation)
    app.add_middleware(TraceMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Trace-Id"],
    )

    # Register global exception handlers (RFC 9457 error responses)
    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(v1_router)

    # Local mode: storage URLs point here
    if settings.storage_backend == StorageBackendType.LOCAL:
        app.mount(
            settings.files_url_prefix,
            StaticFiles(directory=settings.local_storage_path, check_dir=False),
            name="files",
        )

    return app


app = create_app()
