"""System router for non-versioned endpoints.

Root banner, health (used by load balancers and the uploader app's
connectivity check) and a development-only configuration dump.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.core.config import Settings, get_settings
from src.core.container import get_storage_router, get_topic_registry
from src.infrastructure.sse.topic_registry import TopicRegistry
from src.infrastructure.storage.storage_router import StorageRouter

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root(
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, str]:
    """Root endpoint - name, status and version."""
    return {
        "message": f"{settings.app_name} API",
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health(
    storage: Annotated[StorageRouter, Depends(get_storage_router)],
    registry: Annotated[TopicRegistry, Depends(get_topic_registry)],
) -> dict[str, Any]:
    """Liveness plus the storage mode and number of open streams."""
    return {
        "status": "healthy",
        "storage": storage.mode,
        "connections": registry.stats()["total_connections"],
    }


def _sanitized_config(settings: Settings) -> dict[str, Any]:
    # Credentials and the upload key are reported as present/absent only.
    return {
        "environment": settings.environment.value,
        "debug": settings.debug,
        "api_v1_prefix": settings.api_v1_prefix,
        "storage": {
            "backend": settings.storage_backend.value,
            "key_prefix": settings.storage_key_prefix,
            "bucket": settings.s3_bucket,
            "local_path": settings.local_storage_path,
            "aws_credentials": bool(settings.aws_access_key_id),
        },
        "sse": {
            "heartbeat_interval_seconds": settings.sse_heartbeat_interval_seconds,
            "write_timeout_seconds": settings.sse_write_timeout_seconds,
            "subscriber_queue_size": settings.sse_subscriber_queue_size,
        },
        "images": {
            "thumbnail_max_width": settings.thumbnail_max_width,
            "image_max_width": settings.image_max_width,
        },
        "upload_key_required": bool(settings.upload_api_key),
        "cors_origins": settings.cors_origin_list,
    }


@system_router.get("/config")
async def get_config(
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """Sanitized configuration (development only, 403 elsewhere)."""
    if not settings.is_development:
        return JSONResponse(
            status_code=403,
            content={"detail": "Config endpoint only available in development"},
        )
    return JSONResponse(content=_sanitized_config(settings))
