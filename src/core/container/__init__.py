"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_storage_router, ...

The container is organized into modules by concern:
- infrastructure: Core services (logging, storage, imaging, metadata, topics)
- sse: Topic registry, broadcast dispatcher, heartbeat scheduler
- photo_handlers: Upload command and photo query handler factories

Application-scoped factories are ``lru_cache`` singletons. Tests reset them
with ``reset_container()``.
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_image_converter,
    get_logger,
    get_metadata_recorder,
    get_storage_router,
    get_topic_resolver,
)

# Photo handlers
from src.core.container.photo_handlers import (
    get_fetch_photo_handler,
    get_list_photos_handler,
    get_upload_photo_handler,
)

# SSE
from src.core.container.sse import (
    get_broadcast_dispatcher,
    get_heartbeat_scheduler,
    get_topic_registry,
)


def reset_container() -> None:
    """Clear every cached singleton (settings included)."""
    from src.core.config import get_settings

    for factory in (
        get_settings,
        get_logger,
        get_storage_router,
        get_image_converter,
        get_metadata_recorder,
        get_topic_resolver,
        get_topic_registry,
        get_broadcast_dispatcher,
        get_heartbeat_scheduler,
        get_upload_photo_handler,
    ):
        factory.cache_clear()


__all__ = [
    # Infrastructure
    "get_image_converter",
    "get_logger",
    "get_metadata_recorder",
    "get_storage_router",
    "get_topic_resolver",
    # SSE
    "get_broadcast_dispatcher",
    "get_heartbeat_scheduler",
    "get_topic_registry",
    # Handlers
    "get_fetch_photo_handler",
    "get_list_photos_handler",
    "get_upload_photo_handler",
    "reset_container",
]
