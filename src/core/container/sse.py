"""SSE dependency factories.

Application-scoped singletons for gallery streaming:
- get_topic_registry(): Topic → subscribers index
- get_broadcast_dispatcher(): Fan-out to a topic's subscribers
- get_heartbeat_scheduler(): Per-subscriber liveness pings

All three share one registry, so a subscriber registered by the stream
endpoint is visible to every broadcast and heartbeat.

Reference:
    - src/infrastructure/sse/topic_registry.py
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.container.infrastructure import get_logger

if TYPE_CHECKING:
    from src.infrastructure.sse import (
        BroadcastDispatcher,
        HeartbeatScheduler,
        TopicRegistry,
    )


@lru_cache()
def get_topic_registry() -> "TopicRegistry":
    """Get topic registry singleton (app-scoped).

    Returns:
        TopicRegistry shared by the dispatcher and heartbeat scheduler.
    """
    from src.infrastructure.sse import TopicRegistry

    return TopicRegistry(
        logger=get_logger(),
        write_timeout_seconds=get_settings().sse_write_timeout_seconds,
    )


@lru_cache()
def get_broadcast_dispatcher() -> "BroadcastDispatcher":
    """Get broadcast dispatcher singleton (app-scoped).

    Usage:
        dispatcher = get_broadcast_dispatcher()
        await dispatcher.notify_upload(topic, artifact)
    """
    from src.infrastructure.sse import BroadcastDispatcher

    return BroadcastDispatcher(
        registry=get_topic_registry(),
        logger=get_logger(),
        write_timeout_seconds=get_settings().sse_write_timeout_seconds,
    )


@lru_cache()
def get_heartbeat_scheduler() -> "HeartbeatScheduler":
    """Get heartbeat scheduler singleton (app-scoped)."""
    from src.infrastructure.sse import HeartbeatScheduler

    settings = get_settings()
    return HeartbeatScheduler(
        registry=get_topic_registry(),
        logger=get_logger(),
        interval_seconds=settings.sse_heartbeat_interval_seconds,
        write_timeout_seconds=settings.sse_write_timeout_seconds,
    )
