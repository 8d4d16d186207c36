"""Event stream handlers.

Live gallery updates over Server-Sent Events.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    stream_event_photos   - Subscribe to an event's photo stream (SSE)
    get_connection_stats  - Open streams per topic

Stream lifecycle:
    1. ``retry:`` hint
    2. ``connected`` (always the first message)
    3. ``photo_update`` / ``heartbeat`` until the client leaves
    4. Deregistration when the response ends, whatever the reason
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from fastapi.responses import StreamingResponse

from src.core.config import Settings, get_settings
from src.core.constants import SSE_RESPONSE_HEADERS, SSE_RETRY_INTERVAL_MS
from src.core.container import get_heartbeat_scheduler, get_topic_registry
from src.infrastructure.sse import (
    HeartbeatScheduler,
    QueueTransport,
    Subscriber,
    TopicRegistry,
)
from src.presentation.routers.api.middleware.topic_dependencies import (
    get_event_topic,
)
from src.schemas.event_schemas import ConnectionStatsResponse


async def stream_event_photos(
    topic: Annotated[str, Depends(get_event_topic)],
    settings: Annotated[Settings, Depends(get_settings)],
    registry: Annotated[TopicRegistry, Depends(get_topic_registry)],
    heartbeats: Annotated[HeartbeatScheduler, Depends(get_heartbeat_scheduler)],
) -> StreamingResponse:
    """Stream an event's new photos via Server-Sent Events (SSE).

    GET /api/v1/events/{event_code}/stream → 200 text/event-stream

    **Reconnection**: clients reconnect on their own after the ``retry``
    interval. Photos uploaded while disconnected are not replayed; reload
    the gallery with GET /api/v1/events/{event_code}/photos.

    Returns:
        StreamingResponse with SSE content type.
    """
    transport = QueueTransport(maxsize=settings.sse_subscriber_queue_size)
    subscriber = Subscriber(topic=topic, transport=transport)

    async def event_generator() -> AsyncGenerator[str, None]:
        """Yield SSE frames until the subscriber is closed.

        Yields:
            SSE-formatted strings.
        """
        yield f"retry: {SSE_RETRY_INTERVAL_MS}\n\n"

        await registry.subscribe(topic, subscriber)
        heartbeats.start(subscriber)
        try:
            async for message in transport.messages():
                yield message.to_sse_format()
        finally:
            # Client disconnect, server shutdown, or failed write
            await registry.unsubscribe(topic, subscriber)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_RESPONSE_HEADERS,
    )


async def get_connection_stats(
    registry: Annotated[TopicRegistry, Depends(get_topic_registry)],
) -> ConnectionStatsResponse:
    """Open gallery streams, per topic.

    GET /api/v1/events/stats → 200 OK
    """
    return ConnectionStatsResponse.from_stats(registry.stats())
