"""Event topic dependencies.

Resolves the ``{event_code}`` path parameter to the event's canonical
topic before the endpoint runs.

Usage:
    async def list_event_photos(
        topic: Annotated[str, Depends(get_event_topic)],
    ): ...
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Path, status

from src.core.container import get_topic_resolver
from src.core.result import Failure
from src.domain.protocols.topic_resolver_protocol import TopicResolverProtocol


async def get_event_topic(
    event_code: Annotated[str, Path(description="Event code (slug or alias)")],
    resolver: Annotated[TopicResolverProtocol, Depends(get_topic_resolver)],
) -> str:
    """Resolve an event code to its topic.

    Raises:
        HTTPException: 404 if the code does not name an event.
    """
    result = resolver.resolve(event_code)
    if isinstance(result, Failure):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=result.error.message,
        )
    return result.value
