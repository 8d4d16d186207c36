"""Broadcast dispatcher: fan-out to a topic's subscribers.

Each broadcast takes a registry snapshot and writes to every subscriber in
its own task (asyncio.gather), so one slow client never delays the others.
Failures are per-subscriber: the failing subscriber is deregistered and
closed, the rest of the broadcast proceeds, and nothing is raised to the
caller. A topic with no subscribers is a normal, cheap no-op.

Usage:
    dispatcher = get_broadcast_dispatcher()
    await dispatcher.notify_upload("wedding-42", artifact)
"""

import asyncio

from src.core.result import Failure, Success
from src.domain.entities import UploadArtifact
from src.domain.events import BroadcastMessage
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.sse.topic_registry import TopicRegistry


class BroadcastDispatcher:
    """Delivers messages to every live subscriber of a topic.

    Holds no mutable state of its own; safe to call concurrently.

    Args:
        registry: Topic registry owning the subscribers.
        logger: Structured logger.
        write_timeout_seconds: Per-subscriber write timeout.
    """

    def __init__(
        self,
        *,
        registry: TopicRegistry,
        logger: LoggerProtocol,
        write_timeout_seconds: float = 5.0,
    ) -> None:
        self._registry = registry
        self._logger = logger
        self._write_timeout = write_timeout_seconds

    async def broadcast(self, topic: str, message: BroadcastMessage) -> int:
        """Deliver a message to every subscriber of a topic.

        Args:
            topic: Target topic.
            message: Immutable message to deliver.

        Returns:
            Number of subscribers the message was written to.
        """
        subscribers = list(self._registry.snapshot(topic))
        if not subscribers:
            self._logger.debug(
                "broadcast_no_subscribers", topic=topic, kind=message.kind.value
            )
            return 0

        results = await asyncio.gather(
            *(
                subscriber.send(message, timeout=self._write_timeout)
                for subscriber in subscribers
            ),
            return_exceptions=True,
        )

        delivered = 0
        for subscriber, result in zip(subscribers, results, strict=True):
            match result:
                case Success():
                    delivered += 1
                case Failure(error=error):
                    self._logger.warning(
                        "broadcast_delivery_failed",
                        topic=topic,
                        subscriber_id=subscriber.id,
                        error_code=error.code.value,
                        error_message=error.message,
                    )
                    await self._registry.unsubscribe(topic, subscriber)
                case BaseException() as exc:
                    if isinstance(exc, asyncio.CancelledError):
                        raise exc
                    self._logger.warning(
                        "broadcast_delivery_failed",
                        topic=topic,
                        subscriber_id=subscriber.id,
                        error_type=type(exc).__name__,
                        error_message=str(exc),
                    )
                    await self._registry.unsubscribe(topic, subscriber)

        self._logger.debug(
            "broadcast_sent",
            topic=topic,
            kind=message.kind.value,
            message_id=str(message.message_id),
            delivered=delivered,
            failed=len(subscribers) - delivered,
        )
        return delivered

    async def notify_upload(self, topic: str, artifact: UploadArtifact) -> int:
        """Announce a stored photo to the topic's subscribers.

        Args:
            topic: Target topic.
            artifact: Durably stored artifact.

        Returns:
            Number of subscribers notified.
        """
        return await self.broadcast(topic, BroadcastMessage.photo_update(artifact))
