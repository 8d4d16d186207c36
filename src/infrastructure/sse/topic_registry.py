"""Topic registry: who is listening to what.

Owns the topic → subscribers index. Each topic has its own bucket with its
own lock, so subscribe/unsubscribe/snapshot on one topic never serialize
work on another. A small index lock guards only bucket creation and
removal. Locks are held over synchronous code only, never across an await.

Empty buckets are removed as soon as their last subscriber leaves. A bucket
removed from the index is marked retired; an insert that raced with the
removal sees the flag and retries against a fresh bucket.

Usage:
    registry = get_topic_registry()
    await registry.subscribe("wedding-42", subscriber)
    for subscriber in registry.snapshot("wedding-42"):
        ...
    await registry.unsubscribe("wedding-42", subscriber)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from src.core.result import Failure
from src.domain.events import BroadcastMessage
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.sse.subscriber import Subscriber


@dataclass(eq=False)
class _TopicBucket:
    subscribers: set[Subscriber] = field(default_factory=set)
    lock: threading.Lock = field(default_factory=threading.Lock)
    retired: bool = False


class TopicRegistry:
    """Concurrency-safe subscriber bookkeeping, keyed by topic.

    Args:
        logger: Structured logger.
        write_timeout_seconds: Timeout for the ``connected`` acknowledgment.
    """

    def __init__(
        self, *, logger: LoggerProtocol, write_timeout_seconds: float = 5.0
    ) -> None:
        self._buckets: dict[str, _TopicBucket] = {}
        self._index_lock = threading.Lock()
        self._logger = logger
        self._write_timeout = write_timeout_seconds

    async def subscribe(self, topic: str, subscriber: Subscriber) -> None:
        """Register a subscriber and acknowledge it.

        The ``connected`` message is written before the subscriber becomes
        visible to snapshot(), so it is always the first message the
        subscriber receives. A subscriber whose acknowledgment fails is
        closed and never registered.

        Args:
            topic: Topic to register under (must equal subscriber.topic).
            subscriber: Newly opened subscriber.

        Raises:
            ValueError: If topic does not match the subscriber's topic.
        """
        if subscriber.topic != topic:
            raise ValueError(
                f"Subscriber topic {subscriber.topic!r} does not match {topic!r}"
            )

        result = await subscriber.send(
            BroadcastMessage.connected(topic), timeout=self._write_timeout
        )
        if isinstance(result, Failure):
            self._logger.warning(
                "subscriber_ack_failed",
                topic=topic,
                subscriber_id=subscriber.id,
                error_code=result.error.code.value,
            )
            subscriber.close()
            return
        if not subscriber.is_open:
            return

        while True:
            bucket = self._bucket_for_insert(topic)
            with bucket.lock:
                if bucket.retired:
                    continue
                bucket.subscribers.add(subscriber)
                count = len(bucket.subscribers)
                break

        self._logger.info(
            "subscriber_added",
            topic=topic,
            subscriber_id=subscriber.id,
            topic_connections=count,
        )

    async def unsubscribe(self, topic: str, subscriber: Subscriber) -> None:
        """Deregister and close a subscriber. Idempotent.

        Removing an absent or already CLOSED subscriber is a no-op. When the
        topic's last subscriber leaves, the topic entry is removed.

        Args:
            topic: Topic the subscriber was registered under.
            subscriber: Subscriber to remove.
        """
        removed = False
        emptied = False

        with self._index_lock:
            bucket = self._buckets.get(topic)

        if bucket is not None:
            with bucket.lock:
                if subscriber in bucket.subscribers:
                    bucket.subscribers.discard(subscriber)
                    removed = True
                if not bucket.subscribers and not bucket.retired:
                    bucket.retired = True
                    emptied = True

        if emptied:
            with self._index_lock:
                if self._buckets.get(topic) is bucket:
                    del self._buckets[topic]

        subscriber.close()

        if removed:
            self._logger.info(
                "subscriber_removed",
                topic=topic,
                subscriber_id=subscriber.id,
                topic_removed=emptied,
            )

    def snapshot(self, topic: str) -> frozenset[Subscriber]:
        """Copy of the topic's current subscribers.

        Safe to iterate while other coroutines subscribe or unsubscribe.

        Args:
            topic: Topic to read.

        Returns:
            Immutable set (empty for unknown topics).
        """
        with self._index_lock:
            bucket = self._buckets.get(topic)
        if bucket is None:
            return frozenset()
        with bucket.lock:
            return frozenset(bucket.subscribers)

    def count(self, topic: str) -> int:
        """Number of subscribers registered under a topic."""
        return len(self.snapshot(topic))

    def all_topics(self) -> list[str]:
        """Topics with at least one subscriber."""
        with self._index_lock:
            return [topic for topic, bucket in self._buckets.items() if not bucket.retired]

    def stats(self) -> dict[str, Any]:
        """Connection statistics for operational visibility.

        Returns:
            {"total_topics", "total_connections", "topics": {topic: count}}.
        """
        topics = {topic: self.count(topic) for topic in self.all_topics()}
        topics = {topic: count for topic, count in topics.items() if count}
        return {
            "total_topics": len(topics),
            "total_connections": sum(topics.values()),
            "topics": topics,
        }

    async def close_all(self) -> int:
        """Close every subscriber and clear the index (process shutdown).

        Returns:
            Number of subscribers closed.
        """
        with self._index_lock:
            buckets = list(self._buckets.values())
            self._buckets.clear()

        subscribers: list[Subscriber] = []
        for bucket in buckets:
            with bucket.lock:
                bucket.retired = True
                subscribers.extend(bucket.subscribers)
                bucket.subscribers.clear()

        for subscriber in subscribers:
            subscriber.close()

        self._logger.info("subscribers_closed_all", count=len(subscribers))
        return len(subscribers)

    def _bucket_for_insert(self, topic: str) -> _TopicBucket:
        with self._index_lock:
            bucket = self._buckets.get(topic)
            if bucket is None or bucket.retired:
                bucket = _TopicBucket()
                self._buckets[topic] = bucket
            return bucket
