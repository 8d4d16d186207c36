"""Heartbeat scheduler: per-subscriber liveness pings.

Runs one asyncio task per OPEN subscriber. Every interval the task writes a
``heartbeat`` message to that subscriber alone. A failed or timed-out write
deregisters the subscriber, and so does a tick that finds the previous
heartbeat still undrained: a client that stopped reading is reclaimed
within two periods instead of when its queue finally fills.

The task is owned by the Subscriber: Subscriber.close() cancels it, once,
whatever path led to the close.
"""

import asyncio
from datetime import UTC, datetime

from src.core.result import Failure
from src.domain.events import BroadcastMessage
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.sse.subscriber import Subscriber
from src.infrastructure.sse.topic_registry import TopicRegistry


class HeartbeatScheduler:
    """Schedules periodic heartbeats for subscribers.

    Args:
        registry: Registry used to deregister dead subscribers.
        logger: Structured logger.
        interval_seconds: Period between heartbeats.
        write_timeout_seconds: Per-heartbeat write timeout.
    """

    def __init__(
        self,
        *,
        registry: TopicRegistry,
        logger: LoggerProtocol,
        interval_seconds: float = 30.0,
        write_timeout_seconds: float = 5.0,
    ) -> None:
        self._registry = registry
        self._logger = logger
        self._interval = interval_seconds
        self._write_timeout = write_timeout_seconds
        self._tasks: dict[str, asyncio.Task[None]] = {}

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def active_count(self) -> int:
        """Number of heartbeat tasks still running."""
        return len(self._tasks)

    def start(self, subscriber: Subscriber) -> None:
        """Start heartbeats for a subscriber.

        No-op for a subscriber that is not OPEN or already scheduled.

        Args:
            subscriber: Registered subscriber.
        """
        if not subscriber.is_open or subscriber.id in self._tasks:
            return

        task = asyncio.create_task(
            self._run(subscriber), name=f"heartbeat:{subscriber.id}"
        )
        self._tasks[subscriber.id] = task
        task.add_done_callback(lambda _: self._tasks.pop(subscriber.id, None))
        subscriber.attach_heartbeat(task)

    async def _run(self, subscriber: Subscriber) -> None:
        # Transport position just after the previous heartbeat was accepted.
        previous_mark: int | None = None
        while True:
            await asyncio.sleep(self._interval)
            if not subscriber.is_open:
                return

            transport = subscriber.transport
            if previous_mark is not None and transport.drained < previous_mark:
                await self._deregister(
                    subscriber,
                    "heartbeat_undrained",
                    pending=previous_mark - transport.drained,
                )
                return

            result = await subscriber.send(
                BroadcastMessage.heartbeat(subscriber.topic),
                timeout=self._write_timeout,
            )
            if isinstance(result, Failure):
                await self._deregister(
                    subscriber, "heartbeat_failed", error_code=result.error.code.value
                )
                return

            previous_mark = transport.enqueued
            subscriber.last_heartbeat_at = datetime.now(UTC)

    async def _deregister(
        self, subscriber: Subscriber, event: str, **fields: object
    ) -> None:
        self._logger.warning(
            event, topic=subscriber.topic, subscriber_id=subscriber.id, **fields
        )
        await self._registry.unsubscribe(subscriber.topic, subscriber)

    async def stop(self) -> None:
        """Cancel every remaining heartbeat task and wait for them to end."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
