"""Subscriber connections and their transports.

A Subscriber is one open gallery stream. It exclusively owns its transport
and its heartbeat task, and it is the only place either is released.

State Machine:
    OPEN → CLOSING → CLOSED (see SubscriberState)

Transport:
    QueueTransport is a bounded asyncio.Queue. Dispatcher and heartbeat
    writes enqueue; the SSE response drains it. A full queue (slow client)
    makes writes wait, and the Subscriber bounds that wait with a timeout
    after which the write counts as failed. The enqueued and drained
    counters let the heartbeat spot a client that stopped reading before
    the queue fills.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import cast

from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import SubscriberState
from src.domain.errors import TransportWriteError
from src.domain.events import BroadcastMessage
from src.domain.protocols.subscriber_transport_protocol import (
    SubscriberTransportProtocol,
)

_END_OF_STREAM = object()


class QueueTransport:
    """Bounded in-memory transport drained by a streaming response.

    Args:
        maxsize: Maximum number of undelivered messages.

    Example:
        >>> transport = QueueTransport(maxsize=100)
        >>> async for message in transport.messages():
        ...     yield message.to_sse_format()
    """

    def __init__(self, maxsize: int = 100) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self._enqueued = 0
        self._drained = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """Number of messages not yet drained."""
        return self._queue.qsize()

    @property
    def enqueued(self) -> int:
        """Total messages accepted by write()."""
        return self._enqueued

    @property
    def drained(self) -> int:
        """Total messages taken by the consumer of messages()."""
        return self._drained

    async def write(self, message: BroadcastMessage) -> None:
        """Enqueue one message, waiting while the queue is full.

        Raises:
            ConnectionError: If the transport is closed.
        """
        if self._closed:
            raise ConnectionError("transport is closed")
        await self._queue.put(message)
        self._enqueued += 1

    def close(self) -> None:
        """Mark the stream finished. Idempotent.

        Messages already queued are still drained before the stream ends,
        unless the queue is full, in which case the oldest are dropped to
        make room for the end marker.
        """
        if self._closed:
            return
        self._closed = True
        while self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(_END_OF_STREAM)

    async def messages(self) -> AsyncIterator[BroadcastMessage]:
        """Yield queued messages until the transport is closed."""
        while True:
            item = await self._queue.get()
            if item is _END_OF_STREAM:
                return
            self._drained += 1
            yield cast(BroadcastMessage, item)


class Subscriber:
    """One open streaming connection registered under a topic.

    Writes are serialized per subscriber, so messages reach one subscriber
    in the order their sends were issued.

    Args:
        topic: Topic the subscriber listens to.
        transport: Write sink, owned exclusively by this subscriber.
        subscriber_id: Opaque handle (minted when omitted).

    Attributes:
        id: Opaque handle, never exposed to the client.
        topic: Topic the subscriber is registered under.
        opened_at: Creation time (UTC).
        last_heartbeat_at: Time of the last successful heartbeat. Written
            only by the HeartbeatScheduler.
    """

    def __init__(
        self,
        *,
        topic: str,
        transport: SubscriberTransportProtocol,
        subscriber_id: str | None = None,
    ) -> None:
        self.id = subscriber_id or str(uuid7())
        self.topic = topic
        self.opened_at = datetime.now(UTC)
        self.last_heartbeat_at: datetime | None = None
        self._transport = transport
        self._state = SubscriberState.OPEN
        self._write_lock = asyncio.Lock()
        self._heartbeat_task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return f"Subscriber(id={self.id!r}, topic={self.topic!r}, state={self._state.value})"

    @property
    def state(self) -> SubscriberState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == SubscriberState.OPEN

    @property
    def transport(self) -> SubscriberTransportProtocol:
        return self._transport

    async def send(
        self, message: BroadcastMessage, *, timeout: float
    ) -> Result[None, TransportWriteError]:
        """Write one message to the transport.

        Args:
            message: Message to deliver.
            timeout: Seconds the write (including waiting for an earlier
                write to this subscriber) may take.

        Returns:
            Success(None), or Failure(TransportWriteError) if the subscriber
            is not OPEN, the write failed, or it timed out.
        """
        if not self.is_open:
            return Failure(error=self._write_error("Subscriber is not open"))

        try:
            async with asyncio.timeout(timeout):
                async with self._write_lock:
                    if not self.is_open:
                        return Failure(
                            error=self._write_error("Subscriber is not open")
                        )
                    await self._transport.write(message)
        except TimeoutError:
            return Failure(
                error=self._write_error(
                    f"Write timed out after {timeout}s",
                    code=ErrorCode.TRANSPORT_WRITE_TIMEOUT,
                )
            )
        except OSError as e:
            return Failure(error=self._write_error(str(e) or type(e).__name__))

        return Success(value=None)

    def attach_heartbeat(self, task: asyncio.Task[None]) -> None:
        """Hand the subscriber ownership of its heartbeat task.

        A task attached after the subscriber left OPEN is cancelled at once.
        """
        if not self.is_open:
            task.cancel()
            return
        self._heartbeat_task = task

    def close(self) -> None:
        """Drive the subscriber to CLOSED. Idempotent.

        Cancels the heartbeat task (exactly once, and never from inside
        that task) and closes the transport.
        """
        if self._state != SubscriberState.OPEN:
            return
        self._state = SubscriberState.CLOSING
        try:
            task, self._heartbeat_task = self._heartbeat_task, None
            if (
                task is not None
                and not task.done()
                and task is not asyncio.current_task()
            ):
                task.cancel()
        finally:
            self._transport.close()
            self._state = SubscriberState.CLOSED

    def _write_error(
        self, message: str, *, code: ErrorCode = ErrorCode.TRANSPORT_WRITE_FAILED
    ) -> TransportWriteError:
        return TransportWriteError(
            code=code,
            message=message,
            subscriber_id=self.id,
            topic=self.topic,
        )
