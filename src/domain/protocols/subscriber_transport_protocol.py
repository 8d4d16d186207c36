"""Subscriber transport protocol (port).

The write sink a Subscriber exclusively owns. Writes may block on a slow
client; the Subscriber bounds them with a timeout.
"""

from typing import Protocol

from src.domain.events import BroadcastMessage


class SubscriberTransportProtocol(Protocol):
    """Protocol for subscriber write sinks.

    Implementations:
        - QueueTransport: Bounded asyncio.Queue drained by the SSE response
    """

    @property
    def closed(self) -> bool:
        """Whether the transport has been closed."""
        ...

    @property
    def enqueued(self) -> int:
        """Total messages accepted by write()."""
        ...

    @property
    def drained(self) -> int:
        """Total messages handed on towards the client.

        Equal to ``enqueued`` for sinks that write straight through.
        """
        ...

    async def write(self, message: BroadcastMessage) -> None:
        """Deliver one message.

        Raises:
            ConnectionError: If the transport is closed.
        """
        ...

    def close(self) -> None:
        """Release the transport. Idempotent."""
        ...
