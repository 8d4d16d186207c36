"""Subscriber connection lifecycle states.

State Machine:
    OPEN → CLOSING → CLOSED

    - OPEN: Registered under a topic, transport writable
    - CLOSING: Write failure or client close observed, teardown in progress
    - CLOSED: Transport released, heartbeat cancelled, deregistered (terminal)

There is no transition back to OPEN. A reconnecting viewer is a new
Subscriber with a new identity.

Usage:
    from src.domain.enums import SubscriberState

    if subscriber.state == SubscriberState.OPEN:
        await subscriber.send(message, timeout=5)
"""

from enum import Enum


class SubscriberState(str, Enum):
    """Subscriber connection lifecycle states."""

    OPEN = "open"
    """Registered and writable."""

    CLOSING = "closing"
    """Teardown started; no further writes are attempted."""

    CLOSED = "closed"
    """Terminal. Transport closed and heartbeat cancelled."""

    @classmethod
    def terminal_states(cls) -> list["SubscriberState"]:
        """Get states from which no write may happen.

        Returns:
            list[SubscriberState]: CLOSING and CLOSED.
        """
        return [cls.CLOSING, cls.CLOSED]
