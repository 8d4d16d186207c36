"""Subscriber transport error types.

Internal to the dispatcher and heartbeat scheduler. A transport error never
reaches an API caller; it only drives the subscriber to CLOSED.
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class TransportWriteError(DomainError):
    """A write to a subscriber's transport failed or timed out.

    Attributes:
        code: TRANSPORT_WRITE_FAILED or TRANSPORT_WRITE_TIMEOUT.
        message: Human-readable message.
        subscriber_id: Identifier of the subscriber.
        topic: Topic of the subscriber.
    """

    subscriber_id: str
    topic: str
