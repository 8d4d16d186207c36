"""Broadcast messages delivered to event gallery subscribers.

A BroadcastMessage is the unit the dispatcher and heartbeat scheduler hand
to a subscriber's transport. It is immutable once constructed and knows how
to render itself in the text/event-stream wire format.

Wire Format (SSE spec):
    id: <message_id>
    event: <kind>
    data: {"kind": "<kind>", "topic": "<topic>", ...payload}

Reference:
    - https://html.spec.whatwg.org/multipage/server-sent-events.html
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.entities.upload_artifact import UploadArtifact


class BroadcastKind(StrEnum):
    """All message kinds a subscriber can receive."""

    CONNECTED = "connected"
    """Acknowledgment sent first on every new subscription."""

    HEARTBEAT = "heartbeat"
    """Per-subscriber liveness ping."""

    PHOTO_UPDATE = "photo_update"
    """A new photo was stored under the topic."""


@dataclass(frozen=True, kw_only=True, slots=True)
class BroadcastMessage:
    """Message addressed to the subscribers of one topic.

    Attributes:
        topic: Topic the message belongs to.
        kind: Message kind.
        payload: Extra JSON fields merged into the data line.
        message_id: Unique identifier (UUID v7 for ordering).
        created_at: Construction time (UTC).

    Example:
        >>> message = BroadcastMessage.connected("wedding-42")
        >>> print(message.to_sse_format())
        id: 01234567-89ab-cdef-0123-456789abcdef
        event: connected
        data: {"kind": "connected", "topic": "wedding-42"}
    """

    topic: str
    kind: BroadcastKind
    payload: Mapping[str, Any] = field(default_factory=dict)
    message_id: UUID = field(default_factory=uuid7)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        # Freeze the payload so a message handed to the dispatcher cannot change.
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    @classmethod
    def connected(cls, topic: str) -> "BroadcastMessage":
        """Build the subscription acknowledgment."""
        return cls(topic=topic, kind=BroadcastKind.CONNECTED)

    @classmethod
    def heartbeat(cls, topic: str) -> "BroadcastMessage":
        """Build a liveness ping."""
        return cls(topic=topic, kind=BroadcastKind.HEARTBEAT)

    @classmethod
    def photo_update(cls, artifact: UploadArtifact) -> "BroadcastMessage":
        """Build the notification for a newly stored photo.

        Args:
            artifact: The durably stored upload.

        Returns:
            BroadcastMessage carrying the photo payload.
        """
        return cls(
            topic=artifact.topic,
            kind=BroadcastKind.PHOTO_UPDATE,
            payload={"photo": artifact.to_payload()},
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON body of the data line."""
        return {"kind": self.kind.value, "topic": self.topic, **self.payload}

    def to_sse_format(self) -> str:
        """Serialize to SSE wire format.

        Returns:
            SSE-formatted string ready for streaming response.
        """
        lines = [
            f"id: {self.message_id}",
            f"event: {self.kind.value}",
            f"data: {json.dumps(self.to_dict())}",
            "",  # Empty line terminates the message
        ]
        return "\n".join(lines) + "\n"
