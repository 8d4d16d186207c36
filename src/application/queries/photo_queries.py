"""Photo queries (CQRS read operations).

Queries are immutable requests for photo data. They never change state.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class ListPhotos:
    """List an event's stored photos, newest first.

    URLs are resolved fresh for every query, so signed URLs are always
    within their TTL when returned.

    Attributes:
        topic: Canonical topic of the event.
    """

    topic: str


@dataclass(frozen=True, kw_only=True)
class FetchPhoto:
    """Read the original bytes of one photo.

    Attributes:
        topic: Canonical topic of the event.
        artifact_id: Photo identifier.
    """

    topic: str
    artifact_id: str
