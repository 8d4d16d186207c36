"""Photo handler result DTOs."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class PhotoContent:
    """Original bytes of one stored photo.

    Attributes:
        artifact_id: Photo identifier.
        topic: Owning topic.
        data: Raw bytes of the original.
        content_type: MIME type implied by the stored key.
    """

    artifact_id: str
    topic: str
    data: bytes
    content_type: str
