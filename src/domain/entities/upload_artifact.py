"""Upload artifact domain entity.

The outcome of one upload: where the original (and optional thumbnail)
live, and the URLs viewers use to display and download it.

An artifact is only broadcast after its original has been durably stored.
A missing thumbnail is a degraded but valid artifact; its display URL then
points at the original.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from src.domain.value_objects.upload_context import UploadContext


@dataclass(frozen=True, slots=True, kw_only=True)
class UploadArtifact:
    """Stored photo with resolved URLs.

    Attributes:
        id: Globally unique identifier minted before any storage write.
        topic: Owning event topic.
        original_key: Locator of the original.
        thumbnail_key: Locator of the thumbnail, or None when absent.
        display_url: Thumbnail URL if present, else the original's URL.
        download_url: URL of the original.
        processed: True if the original required conversion. None when
            unknown (artifacts recovered from a listing).
        original_format: Source format when converted.
        context: Uploader-supplied metadata, when known.
        last_modified: Storage time (UTC).

    Example:
        >>> artifact.to_payload()["thumbnailKey"]
        'wedding-42/0190f..._thumb.jpg'
    """

    id: str
    topic: str
    original_key: str
    thumbnail_key: str | None
    display_url: str
    download_url: str
    processed: bool | None = None
    original_format: str | None = None
    context: UploadContext | None = None
    last_modified: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def has_thumbnail(self) -> bool:
        """Whether a separate thumbnail was stored."""
        return self.thumbnail_key is not None

    def to_payload(self) -> dict[str, Any]:
        """Photo object carried by ``photo_update`` messages.

        Returns:
            JSON-serializable dict with camelCase keys.
        """
        context = self.context or UploadContext()
        return {
            "artifactId": self.id,
            "topic": self.topic,
            "originalKey": self.original_key,
            "thumbnailKey": self.thumbnail_key,
            "displayUrl": self.display_url,
            "downloadUrl": self.download_url,
            "processed": self.processed,
            "originalFormat": self.original_format,
            "originalName": context.original_name,
            "localPath": context.local_path,
            "shotAt": context.shot_at,
            "checksum": context.checksum,
            "lastModified": self.last_modified.isoformat(),
        }
