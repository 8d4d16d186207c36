"""Photo request/response schemas.

Response schemas for the event photo endpoints. Schemas are built from
domain entities and application DTOs via ``from_*`` classmethods.
"""

import base64
from datetime import datetime

from pydantic import BaseModel, Field

from src.application.dtos import PhotoContent
from src.domain.entities import UploadArtifact


class PhotoStorageInfo(BaseModel):
    """Where an uploaded photo was stored."""

    original_key: str = Field(description="Storage key of the original")
    thumbnail_key: str | None = Field(
        None, description="Storage key of the thumbnail (absent if skipped)"
    )
    mode: str = Field(description="Storage backend mode (local, s3)")


class PhotoUploadMeta(BaseModel):
    """Uploader-supplied and conversion metadata."""

    original_name: str | None = Field(None, description="Original file name")
    local_path: str | None = Field(None, description="Path on the uploader's machine")
    shot_at: str | None = Field(None, description="Capture time as sent by uploader")
    checksum: str | None = Field(None, description="Uploader-computed checksum")
    processed: bool | None = Field(
        None, description="Whether the original needed format conversion"
    )
    original_format: str | None = Field(
        None, description="Source format when converted (e.g. NEF)"
    )


class PhotoUploadResponse(BaseModel):
    """Response schema for a successful upload.

    Attributes:
        success: Always True (failures use Problem Details).
        message: Human-readable summary.
        photo_id: Artifact identifier.
        topic: Canonical topic of the event.
        storage: Stored keys and backend mode.
        display_url: Thumbnail URL (original URL if no thumbnail).
        download_url: Original URL.
        meta: Upload metadata.
    """

    success: bool = Field(True, description="Upload succeeded")
    message: str = Field(description="Human-readable summary")
    photo_id: str = Field(description="Photo identifier")
    topic: str = Field(description="Event topic")
    storage: PhotoStorageInfo
    display_url: str = Field(description="URL to display the photo")
    download_url: str = Field(description="URL of the original")
    meta: PhotoUploadMeta

    @classmethod
    def from_artifact(cls, artifact: UploadArtifact, mode: str) -> "PhotoUploadResponse":
        """Create response from a stored artifact.

        Args:
            artifact: Artifact returned by UploadPhotoHandler.
            mode: Storage backend mode.

        Returns:
            PhotoUploadResponse instance.
        """
        context = artifact.context
        return cls(
            message="Photo stored and announced",
            photo_id=artifact.id,
            topic=artifact.topic,
            storage=PhotoStorageInfo(
                original_key=artifact.original_key,
                thumbnail_key=artifact.thumbnail_key,
                mode=mode,
            ),
            display_url=artifact.display_url,
            download_url=artifact.download_url,
            meta=PhotoUploadMeta(
                original_name=context.original_name if context else None,
                local_path=context.local_path if context else None,
                shot_at=context.shot_at if context else None,
                checksum=context.checksum if context else None,
                processed=artifact.processed,
                original_format=artifact.original_format,
            ),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "message": "Photo stored and announced",
                "photo_id": "0190f3a2-7c1e-7b9a-8d61-3f2c9e4b5a10",
                "topic": "wedding-42",
                "storage": {
                    "original_key": "wedding-42/0190f3a2-7c1e-7b9a-8d61-3f2c9e4b5a10_original.jpg",
                    "thumbnail_key": "wedding-42/0190f3a2-7c1e-7b9a-8d61-3f2c9e4b5a10_thumb.jpg",
                    "mode": "local",
                },
                "display_url": "/api/files/wedding-42/0190f3a2-7c1e-7b9a-8d61-3f2c9e4b5a10_thumb.jpg",
                "download_url": "/api/files/wedding-42/0190f3a2-7c1e-7b9a-8d61-3f2c9e4b5a10_original.jpg",
                "meta": {"original_name": "DSC_0042.NEF", "processed": True, "original_format": "NEF"},
            }
        }
    }


class PhotoResponse(BaseModel):
    """One photo of an event gallery."""

    artifact_id: str = Field(description="Photo identifier")
    topic: str = Field(description="Event topic")
    original_key: str = Field(description="Storage key of the original")
    thumbnail_key: str | None = Field(None, description="Storage key of the thumbnail")
    display_url: str = Field(description="URL to display the photo")
    download_url: str = Field(description="URL of the original")
    last_modified: datetime = Field(description="Storage time of the original")

    @classmethod
    def from_artifact(cls, artifact: UploadArtifact) -> "PhotoResponse":
        return cls(
            artifact_id=artifact.id,
            topic=artifact.topic,
            original_key=artifact.original_key,
            thumbnail_key=artifact.thumbnail_key,
            display_url=artifact.display_url,
            download_url=artifact.download_url,
            last_modified=artifact.last_modified,
        )


class PhotoListResponse(BaseModel):
    """Response schema for an event gallery (newest first)."""

    topic: str = Field(description="Event topic")
    photos: list[PhotoResponse] = Field(description="Photos, newest first")
    total: int = Field(description="Number of photos")

    @classmethod
    def from_artifacts(
        cls, topic: str, artifacts: list[UploadArtifact]
    ) -> "PhotoListResponse":
        photos = [PhotoResponse.from_artifact(a) for a in artifacts]
        return cls(topic=topic, photos=photos, total=len(photos))


class PhotoContentResponse(BaseModel):
    """Original bytes of one photo as a data URL."""

    artifact_id: str = Field(description="Photo identifier")
    topic: str = Field(description="Event topic")
    content_type: str = Field(description="MIME type of the original")
    data_url: str = Field(description="data:<type>;base64,<bytes>")

    @classmethod
    def from_content(cls, content: PhotoContent) -> "PhotoContentResponse":
        encoded = base64.b64encode(content.data).decode("ascii")
        return cls(
            artifact_id=content.artifact_id,
            topic=content.topic,
            content_type=content.content_type,
            data_url=f"data:{content.content_type};base64,{encoded}",
        )
