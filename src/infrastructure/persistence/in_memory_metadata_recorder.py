"""In-memory upload metadata recorder.

Implements MetadataRecorderProtocol with process-local records and
per-topic counters. Suitable for single-process deployments; records do
not survive a restart, while stored photos do (listing reads storage, not
these records).

A failed record does not undo the upload: the photo stays stored and
announced, and the gap is only visible in the ``metadata_record_failed``
log entry. Nothing reconciles records against storage.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import UploadArtifact
from src.domain.errors import MetadataRecordError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects import UploadContext


@dataclass(frozen=True, slots=True, kw_only=True)
class PhotoRecord:
    """Recorded metadata of one stored photo."""

    artifact_id: str
    topic: str
    original_key: str
    thumbnail_key: str | None
    size_bytes: int
    processed: bool | None
    original_format: str | None
    context: UploadContext
    recorded_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(slots=True)
class TopicStats:
    """Running counters for one topic."""

    photo_count: int = 0
    total_size_bytes: int = 0


class InMemoryMetadataRecorder:
    """Process-local photo records.

    Args:
        logger: Structured logger.
    """

    def __init__(self, *, logger: LoggerProtocol) -> None:
        self._records: dict[str, dict[str, PhotoRecord]] = {}
        self._stats: dict[str, TopicStats] = {}
        self._lock = asyncio.Lock()
        self._logger = logger

    async def record_upload(
        self, artifact: UploadArtifact, context: UploadContext, size_bytes: int
    ) -> Result[None, MetadataRecordError]:
        """Record one stored upload and update the topic counters.

        Returns:
            Success(None), or Failure(MetadataRecordError) if the artifact
            was already recorded.
        """
        async with self._lock:
            topic_records = self._records.setdefault(artifact.topic, {})
            if artifact.id in topic_records:
                return Failure(
                    error=MetadataRecordError(
                        code=ErrorCode.METADATA_RECORD_FAILED,
                        message="Photo already recorded",
                        artifact_id=artifact.id,
                    )
                )

            topic_records[artifact.id] = PhotoRecord(
                artifact_id=artifact.id,
                topic=artifact.topic,
                original_key=artifact.original_key,
                thumbnail_key=artifact.thumbnail_key,
                size_bytes=size_bytes,
                processed=artifact.processed,
                original_format=artifact.original_format,
                context=context,
            )
            stats = self._stats.setdefault(artifact.topic, TopicStats())
            stats.photo_count += 1
            stats.total_size_bytes += size_bytes

        self._logger.debug(
            "photo_recorded",
            topic=artifact.topic,
            artifact_id=artifact.id,
            size_bytes=size_bytes,
        )
        return Success(value=None)

    def get(self, topic: str, artifact_id: str) -> PhotoRecord | None:
        return self._records.get(topic, {}).get(artifact_id)

    def stats(self, topic: str) -> TopicStats:
        return self._stats.get(topic, TopicStats())
