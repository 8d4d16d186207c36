"""Upload metadata recording protocol (port)."""

from typing import Protocol

from src.core.result import Result
from src.domain.entities import UploadArtifact
from src.domain.errors import MetadataRecordError
from src.domain.value_objects import UploadContext


class MetadataRecorderProtocol(Protocol):
    """Protocol for the persistence collaborator that records uploads.

    Implementations:
        - InMemoryMetadataRecorder: Process-local records and counters
    """

    async def record_upload(
        self, artifact: UploadArtifact, context: UploadContext, size_bytes: int
    ) -> Result[None, MetadataRecordError]:
        """Record one stored upload.

        Args:
            artifact: The stored artifact.
            context: Uploader-supplied metadata.
            size_bytes: Size of the stored original.

        Returns:
            Success(None) or Failure(MetadataRecordError).
        """
        ...
