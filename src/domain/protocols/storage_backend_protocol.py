"""Storage backend protocol (port) for hexagonal architecture.

Uniform contract for where photos live. Infrastructure provides an S3
adapter (time-limited signed URLs) and a local filesystem adapter
(server-relative URLs); the StorageRouter picks one at startup.

Protocol Pattern:
    - Domain defines the PORT (this protocol)
    - Infrastructure implements ADAPTERS (S3StorageAdapter, LocalStorageAdapter)
    - Application uses protocol (backend-agnostic)
"""

from __future__ import annotations

from typing import Protocol

from src.core.errors import NotFoundError
from src.core.result import Result
from src.domain.errors import StorageReadError, StorageWriteError
from src.domain.value_objects import ConvertedImage, StoredArtifact, StoredKeys


class StorageBackendProtocol(Protocol):
    """Protocol for photo storage backends.

    Implementations must be safe for concurrent use by many uploads and
    listings at once.

    Implementations:
        - S3StorageAdapter: Remote object store (boto3)
        - LocalStorageAdapter: Directory on local disk
    """

    @property
    def mode(self) -> str:
        """Backend mode name ("s3", "local")."""
        ...

    async def store(
        self,
        original: ConvertedImage,
        thumbnail: ConvertedImage | None,
        topic: str,
        artifact_id: str,
    ) -> Result[StoredKeys, StorageWriteError]:
        """Persist the original and, best-effort, the thumbnail.

        Args:
            original: Converted original image.
            thumbnail: Thumbnail image, or None.
            topic: Owning topic.
            artifact_id: Identifier minted by the upload pipeline.

        Returns:
            Success(StoredKeys) once the original is durable. A thumbnail
            write failure is logged and yields ``thumbnail_key=None``.
            Failure(StorageWriteError) if the original write failed.
        """
        ...

    async def list(
        self, topic: str
    ) -> Result[list[StoredArtifact], StorageReadError]:
        """List the topic's artifacts, newest first.

        Args:
            topic: Topic to list.

        Returns:
            Success(list) reflecting backend contents at call time (empty
            for an unknown topic). Failure(StorageReadError) if the backend
            could not be read.
        """
        ...

    def url_for(self, key: str) -> str:
        """Resolve a locator to a URL.

        Signed URLs are recomputed on every call and must not be cached
        past their TTL.

        Args:
            key: Locator returned by store() or list().

        Returns:
            URL a viewer can fetch.
        """
        ...

    async def fetch(
        self, topic: str, artifact_id: str
    ) -> Result[tuple[bytes, str], NotFoundError | StorageReadError]:
        """Read the original's bytes.

        Args:
            topic: Owning topic.
            artifact_id: Artifact identifier.

        Returns:
            Success((bytes, content_type)) if found.
            Failure(NotFoundError) if no original exists.
            Failure(StorageReadError) if the backend could not be read.
        """
        ...

    def describe(self) -> dict[str, str]:
        """Operational description (mode, bucket/region or root path)."""
        ...
