"""Storage router.

Holds the one storage backend chosen at process start and delegates the
four storage operations to it. Callers never branch on the storage mode;
they depend on the router alone.
"""

from __future__ import annotations

from src.core.errors import NotFoundError
from src.core.result import Result
from src.domain.errors import StorageReadError, StorageWriteError
from src.domain.protocols.storage_backend_protocol import StorageBackendProtocol
from src.domain.value_objects import ConvertedImage, StoredArtifact, StoredKeys


class StorageRouter:
    """Pure delegate over a single StorageBackendProtocol instance.

    Args:
        backend: Backend selected from configuration.

    Example:
        >>> router = get_storage_router()
        >>> result = await router.store(original, thumb, "wedding-42", artifact_id)
    """

    def __init__(self, backend: StorageBackendProtocol) -> None:
        self._backend = backend

    @property
    def mode(self) -> str:
        """Mode of the wrapped backend ("s3", "local")."""
        return self._backend.mode

    async def store(
        self,
        original: ConvertedImage,
        thumbnail: ConvertedImage | None,
        topic: str,
        artifact_id: str,
    ) -> Result[StoredKeys, StorageWriteError]:
        return await self._backend.store(original, thumbnail, topic, artifact_id)

    async def list(
        self, topic: str
    ) -> Result[list[StoredArtifact], StorageReadError]:
        return await self._backend.list(topic)

    def url_for(self, key: str) -> str:
        return self._backend.url_for(key)

    async def fetch(
        self, topic: str, artifact_id: str
    ) -> Result[tuple[bytes, str], NotFoundError | StorageReadError]:
        return await self._backend.fetch(topic, artifact_id)

    def describe(self) -> dict[str, str]:
        """Operational description of the wrapped backend."""
        return self._backend.describe()
