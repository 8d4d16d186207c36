"""Base storage adapter with shared functionality.

Holds the parts of the storage contract that are identical for every
backend: the original-is-fatal / thumbnail-is-best-effort write policy,
grouping of listed keys into artifacts, and fetch-by-convention. Concrete
adapters only provide raw object I/O.

Subclasses must implement:
    - _write(key, image) -> None
    - _list_objects(prefix) -> list[ListedObject]
    - _find_key(name_prefix) -> str | None
    - _read(key) -> bytes
    - url_for(key) -> str
    - describe() -> dict[str, str]

and set ``mode`` and ``_io_errors`` (exception types raised by their I/O).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import NamedTuple

from src.core.constants import ORIGINAL_VARIANT
from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.errors import StorageReadError, StorageWriteError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects import ConvertedImage, StoredArtifact, StoredKeys
from src.infrastructure.storage.object_keys import ObjectKeys


class ListedObject(NamedTuple):
    """One raw entry of a backend listing."""

    key: str
    modified_at: datetime


def group_listing(objects: Iterable[ListedObject]) -> list[StoredArtifact]:
    """Group raw listing entries into artifacts, newest first.

    Entries are grouped by the artifact id parsed from their name. Groups
    without an original are dropped. Ordering uses the original's
    modification time, ties broken by artifact id (UUID v7 ids sort by
    creation time).

    Args:
        objects: Raw listing entries.

    Returns:
        Artifacts sorted newest first.
    """
    originals: dict[str, ListedObject] = {}
    thumbnails: dict[str, str] = {}

    for entry in objects:
        parsed = ObjectKeys.parse(entry.key)
        if parsed is None:
            continue
        if parsed.variant == ORIGINAL_VARIANT:
            originals[parsed.artifact_id] = entry
        else:
            thumbnails[parsed.artifact_id] = entry.key

    artifacts = [
        StoredArtifact(
            artifact_id=artifact_id,
            original_key=entry.key,
            thumbnail_key=thumbnails.get(artifact_id),
            modified_at=entry.modified_at,
        )
        for artifact_id, entry in originals.items()
    ]
    artifacts.sort(key=lambda a: (a.modified_at, a.artifact_id), reverse=True)
    return artifacts


class BaseStorageAdapter:
    """Base adapter implementing store/list/fetch over raw object I/O.

    Args:
        keys: Key naming helper.
        logger: Structured logger.
    """

    mode: str = "base"
    _io_errors: tuple[type[Exception], ...] = (OSError,)

    def __init__(self, *, keys: ObjectKeys, logger: LoggerProtocol) -> None:
        self._keys = keys
        self._logger = logger

    @property
    def keys(self) -> ObjectKeys:
        return self._keys

    async def store(
        self,
        original: ConvertedImage,
        thumbnail: ConvertedImage | None,
        topic: str,
        artifact_id: str,
    ) -> Result[StoredKeys, StorageWriteError]:
        """Write the original, then best-effort the thumbnail.

        Args:
            original: Converted original image.
            thumbnail: Thumbnail image, or None.
            topic: Owning topic.
            artifact_id: Identifier minted by the upload pipeline.

        Returns:
            Success(StoredKeys) once the original is durable.
            Failure(StorageWriteError) if the original write failed.
        """
        if not (
            ObjectKeys.is_safe_segment(topic)
            and ObjectKeys.is_safe_segment(artifact_id)
        ):
            return Failure(
                error=StorageWriteError(
                    code=ErrorCode.STORAGE_WRITE_FAILED,
                    message="Topic or artifact id cannot be used as a storage key",
                    key=f"{topic}/{artifact_id}",
                    backend=self.mode,
                )
            )

        original_key = self._keys.original(topic, artifact_id, original.content_type)
        try:
            await self._write(original_key, original)
        except self._io_errors as e:
            self._logger.error(
                "storage_original_write_failed",
                error=e,
                key=original_key,
                backend=self.mode,
            )
            return Failure(
                error=StorageWriteError(
                    code=ErrorCode.STORAGE_WRITE_FAILED,
                    message="Failed to store original photo",
                    key=original_key,
                    backend=self.mode,
                    details={"error": str(e)},
                )
            )

        thumbnail_key: str | None = None
        if thumbnail is not None:
            candidate = self._keys.thumbnail(topic, artifact_id, thumbnail.content_type)
            try:
                await self._write(candidate, thumbnail)
                thumbnail_key = candidate
            except self._io_errors as e:
                # Photo stays usable without a thumbnail.
                self._logger.warning(
                    "storage_thumbnail_write_failed",
                    key=candidate,
                    backend=self.mode,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

        return Success(
            value=StoredKeys(original_key=original_key, thumbnail_key=thumbnail_key)
        )

    async def list(
        self, topic: str
    ) -> Result[list[StoredArtifact], StorageReadError]:
        """List a topic's artifacts, newest first.

        Args:
            topic: Topic to list.

        Returns:
            Success(list), empty for unknown topics, or Failure(StorageReadError).
        """
        if not ObjectKeys.is_safe_segment(topic):
            return Success(value=[])
        try:
            objects = await self._list_objects(self._keys.topic_prefix(topic))
        except self._io_errors as e:
            self._logger.error(
                "storage_list_failed", error=e, topic=topic, backend=self.mode
            )
            return Failure(
                error=StorageReadError(
                    code=ErrorCode.STORAGE_READ_FAILED,
                    message="Failed to list photos",
                    backend=self.mode,
                    details={"error": str(e)},
                )
            )
        return Success(value=group_listing(objects))

    async def fetch(
        self, topic: str, artifact_id: str
    ) -> Result[tuple[bytes, str], NotFoundError | StorageReadError]:
        """Read an artifact's original.

        Args:
            topic: Owning topic.
            artifact_id: Artifact identifier.

        Returns:
            Success((bytes, content_type)), Failure(NotFoundError) if absent,
            or Failure(StorageReadError).
        """
        not_found = NotFoundError(
            code=ErrorCode.ARTIFACT_NOT_FOUND,
            message="Photo not found",
            resource_type="Photo",
            resource_id=artifact_id,
        )
        if not (
            ObjectKeys.is_safe_segment(topic)
            and ObjectKeys.is_safe_segment(artifact_id)
        ):
            return Failure(error=not_found)

        try:
            key = await self._find_key(
                self._keys.original_name_prefix(topic, artifact_id)
            )
            if key is None:
                return Failure(error=not_found)
            data = await self._read(key)
        except FileNotFoundError:
            return Failure(error=not_found)
        except self._io_errors as e:
            self._logger.error(
                "storage_fetch_failed",
                error=e,
                topic=topic,
                artifact_id=artifact_id,
                backend=self.mode,
            )
            return Failure(
                error=StorageReadError(
                    code=ErrorCode.STORAGE_READ_FAILED,
                    message="Failed to read photo",
                    backend=self.mode,
                    details={"error": str(e)},
                )
            )

        return Success(value=(data, ObjectKeys.content_type_for(key)))

    async def _write(self, key: str, image: ConvertedImage) -> None:
        raise NotImplementedError("Subclass must implement _write()")

    async def _list_objects(self, prefix: str) -> list[ListedObject]:
        raise NotImplementedError("Subclass must implement _list_objects()")

    async def _find_key(self, name_prefix: str) -> str | None:
        raise NotImplementedError("Subclass must implement _find_key()")

    async def _read(self, key: str) -> bytes:
        raise NotImplementedError("Subclass must implement _read()")

    def url_for(self, key: str) -> str:
        raise NotImplementedError("Subclass must implement url_for()")

    def describe(self) -> dict[str, str]:
        raise NotImplementedError("Subclass must implement describe()")
