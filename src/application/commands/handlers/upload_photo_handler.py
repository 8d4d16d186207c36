"""UploadPhoto command handler.

Drives one upload from raw bytes to a broadcast announcement.

Architecture:
    - Application layer handler
    - Orchestrates: convert → thumbnail → store → resolve URLs → record → notify
    - Depends on protocols and the storage router, never on a concrete backend

Flow:
    1. Mint a time-ordered artifact id (before any storage write)
    2. Convert the original (fatal on failure, nothing written)
    3. Prepare the thumbnail (best-effort, never fatal)
    4. Store original and thumbnail (original failure is fatal)
    5. Resolve display/download URLs
    6. Record metadata (best-effort, logged on failure)
    7. Notify the topic's subscribers
    8. Return the artifact

Steps 5-7 run shielded from caller cancellation: once the original is
durable, the announcement is delivered even if the uploader disconnects.

Reference:
    - src/infrastructure/sse/broadcast_dispatcher.py
    - src/infrastructure/storage/storage_router.py
"""

import asyncio

from uuid_extensions import uuid7

from src.application.commands.upload_commands import UploadPhoto
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import UploadArtifact
from src.domain.protocols.image_converter_protocol import ImageConverterProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.metadata_recorder_protocol import (
    MetadataRecorderProtocol,
)
from src.domain.value_objects import ConvertedImage, StoredKeys
from src.infrastructure.sse.broadcast_dispatcher import BroadcastDispatcher
from src.infrastructure.storage.storage_router import StorageRouter


class UploadPhotoHandler:
    """Handler for UploadPhoto command.

    Dependencies (injected via constructor):
        - converter: Turns uploads into storable images
        - storage: Router over the configured storage backend
        - metadata_recorder: Optional upload record sink
        - dispatcher: Fan-out to the topic's subscribers
        - logger: Structured logger

    Returns:
        Result[UploadArtifact, ApplicationError]
    """

    def __init__(
        self,
        *,
        converter: ImageConverterProtocol,
        storage: StorageRouter,
        metadata_recorder: MetadataRecorderProtocol,
        dispatcher: BroadcastDispatcher,
        logger: LoggerProtocol,
        thumbnail_max_width: int = 1024,
    ) -> None:
        self._converter = converter
        self._storage = storage
        self._metadata_recorder = metadata_recorder
        self._dispatcher = dispatcher
        self._logger = logger
        self._thumbnail_max_width = thumbnail_max_width
        # Strong references keep shielded publish tasks alive after the
        # awaiting request has been cancelled.
        self._inflight: set[asyncio.Task[UploadArtifact]] = set()

    async def handle(
        self, command: UploadPhoto
    ) -> Result[UploadArtifact, ApplicationError]:
        """Handle an UploadPhoto command.

        Args:
            command: UploadPhoto command.

        Returns:
            Success(UploadArtifact): Original stored and announced.
            Failure(ApplicationError): CONVERSION_FAILED (nothing stored) or
                STORAGE_UNAVAILABLE (original write failed, nothing
                announced).
        """
        artifact_id = str(uuid7())

        converted = await self._converter.convert(
            command.original, command.original_filename
        )
        if isinstance(converted, Failure):
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.CONVERSION_FAILED,
                    message=converted.error.message,
                    domain_error=converted.error,
                    details={"reason": converted.error.reason},
                )
            )
        original = converted.value

        thumbnail = await self._prepare_thumbnail(command, original, artifact_id)

        stored = await self._storage.store(
            original, thumbnail, command.topic, artifact_id
        )
        if isinstance(stored, Failure):
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.STORAGE_UNAVAILABLE,
                    message=stored.error.message,
                    domain_error=stored.error,
                )
            )

        task = asyncio.ensure_future(
            self._publish(command, original, stored.value, artifact_id)
        )
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        artifact = await asyncio.shield(task)
        return Success(value=artifact)

    async def drain(self) -> None:
        """Wait for announcements still running after their request ended."""
        if self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def _prepare_thumbnail(
        self, command: UploadPhoto, original: ConvertedImage, artifact_id: str
    ) -> ConvertedImage | None:
        if command.thumbnail is not None:
            result = await self._converter.convert(
                command.thumbnail,
                command.thumbnail_filename or command.original_filename,
            )
        elif (
            original.width is not None
            and original.width > self._thumbnail_max_width
        ):
            result = await self._converter.resize(original, self._thumbnail_max_width)
        else:
            return original

        match result:
            case Success(value=thumbnail):
                return thumbnail
            case Failure(error=error):
                self._logger.warning(
                    "thumbnail_skipped",
                    topic=command.topic,
                    artifact_id=artifact_id,
                    reason=error.reason,
                    error_message=error.message,
                )
                return None

    async def _publish(
        self,
        command: UploadPhoto,
        original: ConvertedImage,
        keys: StoredKeys,
        artifact_id: str,
    ) -> UploadArtifact:
        download_url = self._storage.url_for(keys.original_key)
        display_url = (
            self._storage.url_for(keys.thumbnail_key)
            if keys.thumbnail_key is not None
            else download_url
        )
        artifact = UploadArtifact(
            id=artifact_id,
            topic=command.topic,
            original_key=keys.original_key,
            thumbnail_key=keys.thumbnail_key,
            display_url=display_url,
            download_url=download_url,
            processed=original.processed,
            original_format=original.original_format,
            context=command.context,
        )

        recorded = await self._metadata_recorder.record_upload(
            artifact, command.context, original.size
        )
        if isinstance(recorded, Failure):
            self._logger.error(
                "metadata_record_failed",
                topic=command.topic,
                artifact_id=artifact_id,
                error_message=recorded.error.message,
            )

        delivered = await self._dispatcher.notify_upload(command.topic, artifact)
        self._logger.info(
            "photo_uploaded",
            topic=command.topic,
            artifact_id=artifact_id,
            original_key=keys.original_key,
            thumbnail_key=keys.thumbnail_key,
            processed=original.processed,
            size_bytes=original.size,
            delivered=delivered,
        )
        return artifact
