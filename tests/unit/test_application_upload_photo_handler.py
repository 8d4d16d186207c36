"""Unit tests for UploadPhotoHandler.

Tests cover:
- Success path: convert → thumbnail → store → record → notify
- Thumbnail preparation (supplied, derived, skipped)
- Conversion and storage failures (nothing announced)
- Metadata failures (announced anyway)
- Announcement survives caller cancellation once the original is stored

Architecture:
- Unit tests with mocked collaborators
- Async tests (pytest-asyncio)
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

from src.application.commands.handlers.upload_photo_handler import (
    UploadPhotoHandler,
)
from src.application.commands.upload_commands import UploadPhoto
from src.application.errors import ApplicationErrorCode
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import ConversionError, MetadataRecordError, StorageWriteError
from src.domain.value_objects import ConvertedImage, StoredKeys, UploadContext

SMALL = ConvertedImage(buffer=b"small", content_type="image/jpeg", width=640, height=480)
WIDE = ConvertedImage(buffer=b"wide", content_type="image/jpeg", width=4000, height=3000)
RESIZED = ConvertedImage(buffer=b"resized", content_type="image/jpeg", width=1024, height=768)


def _stored(artifact_id: str, thumbnail: bool = True) -> StoredKeys:
    return StoredKeys(
        original_key=f"wedding-42/{artifact_id}_original.jpg",
        thumbnail_key=f"wedding-42/{artifact_id}_thumb.jpg" if thumbnail else None,
    )


@pytest.fixture
def converter():
    converter = MagicMock()
    converter.convert = AsyncMock(return_value=Success(value=SMALL))
    converter.resize = AsyncMock(return_value=Success(value=RESIZED))
    return converter


@pytest.fixture
def storage():
    storage = MagicMock()

    async def store(original, thumbnail, topic, artifact_id):
        return Success(value=_stored(artifact_id, thumbnail is not None))

    storage.store = AsyncMock(side_effect=store)
    storage.url_for.side_effect = lambda key: f"/api/files/{key}"
    return storage


@pytest.fixture
def recorder():
    recorder = MagicMock()
    recorder.record_upload = AsyncMock(return_value=Success(value=None))
    return recorder


@pytest.fixture
def dispatcher():
    dispatcher = MagicMock()
    dispatcher.notify_upload = AsyncMock(return_value=2)
    return dispatcher


@pytest.fixture
def handler(converter, storage, recorder, dispatcher, mock_logger):
    return UploadPhotoHandler(
        converter=converter,
        storage=storage,
        metadata_recorder=recorder,
        dispatcher=dispatcher,
        logger=mock_logger,
        thumbnail_max_width=1024,
    )


def _command(**overrides) -> UploadPhoto:
    values = {
        "topic": "wedding-42",
        "original": b"raw-bytes",
        "original_filename": "IMG_0001.jpg",
        "context": UploadContext(original_name="IMG_0001.jpg", checksum="c1"),
    }
    values.update(overrides)
    return UploadPhoto(**values)


@pytest.mark.unit
class TestUploadPhotoSuccess:
    """Test the happy path."""

    async def test_upload_returns_announced_artifact(
        self, handler, storage, recorder, dispatcher
    ):
        """Test the artifact is stored, recorded and announced."""
        result = await handler.handle(_command())

        assert isinstance(result, Success)
        artifact = result.value
        UUID(artifact.id)
        assert artifact.topic == "wedding-42"
        assert artifact.original_key == f"wedding-42/{artifact.id}_original.jpg"
        assert artifact.display_url == f"/api/files/wedding-42/{artifact.id}_thumb.jpg"
        assert artifact.download_url == f"/api/files/wedding-42/{artifact.id}_original.jpg"
        assert artifact.processed is False
        assert artifact.context.checksum == "c1"

        dispatcher.notify_upload.assert_awaited_once_with("wedding-42", artifact)
        recorder.record_upload.assert_awaited_once()
        assert recorder.record_upload.call_args.args[2] == SMALL.size

    async def test_id_is_minted_before_storage(self, handler, storage):
        """Test the id handed to storage is the artifact id."""
        result = await handler.handle(_command())

        stored_id = storage.store.call_args.args[3]
        assert stored_id == result.value.id

    async def test_ids_are_unique(self, handler):
        """Test two uploads of the same file get different ids."""
        first = await handler.handle(_command())
        second = await handler.handle(_command())

        assert first.value.id != second.value.id

    async def test_photo_uploaded_is_logged(self, handler, mock_logger):
        """Test the success log carries the delivery count."""
        await handler.handle(_command())

        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args.args[0] == "photo_uploaded"
        assert mock_logger.info.call_args.kwargs["delivered"] == 2


@pytest.mark.unit
class TestUploadPhotoThumbnail:
    """Test thumbnail preparation."""

    async def test_small_original_is_its_own_thumbnail(self, handler, storage, converter):
        """Test originals within the width limit are reused."""
        await handler.handle(_command())

        assert storage.store.call_args.args[1] is SMALL
        converter.resize.assert_not_awaited()

    async def test_wide_original_is_resized(self, handler, storage, converter):
        """Test a wide original yields a derived thumbnail."""
        converter.convert.return_value = Success(value=WIDE)

        await handler.handle(_command())

        converter.resize.assert_awaited_once_with(WIDE, 1024)
        assert storage.store.call_args.args[1] is RESIZED

    async def test_supplied_thumbnail_is_converted(self, handler, storage, converter):
        """Test a client thumbnail goes through the converter."""
        supplied = ConvertedImage(buffer=b"t", content_type="image/jpeg", width=300)
        converter.convert.side_effect = [Success(value=SMALL), Success(value=supplied)]

        await handler.handle(
            _command(thumbnail=b"thumb-bytes", thumbnail_filename="thumb.jpg")
        )

        assert converter.convert.await_args_list[1].args == (b"thumb-bytes", "thumb.jpg")
        assert storage.store.call_args.args[1] is supplied

    async def test_thumbnail_failure_is_not_fatal(
        self, handler, storage, converter, mock_logger
    ):
        """Test a failed thumbnail leaves display_url on the original."""
        converter.convert.return_value = Success(value=WIDE)
        converter.resize.return_value = Failure(
            error=ConversionError(
                code=ErrorCode.CONVERSION_MALFORMED_FILE,
                message="Failed to resize image",
            )
        )

        result = await handler.handle(_command())

        assert storage.store.call_args.args[1] is None
        assert result.value.thumbnail_key is None
        assert result.value.display_url == result.value.download_url
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "thumbnail_skipped"


@pytest.mark.unit
class TestUploadPhotoFailures:
    """Test failures before the original is durable."""

    async def test_conversion_failure(self, handler, converter, storage, dispatcher):
        """Test a conversion error stores and announces nothing."""
        converter.convert.return_value = Failure(
            error=ConversionError(
                code=ErrorCode.CONVERSION_UNSUPPORTED_FORMAT,
                message="unsupported format: .xyz",
                field="original_file",
            )
        )

        result = await handler.handle(_command(original_filename="notes.xyz"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.CONVERSION_FAILED
        assert result.error.details == {"reason": "unsupported_format"}
        storage.store.assert_not_awaited()
        dispatcher.notify_upload.assert_not_awaited()

    async def test_storage_failure(self, handler, storage, recorder, dispatcher):
        """Test a failed original write announces nothing."""
        storage.store.side_effect = None
        storage.store.return_value = Failure(
            error=StorageWriteError(
                code=ErrorCode.STORAGE_WRITE_FAILED,
                message="Failed to store original photo",
                key="wedding-42/x_original.jpg",
                backend="s3",
            )
        )

        result = await handler.handle(_command())

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.STORAGE_UNAVAILABLE
        recorder.record_upload.assert_not_awaited()
        dispatcher.notify_upload.assert_not_awaited()

    async def test_metadata_failure_still_announces(
        self, handler, recorder, dispatcher, mock_logger
    ):
        """Test a metadata error is logged and the upload still succeeds."""
        recorder.record_upload.return_value = Failure(
            error=MetadataRecordError(
                code=ErrorCode.METADATA_RECORD_FAILED,
                message="Photo already recorded",
                artifact_id="x",
            )
        )

        result = await handler.handle(_command())

        assert isinstance(result, Success)
        dispatcher.notify_upload.assert_awaited_once()
        assert mock_logger.error.call_args.args[0] == "metadata_record_failed"


@pytest.mark.unit
class TestUploadPhotoCancellation:
    """Test announcements outlive a cancelled request."""

    async def test_announcement_completes_after_caller_cancelled(
        self, handler, dispatcher
    ):
        """Test cancelling the caller after storage still notifies viewers."""
        started = asyncio.Event()
        release = asyncio.Event()
        announced = []

        async def slow_notify(topic, artifact):
            started.set()
            await release.wait()
            announced.append(artifact.id)
            return 1

        dispatcher.notify_upload.side_effect = slow_notify

        task = asyncio.create_task(handler.handle(_command()))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        release.set()
        await handler.drain()

        assert len(announced) == 1

    async def test_drain_without_inflight_returns(self, handler):
        """Test drain() is a no-op when nothing is running."""
        await handler.drain()
