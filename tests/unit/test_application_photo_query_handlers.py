"""Unit tests for ListPhotosHandler and FetchPhotoHandler."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.errors import ApplicationErrorCode
from src.application.queries.handlers.fetch_photo_handler import FetchPhotoHandler
from src.application.queries.handlers.list_photos_handler import ListPhotosHandler
from src.application.queries.photo_queries import FetchPhoto, ListPhotos
from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Success
from src.domain.errors import StorageReadError
from src.domain.value_objects import StoredArtifact

STAMP = datetime(2024, 6, 1, 12, tzinfo=UTC)


@pytest.fixture
def storage():
    storage = MagicMock()
    storage.url_for.side_effect = lambda key: f"https://signed/{key}"
    return storage


def _read_error() -> StorageReadError:
    return StorageReadError(
        code=ErrorCode.STORAGE_READ_FAILED, message="Failed to list photos", backend="s3"
    )


@pytest.mark.unit
class TestListPhotosHandler:
    """Test gallery listing."""

    async def test_list_resolves_urls(self, storage):
        """Test stored artifacts get fresh display and download URLs."""
        storage.list = AsyncMock(
            return_value=Success(
                value=[
                    StoredArtifact(
                        artifact_id="b",
                        original_key="t/b_original.jpg",
                        thumbnail_key="t/b_thumb.jpg",
                        modified_at=STAMP,
                    ),
                    StoredArtifact(
                        artifact_id="a",
                        original_key="t/a_original.jpg",
                        thumbnail_key=None,
                        modified_at=STAMP,
                    ),
                ]
            )
        )

        result = await ListPhotosHandler(storage=storage).handle(ListPhotos(topic="t"))

        assert isinstance(result, Success)
        first, second = result.value
        assert first.id == "b"
        assert first.display_url == "https://signed/t/b_thumb.jpg"
        assert first.download_url == "https://signed/t/b_original.jpg"
        assert first.last_modified == STAMP
        assert second.display_url == second.download_url

    async def test_list_empty(self, storage):
        """Test an empty topic is an empty success."""
        storage.list = AsyncMock(return_value=Success(value=[]))

        result = await ListPhotosHandler(storage=storage).handle(ListPhotos(topic="t"))

        assert result.value == []

    async def test_list_failure(self, storage):
        """Test storage errors map to STORAGE_UNAVAILABLE."""
        storage.list = AsyncMock(return_value=Failure(error=_read_error()))

        result = await ListPhotosHandler(storage=storage).handle(ListPhotos(topic="t"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.STORAGE_UNAVAILABLE


@pytest.mark.unit
class TestFetchPhotoHandler:
    """Test single photo fetch."""

    async def test_fetch_returns_content(self, storage):
        """Test bytes and content type are wrapped in PhotoContent."""
        storage.fetch = AsyncMock(return_value=Success(value=(b"img", "image/png")))

        result = await FetchPhotoHandler(storage=storage).handle(
            FetchPhoto(topic="t", artifact_id="a")
        )

        content = result.value
        assert content.artifact_id == "a"
        assert content.topic == "t"
        assert content.data == b"img"
        assert content.content_type == "image/png"

    async def test_fetch_not_found(self, storage):
        """Test a missing photo maps to NOT_FOUND."""
        storage.fetch = AsyncMock(
            return_value=Failure(
                error=NotFoundError(
                    code=ErrorCode.ARTIFACT_NOT_FOUND,
                    message="Photo not found",
                    resource_type="Photo",
                    resource_id="a",
                )
            )
        )

        result = await FetchPhotoHandler(storage=storage).handle(
            FetchPhoto(topic="t", artifact_id="a")
        )

        assert result.error.code == ApplicationErrorCode.NOT_FOUND
        assert result.error.message == "Photo not found"

    async def test_fetch_read_failure(self, storage):
        """Test read errors map to STORAGE_UNAVAILABLE."""
        storage.fetch = AsyncMock(return_value=Failure(error=_read_error()))

        result = await FetchPhotoHandler(storage=storage).handle(
            FetchPhoto(topic="t", artifact_id="a")
        )

        assert result.error.code == ApplicationErrorCode.STORAGE_UNAVAILABLE
