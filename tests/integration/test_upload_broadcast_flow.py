"""Integration tests: upload → storage → broadcast to live viewers.

Tests cover:
- A stored photo is announced to every viewer of its event, and only them
- The original is durable before the announcement is written
- Failed uploads announce nothing
- Late viewers recover the gallery by listing
- Dead viewers are pruned without failing the upload
- The same pipeline over S3 (moto) with presigned URLs

Architecture:
- Real components (converter, storage, registry, dispatcher)
- Viewers registered directly in the app's TopicRegistry with recording
  transports, uploads sent over HTTP
"""

from pathlib import Path

import boto3
import pytest
from moto import mock_aws

from src.application.commands.handlers.upload_photo_handler import (
    UploadPhotoHandler,
)
from src.application.commands.upload_commands import UploadPhoto
from src.application.queries.handlers.list_photos_handler import ListPhotosHandler
from src.application.queries.photo_queries import ListPhotos
from src.core.container import get_metadata_recorder, get_topic_registry
from src.core.result import Success
from src.infrastructure.imaging import PillowImageConverter
from src.infrastructure.persistence.in_memory_metadata_recorder import (
    InMemoryMetadataRecorder,
)
from src.infrastructure.sse import BroadcastDispatcher, Subscriber, TopicRegistry
from src.infrastructure.storage import ObjectKeys, S3StorageAdapter, StorageRouter
from tests.utils.http import upload
from tests.utils.transports import RecordingTransport


class DurabilityCheckingTransport(RecordingTransport):
    """Records, for each photo_update, whether its original was on disk."""

    def __init__(self, root: Path):
        super().__init__()
        self.root = root
        self.original_on_disk = []

    async def write(self, message):
        if message.kind.value == "photo_update":
            key = message.to_dict()["photo"]["originalKey"]
            self.original_on_disk.append((self.root / key).is_file())
        await super().write(message)


def _viewer(client, topic, transport=None) -> Subscriber:
    subscriber = Subscriber(topic=topic, transport=transport or RecordingTransport())
    client.portal.call(get_topic_registry().subscribe, topic, subscriber)
    return subscriber


@pytest.mark.integration
class TestUploadAnnouncedToViewers:
    """Test announcements over the local backend."""

    def test_viewers_of_event_receive_photo_update(self, client, jpeg_bytes):
        """Test every viewer of the event gets the stored photo."""
        viewers = [_viewer(client, "wedding-42") for _ in range(3)]
        bystander = _viewer(client, "other-event")

        body = upload(client, "wedding-42", jpeg_bytes).json()

        for viewer in viewers:
            assert viewer.transport.kinds == ["connected", "photo_update"]
            photo = viewer.transport.messages[1].to_dict()["photo"]
            assert photo["artifactId"] == body["photo_id"]
            assert photo["displayUrl"] == body["display_url"]
            assert photo["downloadUrl"] == body["download_url"]
            assert photo["originalName"] == "photo.jpg"
        assert bystander.transport.kinds == ["connected"]

    def test_original_is_durable_before_announcement(self, client, local_env, jpeg_bytes):
        """Test the original exists when the viewer's write happens."""
        transport = DurabilityCheckingTransport(local_env)
        _viewer(client, "wedding-42", transport)

        upload(client, "wedding-42", jpeg_bytes)

        assert transport.original_on_disk == [True]

    def test_failed_upload_announces_nothing(self, client):
        """Test a conversion failure reaches no viewer."""
        viewer = _viewer(client, "wedding-42")

        response = upload(client, "wedding-42", b"not an image", "notes.xyz", "text/plain")

        assert response.status_code == 415
        assert viewer.transport.kinds == ["connected"]

    def test_announcements_follow_upload_order(self, client, jpeg_bytes):
        """Test sequential uploads reach a viewer in order."""
        viewer = _viewer(client, "wedding-42")

        ids = [upload(client, "wedding-42", jpeg_bytes).json()["photo_id"] for _ in range(3)]

        received = [m.to_dict()["photo"]["artifactId"] for m in viewer.transport.messages[1:]]
        assert received == ids

    def test_dead_viewer_is_pruned_and_upload_succeeds(self, client, jpeg_bytes):
        """Test a failing viewer is removed while the others are served."""
        healthy = _viewer(client, "wedding-42")
        dead = _viewer(client, "wedding-42", RecordingTransport(fail_after=1))

        response = upload(client, "wedding-42", jpeg_bytes)

        assert response.status_code == 201
        assert healthy.transport.kinds == ["connected", "photo_update"]
        assert dead.is_open is False
        stats = client.get("/api/v1/events/stats").json()
        assert stats["topics"] == {"wedding-42": 1}

    def test_late_viewer_recovers_by_listing(self, client, jpeg_bytes):
        """Test photos uploaded before subscribing are not replayed but listed."""
        photo_id = upload(client, "wedding-42", jpeg_bytes).json()["photo_id"]

        late = _viewer(client, "wedding-42")
        gallery = client.get("/api/v1/events/wedding-42/photos").json()

        assert late.transport.kinds == ["connected"]
        assert [p["artifact_id"] for p in gallery["photos"]] == [photo_id]

    def test_upload_is_recorded(self, client, jpeg_bytes):
        """Test the metadata recorder sees each stored upload."""
        photo_id = upload(
            client, "wedding-42", jpeg_bytes, form={"checksum": "abc"}
        ).json()["photo_id"]

        record = get_metadata_recorder().get("wedding-42", photo_id)

        assert record is not None
        assert record.context.checksum == "abc"
        assert record.size_bytes == len(jpeg_bytes)


@pytest.mark.integration
class TestS3Pipeline:
    """Test the upload pipeline over a moto-mocked bucket."""

    @pytest.fixture
    def s3_router(self, monkeypatch, mock_logger):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
        with mock_aws():
            client = boto3.client("s3", region_name="us-east-1")
            client.create_bucket(Bucket="event-photos")
            yield StorageRouter(
                S3StorageAdapter(
                    bucket="event-photos",
                    keys=ObjectKeys(prefix="events"),
                    logger=mock_logger,
                    client=client,
                )
            )

    async def test_upload_over_s3_announces_signed_urls(
        self, s3_router, mock_logger, wide_jpeg_bytes
    ):
        """Test S3 keys, presigned URLs and listing after an upload."""
        registry = TopicRegistry(logger=mock_logger)
        dispatcher = BroadcastDispatcher(registry=registry, logger=mock_logger)
        handler = UploadPhotoHandler(
            converter=PillowImageConverter(logger=mock_logger),
            storage=s3_router,
            metadata_recorder=InMemoryMetadataRecorder(logger=mock_logger),
            dispatcher=dispatcher,
            logger=mock_logger,
        )
        viewer = Subscriber(topic="gala", transport=RecordingTransport())
        await registry.subscribe("gala", viewer)

        result = await handler.handle(
            UploadPhoto(
                topic="gala",
                original=wide_jpeg_bytes,
                original_filename="IMG_0042.JPG",
            )
        )

        assert isinstance(result, Success)
        artifact = result.value
        assert artifact.original_key == f"events/gala/{artifact.id}_original.jpg"
        assert artifact.thumbnail_key == f"events/gala/{artifact.id}_thumb.jpg"
        assert "Signature" in artifact.download_url
        assert viewer.transport.kinds == ["connected", "photo_update"]

        listed = await ListPhotosHandler(storage=s3_router).handle(ListPhotos(topic="gala"))
        assert [a.id for a in listed.value] == [artifact.id]
        assert listed.value[0].thumbnail_key == artifact.thumbnail_key
