"""API tests for event photo endpoints.

Tests cover:
- POST /api/v1/events/{event_code}/photos (upload, errors, API key)
- GET /api/v1/events/{event_code}/photos (gallery listing)
- GET /api/v1/events/{event_code}/photos/{photo_id} (data URL fetch)
- Static serving of stored files in local mode

Architecture:
- FastAPI TestClient with real local storage under tmp_path
- Dependency overrides for storage failures
"""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.container import get_upload_photo_handler, reset_container
from src.core.result import Failure
from tests.utils.http import upload
from tests.utils.images import image_size, make_image_bytes


@pytest.mark.api
class TestUploadPhoto:
    """Test POST /api/v1/events/{event_code}/photos."""

    def test_upload_jpeg_returns_201(self, client, jpeg_bytes):
        """Test a JPEG upload is stored and described."""
        response = upload(client, "wedding-42", jpeg_bytes)

        assert response.status_code == 201
        body = response.json()
        photo_id = body["photo_id"]
        assert body["success"] is True
        assert body["topic"] == "wedding-42"
        assert body["storage"]["mode"] == "local"
        assert body["storage"]["original_key"] == f"wedding-42/{photo_id}_original.jpg"
        assert body["storage"]["thumbnail_key"] == f"wedding-42/{photo_id}_thumb.jpg"
        assert body["display_url"] == f"/api/files/wedding-42/{photo_id}_thumb.jpg"
        assert body["download_url"] == f"/api/files/wedding-42/{photo_id}_original.jpg"
        assert body["meta"]["original_name"] == "photo.jpg"
        assert body["meta"]["processed"] is False

    def test_event_code_is_normalized(self, client, jpeg_bytes):
        """Test "Wedding 42" and "wedding-42" share a topic."""
        response = upload(client, "Wedding 42", jpeg_bytes)

        assert response.json()["topic"] == "wedding-42"

    def test_stored_original_is_served(self, client, jpeg_bytes):
        """Test the download URL serves the stored bytes unchanged."""
        body = upload(client, "wedding-42", jpeg_bytes).json()

        served = client.get(body["download_url"])

        assert served.status_code == 200
        assert served.content == jpeg_bytes

    def test_wide_upload_gets_smaller_thumbnail(self, client, wide_jpeg_bytes):
        """Test a wide original gets a thumbnail capped at 1024px."""
        body = upload(client, "wedding-42", wide_jpeg_bytes).json()

        thumbnail = client.get(body["display_url"]).content

        assert image_size(thumbnail) == (1024, 576)

    def test_supplied_thumbnail_is_stored(self, client, jpeg_bytes):
        """Test a client-rendered thumbnail is used as-is."""
        thumb = make_image_bytes(32, 24)

        body = upload(
            client,
            "wedding-42",
            jpeg_bytes,
            thumb=("thumb.jpg", thumb, "image/jpeg"),
        ).json()

        assert client.get(body["display_url"]).content == thumb

    def test_form_metadata_is_echoed(self, client, jpeg_bytes):
        """Test uploader context fields appear in the response."""
        body = upload(
            client,
            "wedding-42",
            jpeg_bytes,
            form={
                "original_name": "DSC_0001.JPG",
                "local_path": "/cards/A/DCIM",
                "shot_at": "2024-06-01T11:59:00",
                "checksum": "9f86d081",
            },
        ).json()

        assert body["meta"]["original_name"] == "DSC_0001.JPG"
        assert body["meta"]["local_path"] == "/cards/A/DCIM"
        assert body["meta"]["shot_at"] == "2024-06-01T11:59:00"
        assert body["meta"]["checksum"] == "9f86d081"

    def test_bmp_is_converted(self, client):
        """Test non-JPEG/PNG images are converted to JPEG."""
        response = upload(
            client, "wedding-42", make_image_bytes(40, 30, "BMP"), "scan.bmp", "image/bmp"
        )

        body = response.json()
        assert response.status_code == 201
        assert body["meta"]["processed"] is True
        assert body["meta"]["original_format"] == "BMP"
        assert body["storage"]["original_key"].endswith("_original.jpg")

    def test_unsupported_format_returns_415(self, client):
        """Test unknown content is rejected with unsupported_format."""
        response = upload(client, "wedding-42", b"just text", "notes.xyz", "text/plain")

        assert response.status_code == 415
        body = response.json()
        assert body["type"] == "/errors/conversion_failed"
        assert body["errors"][0]["code"] == "unsupported_format"
        assert body["errors"][0]["field"] == "original_file"

    def test_malformed_jpeg_returns_415(self, client):
        """Test undecodable JPEG data is rejected with malformed_file."""
        response = upload(client, "wedding-42", b"\xff\xd8garbage", "broken.jpg")

        assert response.status_code == 415
        assert response.json()["errors"][0]["code"] == "malformed_file"

    def test_rejected_upload_stores_nothing(self, client, local_env):
        """Test a conversion failure leaves storage untouched."""
        upload(client, "wedding-42", b"just text", "notes.xyz", "text/plain")

        assert not (local_env / "wedding-42").exists()

    def test_empty_file_returns_400(self, client):
        """Test an empty upload is a validation error."""
        response = upload(client, "wedding-42", b"")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "original_file"

    def test_missing_file_returns_422(self, client):
        """Test the original_file field is required."""
        response = client.post("/api/v1/events/wedding-42/photos", data={"x": "1"})

        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["errors"]]
        assert "original_file" in fields

    def test_unknown_event_code_returns_404(self, client, jpeg_bytes):
        """Test an event code without usable characters."""
        response = upload(client, "%24%24%24", jpeg_bytes)

        assert response.status_code == 404
        assert response.json()["detail"] == "Event not found"

    def test_storage_unavailable_returns_503(self, client, app, jpeg_bytes):
        """Test storage failures surface as 503 Problem Details."""
        handler = MagicMock()
        handler.handle = AsyncMock(
            return_value=Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.STORAGE_UNAVAILABLE,
                    message="Failed to store original photo",
                )
            )
        )
        app.dependency_overrides[get_upload_photo_handler] = lambda: handler

        response = upload(client, "wedding-42", jpeg_bytes)

        assert response.status_code == 503
        assert response.json()["title"] == "Storage Unavailable"
        assert response.json()["trace_id"] == response.headers["X-Trace-Id"]


@pytest.mark.api
class TestUploadApiKey:
    """Test the shared upload key."""

    @pytest.fixture
    def secured_client(self, local_env, monkeypatch):
        from fastapi.testclient import TestClient

        from src.main import create_app

        monkeypatch.setenv("UPLOAD_API_KEY", "s3cret")
        reset_container()
        with TestClient(create_app()) as test_client:
            yield test_client

    def test_missing_key_returns_401(self, secured_client, jpeg_bytes):
        """Test uploads without a key are refused."""
        response = upload(secured_client, "wedding-42", jpeg_bytes)

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "ApiKey"

    def test_wrong_key_returns_401(self, secured_client, jpeg_bytes):
        """Test a mismatched key is refused."""
        response = upload(
            secured_client, "wedding-42", jpeg_bytes, headers={"X-API-Key": "nope"}
        )

        assert response.status_code == 401

    def test_header_key_accepted(self, secured_client, jpeg_bytes):
        """Test the X-API-Key header."""
        response = upload(
            secured_client, "wedding-42", jpeg_bytes, headers={"X-API-Key": "s3cret"}
        )

        assert response.status_code == 201

    def test_query_key_accepted(self, secured_client, jpeg_bytes):
        """Test the api_key query parameter."""
        response = upload(
            secured_client, "wedding-42", jpeg_bytes, params={"api_key": "s3cret"}
        )

        assert response.status_code == 201

    def test_reads_stay_public(self, secured_client):
        """Test gallery listing needs no key."""
        response = secured_client.get("/api/v1/events/wedding-42/photos")

        assert response.status_code == 200


@pytest.mark.api
class TestListPhotos:
    """Test GET /api/v1/events/{event_code}/photos."""

    def test_empty_event(self, client):
        """Test an event without photos lists nothing."""
        response = client.get("/api/v1/events/wedding-42/photos")

        assert response.status_code == 200
        assert response.json() == {"topic": "wedding-42", "photos": [], "total": 0}

    def test_lists_uploaded_photos(self, client, jpeg_bytes, png_bytes):
        """Test uploads appear with keys and URLs."""
        first = upload(client, "wedding-42", jpeg_bytes).json()
        second = upload(client, "wedding-42", png_bytes, "render.png", "image/png").json()
        upload(client, "other-event", jpeg_bytes)

        body = client.get("/api/v1/events/wedding-42/photos").json()

        assert body["total"] == 2
        ids = {photo["artifact_id"] for photo in body["photos"]}
        assert ids == {first["photo_id"], second["photo_id"]}
        by_id = {photo["artifact_id"]: photo for photo in body["photos"]}
        png = by_id[second["photo_id"]]
        assert png["original_key"].endswith("_original.png")
        assert png["display_url"] == second["display_url"]

    def test_unknown_event_code_returns_404(self, client):
        """Test the event code is resolved before listing."""
        response = client.get("/api/v1/events/%40%40/photos")

        assert response.status_code == 404


@pytest.mark.api
class TestGetPhoto:
    """Test GET /api/v1/events/{event_code}/photos/{photo_id}."""

    def test_returns_data_url(self, client, jpeg_bytes):
        """Test the original comes back as a base64 data URL."""
        photo_id = upload(client, "wedding-42", jpeg_bytes).json()["photo_id"]

        response = client.get(f"/api/v1/events/wedding-42/photos/{photo_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["artifact_id"] == photo_id
        assert body["content_type"] == "image/jpeg"
        prefix = "data:image/jpeg;base64,"
        assert body["data_url"].startswith(prefix)
        assert base64.b64decode(body["data_url"][len(prefix):]) == jpeg_bytes

    def test_unknown_photo_returns_404(self, client):
        """Test a missing photo is a 404 Problem Details."""
        response = client.get("/api/v1/events/wedding-42/photos/does-not-exist")

        assert response.status_code == 404
        assert response.json()["type"] == "/errors/not_found"

    def test_photo_of_other_event_is_not_found(self, client, jpeg_bytes):
        """Test photos are scoped to their event."""
        photo_id = upload(client, "wedding-42", jpeg_bytes).json()["photo_id"]

        response = client.get(f"/api/v1/events/other-event/photos/{photo_id}")

        assert response.status_code == 404
