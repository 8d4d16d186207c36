"""Pytest configuration and shared fixtures.

This configuration provides:
1. Marker registration (unit, api, integration)
2. Pillow-generated image fixtures
3. Mock logger for components that take a LoggerProtocol
4. An isolated local-storage environment with a fresh container
5. Application and TestClient fixtures
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.core.container import reset_container
from src.main import create_app
from tests.utils.images import make_image_bytes


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """Logger double accepting any LoggerProtocol call."""
    return MagicMock()


@pytest.fixture
def jpeg_bytes():
    """Small JPEG (64x48)."""
    return make_image_bytes()


@pytest.fixture
def png_bytes():
    """Small PNG (40x30)."""
    return make_image_bytes(40, 30, "PNG", (10, 120, 240))


@pytest.fixture
def wide_jpeg_bytes():
    """JPEG wider than the default thumbnail width (1600x900)."""
    return make_image_bytes(1600, 900)


@pytest.fixture
def local_env(tmp_path, monkeypatch):
    """Local-storage settings under tmp_path with a fresh container.

    Yields:
        Path of the storage root.
    """
    root = tmp_path / "uploads"
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("LOCAL_STORAGE_PATH", str(root))
    monkeypatch.delenv("UPLOAD_API_KEY", raising=False)
    monkeypatch.delenv("PUBLIC_BASE_URL", raising=False)
    monkeypatch.delenv("STORAGE_KEY_PREFIX", raising=False)
    reset_container()
    yield root
    reset_container()


@pytest.fixture
def app(local_env):
    """Fresh application wired to the temporary local storage root."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """TestClient running the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "api: HTTP tests through the FastAPI app")
    config.addinivalue_line(
        "markers", "integration: Upload-to-broadcast flows with real components"
    )
