"""Unit tests for the dependency container.

Tests cover:
- Storage backend selection from settings
- Singleton behavior and shared SSE registry
- reset_container()
"""

import pytest

from src.core.container import (
    get_broadcast_dispatcher,
    get_fetch_photo_handler,
    get_heartbeat_scheduler,
    get_list_photos_handler,
    get_storage_router,
    get_topic_registry,
    get_topic_resolver,
    get_upload_photo_handler,
    reset_container,
)
from src.infrastructure.storage.local_adapter import LocalStorageAdapter
from src.infrastructure.storage.s3_adapter import S3StorageAdapter


@pytest.mark.unit
class TestStorageSelection:
    """Test get_storage_router() backend choice."""

    def test_local_backend(self, local_env):
        """Test local mode roots storage at LOCAL_STORAGE_PATH."""
        router = get_storage_router()

        assert router.mode == "local"
        assert router.describe()["root"] == str(local_env.resolve())

    def test_s3_backend(self, local_env, monkeypatch):
        """Test s3 mode builds the S3 adapter for the configured bucket."""
        monkeypatch.setenv("STORAGE_BACKEND", "s3")
        monkeypatch.setenv("S3_BUCKET", "event-photos")
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
        reset_container()

        router = get_storage_router()

        assert router.mode == "s3"
        assert router.describe()["bucket"] == "event-photos"
        assert isinstance(router._backend, S3StorageAdapter)

    def test_s3_without_bucket_fails(self, local_env, monkeypatch):
        """Test s3 mode refuses to start without a bucket."""
        monkeypatch.setenv("STORAGE_BACKEND", "s3")
        monkeypatch.delenv("S3_BUCKET", raising=False)
        reset_container()

        with pytest.raises(ValueError, match="S3_BUCKET"):
            get_storage_router()

    def test_storage_router_is_singleton(self, local_env):
        """Test the backend is chosen once per process."""
        assert get_storage_router() is get_storage_router()
        assert isinstance(get_storage_router()._backend, LocalStorageAdapter)


@pytest.mark.unit
class TestSharedInstances:
    """Test app-scoped and request-scoped factories."""

    def test_sse_components_share_registry(self, local_env):
        """Test dispatcher and scheduler use the registry singleton."""
        registry = get_topic_registry()

        assert get_broadcast_dispatcher()._registry is registry
        assert get_heartbeat_scheduler()._registry is registry

    def test_upload_handler_is_app_scoped(self, local_env):
        """Test the upload handler is a singleton."""
        assert get_upload_photo_handler() is get_upload_photo_handler()

    def test_query_handlers_are_request_scoped(self, local_env):
        """Test query handlers are built per call."""
        assert get_list_photos_handler() is not get_list_photos_handler()
        assert get_fetch_photo_handler() is not get_fetch_photo_handler()

    def test_topic_aliases_reach_resolver(self, local_env, monkeypatch):
        """Test TOPIC_ALIASES configures the resolver."""
        monkeypatch.setenv("TOPIC_ALIASES", '{"gala": "gala-main"}')
        reset_container()

        assert get_topic_resolver().resolve("Gala").value == "gala-main"

    def test_reset_container_rebuilds_singletons(self, local_env):
        """Test reset_container() drops cached instances."""
        registry = get_topic_registry()

        reset_container()

        assert get_topic_registry() is not registry
