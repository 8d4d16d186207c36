"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console/JSON)
- Storage router (local filesystem or S3, chosen once at startup)
- Image conversion (Pillow + external RAW developer)
- Upload metadata recording (in-memory)
- Event code → topic resolution

Reference:
    See src/core/container/__init__.py for the full factory list.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.enums import Environment, StorageBackendType

if TYPE_CHECKING:
    from src.domain.protocols.image_converter_protocol import ImageConverterProtocol
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.topic_resolver_protocol import TopicResolverProtocol
    from src.infrastructure.persistence.in_memory_metadata_recorder import (
        InMemoryMetadataRecorder,
    )
    from src.infrastructure.storage.storage_router import StorageRouter


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_storage_router() -> "StorageRouter":
    """Get storage router singleton (app-scoped).

    Container owns factory logic - decides which backend based on
    STORAGE_BACKEND:
        - 'local': LocalStorageAdapter under LOCAL_STORAGE_PATH
        - 's3': S3StorageAdapter on S3_BUCKET

    The mode is fixed for the life of the process.

    Returns:
        StorageRouter wrapping the selected backend.

    Raises:
        ValueError: If STORAGE_BACKEND is 's3' and S3_BUCKET is not set.

    Usage:
        # Presentation Layer (FastAPI Depends)
        storage: StorageRouter = Depends(get_storage_router)
    """
    from src.infrastructure.storage import ObjectKeys, StorageRouter

    settings = get_settings()
    logger = get_logger()
    keys = ObjectKeys(prefix=settings.storage_key_prefix)

    if settings.storage_backend == StorageBackendType.S3:
        if not settings.s3_bucket:
            raise ValueError("S3_BUCKET is required when STORAGE_BACKEND is 's3'")

        from src.infrastructure.storage.s3_adapter import S3StorageAdapter

        backend = S3StorageAdapter(
            bucket=settings.s3_bucket,
            keys=keys,
            logger=logger,
            region=settings.aws_region,
            signed_url_ttl_seconds=settings.signed_url_ttl_seconds,
            max_keys=settings.max_list_keys,
            endpoint_url=settings.s3_endpoint_url,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
        )
    else:
        from src.infrastructure.storage.local_adapter import LocalStorageAdapter

        backend = LocalStorageAdapter(
            root=settings.local_storage_path,
            keys=keys,
            logger=logger,
            url_prefix=settings.files_url_prefix,
            base_url=settings.public_base_url,
        )

    logger.info("storage_backend_selected", **backend.describe())
    return StorageRouter(backend)


@lru_cache()
def get_image_converter() -> "ImageConverterProtocol":
    """Get image converter singleton (app-scoped).

    Returns:
        PillowImageConverter configured from settings.
    """
    from src.infrastructure.imaging import PillowImageConverter

    settings = get_settings()
    return PillowImageConverter(
        logger=get_logger(),
        image_max_width=settings.image_max_width,
        jpeg_quality=settings.jpeg_quality,
        raw_converter_command=settings.raw_converter_command,
    )


@lru_cache()
def get_metadata_recorder() -> "InMemoryMetadataRecorder":
    """Get upload metadata recorder singleton (app-scoped).

    Returns:
        InMemoryMetadataRecorder (records and per-topic counters).
    """
    from src.infrastructure.persistence.in_memory_metadata_recorder import (
        InMemoryMetadataRecorder,
    )

    return InMemoryMetadataRecorder(logger=get_logger())


@lru_cache()
def get_topic_resolver() -> "TopicResolverProtocol":
    """Get event code resolver singleton (app-scoped).

    Returns:
        SlugTopicResolver with TOPIC_ALIASES applied.
    """
    from src.infrastructure.topics import SlugTopicResolver

    return SlugTopicResolver(aliases=get_settings().topic_aliases)
