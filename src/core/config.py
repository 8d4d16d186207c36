"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables (or a local .env file). Every field carries a default, so the service
boots with no environment at all and stores photos on the local filesystem.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Storage backend chosen once at startup (see src/core/container)

Usage:
    from src.core.config import settings

    # Access config
    bucket = settings.s3_bucket
    interval = settings.sse_heartbeat_interval_seconds

    # Environment detection
    if settings.is_production:
        # Production-specific behavior
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment, StorageBackendType


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. .env file in the working directory
        3. Default values

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Server bind host",
    )
    port: int = Field(
        default=8000,
        description="Server bind port",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    app_name: str = Field(
        default="Shutterfeed",
        description="Application name",
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version",
    )
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API v1 route prefix",
    )

    # CORS configuration
    cors_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)",
    )

    # Storage backend selection
    storage_backend: StorageBackendType = Field(
        default=StorageBackendType.LOCAL,
        description="Photo storage backend (local, s3)",
    )
    storage_key_prefix: str = Field(
        default="",
        description="Optional root prefix for object keys (e.g. 'events')",
    )
    local_storage_path: str = Field(
        default="./uploads",
        description="Root directory for the local storage backend",
    )
    files_url_prefix: str = Field(
        default="/api/files",
        description="URL prefix under which local files are served",
    )
    public_base_url: str | None = Field(
        default=None,
        description="Base URL used to absolutize local file URLs",
    )

    # S3 configuration
    s3_bucket: str | None = Field(
        default=None,
        description="S3 bucket holding event photos (required when backend is s3)",
    )
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region of the S3 bucket",
    )
    aws_access_key_id: str | None = Field(
        default=None,
        description="AWS access key ID (falls back to the default credential chain)",
    )
    aws_secret_access_key: str | None = Field(
        default=None,
        description="AWS secret access key",
    )
    s3_endpoint_url: str | None = Field(
        default=None,
        description="Custom endpoint for S3-compatible stores",
    )
    signed_url_ttl_seconds: int = Field(
        default=3600,
        description="Lifetime of presigned download URLs in seconds",
    )
    max_list_keys: int = Field(
        default=1000,
        description="Keys requested per S3 listing page (all pages are read)",
    )

    # Real-time streaming
    sse_heartbeat_interval_seconds: float = Field(
        default=30,
        description="Seconds between heartbeats sent to each subscriber",
    )
    sse_write_timeout_seconds: float = Field(
        default=5,
        description="Seconds a subscriber write may take before it counts as failed",
    )
    sse_subscriber_queue_size: int = Field(
        default=100,
        description="Pending messages buffered per subscriber",
    )

    # Image processing
    thumbnail_max_width: int = Field(
        default=1024,
        description="Width above which a thumbnail is derived from the original",
    )
    image_max_width: int = Field(
        default=2048,
        description="Maximum width of converted RAW images",
    )
    jpeg_quality: int = Field(
        default=85,
        description="JPEG quality used when re-encoding images",
    )
    raw_converter_command: str = Field(
        default="darktable-cli",
        description="External command used to develop RAW files",
    )

    # Uploads
    upload_api_key: str | None = Field(
        default=None,
        description="Shared key required for uploads (disabled when unset)",
    )
    topic_aliases: dict[str, str] = Field(
        default_factory=dict,
        description="Event code to topic overrides (JSON object)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("jpeg_quality")
    @classmethod
    def validate_jpeg_quality(cls, v: int) -> int:
        """
        Validate JPEG quality is within Pillow's range.

        Args:
            v: Requested quality.

        Returns:
            int: Validated quality.

        Raises:
            ValueError: If quality is not between 1 and 95.
        """
        if not 1 <= v <= 95:
            raise ValueError("jpeg_quality must be between 1 and 95")
        return v

    @field_validator(
        "sse_heartbeat_interval_seconds",
        "sse_write_timeout_seconds",
        "sse_subscriber_queue_size",
        "thumbnail_max_width",
        "image_max_width",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Reject zero or negative intervals and sizes."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("public_base_url", "files_url_prefix")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str | None: URL without trailing slash.
        """
        return v.rstrip("/") if v else v

    @field_validator("storage_key_prefix")
    @classmethod
    def strip_key_prefix(cls, v: str) -> str:
        """Normalize the key prefix to have no surrounding slashes."""
        return v.strip("/")

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance
settings = get_settings()
