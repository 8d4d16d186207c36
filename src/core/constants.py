"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `src/core/config.py` instead.

Categories:
- SSE: Stream framing hints
- Object keys: Variant suffixes and content types
- Image formats: Extensions handled by the converter
- Headers: Upload authentication

Example:
    >>> from src.core.constants import ORIGINAL_VARIANT
    >>> key = f"{topic}/{artifact_id}_{ORIGINAL_VARIANT}.jpg"
"""

# =============================================================================
# SSE (Server-Sent Events)
# =============================================================================

SSE_RETRY_INTERVAL_MS: int = 3000
"""Client reconnection interval hint (milliseconds)."""

SSE_RESPONSE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}
"""Headers sent with every event stream response."""


# =============================================================================
# Object Keys
# =============================================================================

ORIGINAL_VARIANT: str = "original"
"""Key suffix identifying the full-size photo."""

THUMBNAIL_VARIANT: str = "thumb"
"""Key suffix identifying the thumbnail."""

EXTENSION_BY_CONTENT_TYPE: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
}
"""File extension written for each stored content type."""

CONTENT_TYPE_BY_EXTENSION: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}
"""Content type reported for each stored extension."""

DEFAULT_CONTENT_TYPE: str = "image/jpeg"
"""Content type assumed for unknown extensions."""


# =============================================================================
# Image Formats
# =============================================================================

DIRECT_IMAGE_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg", ".png"})
"""Extensions stored as uploaded, without conversion."""

RAW_IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".nef", ".cr2", ".cr3", ".arw", ".dng", ".raf", ".orf", ".rw2"}
)
"""Camera RAW extensions developed by the external RAW converter."""

RAW_CONVERT_TIMEOUT_SECONDS: float = 120.0
"""Upper bound for one external RAW conversion run."""


# =============================================================================
# Headers
# =============================================================================

API_KEY_HEADER: str = "X-API-Key"
"""Header carrying the shared upload key."""

API_KEY_QUERY_PARAM: str = "api_key"
"""Query parameter accepted as an alternative to the header."""
