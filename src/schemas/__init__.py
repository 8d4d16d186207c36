"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import PhotoUploadResponse, PhotoListResponse
"""

from src.schemas.event_schemas import ConnectionStatsResponse
from src.schemas.photo_schemas import (
    PhotoContentResponse,
    PhotoListResponse,
    PhotoResponse,
    PhotoStorageInfo,
    PhotoUploadMeta,
    PhotoUploadResponse,
)
from src.schemas.storage_schemas import StorageInfoResponse

__all__ = [
    "ConnectionStatsResponse",
    "PhotoContentResponse",
    "PhotoListResponse",
    "PhotoResponse",
    "PhotoStorageInfo",
    "PhotoUploadMeta",
    "PhotoUploadResponse",
    "StorageInfoResponse",
]
