"""Photo storage adapters.

Usage:
    from src.infrastructure.storage import StorageRouter, LocalStorageAdapter
"""

from src.infrastructure.storage.base_adapter import (
    BaseStorageAdapter,
    ListedObject,
    group_listing,
)
from src.infrastructure.storage.local_adapter import LocalStorageAdapter
from src.infrastructure.storage.object_keys import ObjectKeys, ParsedKey
from src.infrastructure.storage.s3_adapter import S3StorageAdapter
from src.infrastructure.storage.storage_router import StorageRouter

__all__ = [
    "BaseStorageAdapter",
    "ListedObject",
    "LocalStorageAdapter",
    "ObjectKeys",
    "ParsedKey",
    "S3StorageAdapter",
    "StorageRouter",
    "group_listing",
]
