"""Photo storage backend types.

Selected once at startup through the STORAGE_BACKEND setting.
"""

from enum import Enum


class StorageBackendType(str, Enum):
    """Where uploaded photos are persisted."""

    LOCAL = "local"
    S3 = "s3"
