"""Storage backend error types.

Part of the StorageBackendProtocol contract. Adapters translate boto3 and
filesystem exceptions into these values at the I/O edge.

Error Types:
- StorageWriteError: The original could not be durably written
- StorageReadError: Listing or reading failed for a reason other than absence
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageWriteError(DomainError):
    """Write to the storage backend failed.

    Attributes:
        code: ErrorCode enum (STORAGE_WRITE_FAILED).
        message: Human-readable message.
        key: Locator that could not be written.
        backend: Backend mode ("s3", "local").
    """

    key: str
    backend: str


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageReadError(DomainError):
    """Read from the storage backend failed.

    Attributes:
        code: ErrorCode enum (STORAGE_READ_FAILED).
        message: Human-readable message.
        backend: Backend mode ("s3", "local").
    """

    backend: str
