"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import ConversionError, StorageWriteError
"""

from src.domain.errors.conversion_error import ConversionError
from src.domain.errors.metadata_error import MetadataRecordError
from src.domain.errors.storage_error import StorageReadError, StorageWriteError
from src.domain.errors.transport_error import TransportWriteError

__all__ = [
    "ConversionError",
    "MetadataRecordError",
    "StorageReadError",
    "StorageWriteError",
    "TransportWriteError",
]
