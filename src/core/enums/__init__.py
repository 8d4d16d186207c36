"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from src.core.enums import ErrorCode, Environment, StorageBackendType
"""

from src.core.enums.environment import Environment
from src.core.enums.error_code import ErrorCode
from src.core.enums.storage_backend_type import StorageBackendType

__all__ = ["ErrorCode", "Environment", "StorageBackendType"]
