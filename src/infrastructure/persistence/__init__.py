"""Upload metadata persistence.

Usage:
    from src.infrastructure.persistence import InMemoryMetadataRecorder
"""

from src.infrastructure.persistence.in_memory_metadata_recorder import (
    InMemoryMetadataRecorder,
    PhotoRecord,
    TopicStats,
)

__all__ = [
    "InMemoryMetadataRecorder",
    "PhotoRecord",
    "TopicStats",
]
