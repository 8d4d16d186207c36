"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.
Do NOT re-export from other domain subpackages (events, entities) to avoid
circular import risks.

Usage:
    from src.domain.protocols import StorageBackendProtocol, LoggerProtocol
"""

from src.domain.protocols.image_converter_protocol import ImageConverterProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.metadata_recorder_protocol import MetadataRecorderProtocol
from src.domain.protocols.storage_backend_protocol import StorageBackendProtocol
from src.domain.protocols.subscriber_transport_protocol import (
    SubscriberTransportProtocol,
)
from src.domain.protocols.topic_resolver_protocol import TopicResolverProtocol

__all__ = [
    "ImageConverterProtocol",
    "LoggerProtocol",
    "MetadataRecorderProtocol",
    "StorageBackendProtocol",
    "SubscriberTransportProtocol",
    "TopicResolverProtocol",
]
