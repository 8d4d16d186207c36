"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conversion errors (CONVERSION_*)
- Storage errors (STORAGE_*)
- Delivery errors (TRANSPORT_*, METADATA_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_TOPIC = "invalid_topic"
    INVALID_ARTIFACT_ID = "invalid_artifact_id"

    # Resource errors
    EVENT_NOT_FOUND = "event_not_found"
    ARTIFACT_NOT_FOUND = "artifact_not_found"
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Conversion errors
    CONVERSION_UNSUPPORTED_FORMAT = "unsupported_format"
    CONVERSION_MALFORMED_FILE = "malformed_file"

    # Storage errors
    STORAGE_WRITE_FAILED = "storage_write_failed"
    STORAGE_READ_FAILED = "storage_read_failed"

    # Delivery and bookkeeping errors
    TRANSPORT_WRITE_FAILED = "transport_write_failed"
    TRANSPORT_WRITE_TIMEOUT = "transport_write_timeout"
    METADATA_RECORD_FAILED = "metadata_record_failed"
