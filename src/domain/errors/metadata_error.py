"""Metadata recording error types.

Logged and swallowed by the upload pipeline; never surfaced to the uploader.
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class MetadataRecordError(DomainError):
    """Recording an upload's metadata failed.

    Attributes:
        code: ErrorCode enum (METADATA_RECORD_FAILED).
        message: Human-readable message.
        artifact_id: Artifact whose record was not written.
    """

    artifact_id: str
