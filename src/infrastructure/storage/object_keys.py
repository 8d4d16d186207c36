"""Object key naming conventions for stored photos.

Key Patterns:
    {topic}/{artifact_id}_original.{ext}   - Full-size photo
    {topic}/{artifact_id}_thumb.{ext}      - Thumbnail

An optional root prefix (STORAGE_KEY_PREFIX, e.g. "events") is prepended to
every key. The artifact-to-variant association is recovered from these names
alone when listing; there is no index file.
"""

import re
from typing import NamedTuple

from src.core.constants import (
    CONTENT_TYPE_BY_EXTENSION,
    DEFAULT_CONTENT_TYPE,
    EXTENSION_BY_CONTENT_TYPE,
    ORIGINAL_VARIANT,
    THUMBNAIL_VARIANT,
)

_SAFE_SEGMENT = re.compile(r"\w[\w.-]*", re.ASCII)


class ParsedKey(NamedTuple):
    """Components recovered from a stored file name."""

    artifact_id: str
    variant: str
    extension: str


class ObjectKeys:
    """Centralized key generation and parsing for stored photos.

    Args:
        prefix: Optional root prefix without surrounding slashes.

    Example:
        >>> keys = ObjectKeys()
        >>> keys.original("wedding-42", "0190f1", "image/jpeg")
        'wedding-42/0190f1_original.jpg'
        >>> ObjectKeys(prefix="events").topic_prefix("wedding-42")
        'events/wedding-42/'
    """

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix.strip("/")

    @property
    def prefix(self) -> str:
        return self._prefix

    def topic_prefix(self, topic: str) -> str:
        """Key prefix shared by every object of a topic (ends with "/")."""
        if self._prefix:
            return f"{self._prefix}/{topic}/"
        return f"{topic}/"

    def original(self, topic: str, artifact_id: str, content_type: str) -> str:
        """Key of an artifact's original."""
        return self._variant_key(topic, artifact_id, ORIGINAL_VARIANT, content_type)

    def thumbnail(self, topic: str, artifact_id: str, content_type: str) -> str:
        """Key of an artifact's thumbnail."""
        return self._variant_key(topic, artifact_id, THUMBNAIL_VARIANT, content_type)

    def original_name_prefix(self, topic: str, artifact_id: str) -> str:
        """Prefix matching the original of one artifact, whatever its extension."""
        return f"{self.topic_prefix(topic)}{artifact_id}_{ORIGINAL_VARIANT}."

    def _variant_key(
        self, topic: str, artifact_id: str, variant: str, content_type: str
    ) -> str:
        extension = EXTENSION_BY_CONTENT_TYPE.get(content_type, "jpg")
        return f"{self.topic_prefix(topic)}{artifact_id}_{variant}.{extension}"

    @staticmethod
    def is_safe_segment(value: str) -> bool:
        """Whether a topic or artifact id can be embedded in a key.

        Rejects empty values, path separators and parent references.
        """
        return bool(_SAFE_SEGMENT.fullmatch(value)) and ".." not in value

    @staticmethod
    def parse(key: str) -> ParsedKey | None:
        """Recover artifact id and variant from a key or file name.

        Args:
            key: Full key or bare file name.

        Returns:
            ParsedKey, or None for names outside the convention (hidden
            files, unknown variants, missing extension).

        Example:
            >>> ObjectKeys.parse("wedding-42/abc_thumb.jpg")
            ParsedKey(artifact_id='abc', variant='thumb', extension='jpg')
        """
        name = key.rsplit("/", 1)[-1]
        if name.startswith("."):
            return None
        stem, dot, extension = name.rpartition(".")
        if not dot or not stem or not extension:
            return None
        artifact_id, underscore, variant = stem.rpartition("_")
        if not underscore or not artifact_id:
            return None
        if variant not in (ORIGINAL_VARIANT, THUMBNAIL_VARIANT):
            return None
        return ParsedKey(artifact_id, variant, extension.lower())

    @staticmethod
    def content_type_for(key: str) -> str:
        """Content type implied by a key's extension."""
        extension = key.rpartition(".")[2].lower()
        return CONTENT_TYPE_BY_EXTENSION.get(extension, DEFAULT_CONTENT_TYPE)
