"""Storage locators returned by storage backends.

Keys are backend-specific locators (S3 object keys or paths relative to the
local storage root) built from the fixed ``topic/<id>_<variant>.<ext>``
naming convention.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class StoredKeys:
    """Result of storing one upload.

    Attributes:
        original_key: Locator of the durably written original.
        thumbnail_key: Locator of the thumbnail, absent if it was not written.
    """

    original_key: str
    thumbnail_key: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class StoredArtifact:
    """One artifact as recovered from a backend listing.

    Attributes:
        artifact_id: Identifier parsed from the key name.
        original_key: Locator of the original.
        thumbnail_key: Locator of the thumbnail, if one exists.
        modified_at: Modification time of the original (UTC).
    """

    artifact_id: str
    original_key: str
    thumbnail_key: str | None
    modified_at: datetime
