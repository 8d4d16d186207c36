"""Uploader-supplied context for one photo.

Carried unchanged from the upload form to the metadata collaborator and
the broadcast payload.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class UploadContext:
    """Descriptive metadata supplied alongside an upload.

    Attributes:
        original_name: File name on the photographer's machine.
        local_path: Path on the photographer's machine.
        shot_at: Capture time as reported by the uploader (free text).
        checksum: Uploader-computed checksum of the original file.
        uploader_id: Identifier of the uploading client, when known.
    """

    original_name: str | None = None
    local_path: str | None = None
    shot_at: str | None = None
    checksum: str | None = None
    uploader_id: str | None = None
