"""Upload commands.

Commands are immutable value objects representing uploader intent. The
HTTP layer resolves the event code to a topic before building the command.

Reference:
    - src/application/commands/handlers/upload_photo_handler.py
"""

from dataclasses import dataclass, field

from src.domain.value_objects import UploadContext


@dataclass(frozen=True, kw_only=True)
class UploadPhoto:
    """Command to store a photo and announce it to the event's viewers.

    Attributes:
        topic: Canonical topic of the event.
        original: Raw bytes of the uploaded file.
        original_filename: Uploaded file name (extension selects conversion).
        thumbnail: Optional uploader-supplied thumbnail bytes.
        thumbnail_filename: File name of the thumbnail.
        context: Uploader-supplied metadata.

    Example:
        >>> command = UploadPhoto(
        ...     topic="wedding-42",
        ...     original=await original_file.read(),
        ...     original_filename="DSC_0042.NEF",
        ...     context=UploadContext(original_name="DSC_0042.NEF"),
        ... )
    """

    topic: str
    original: bytes
    original_filename: str
    thumbnail: bytes | None = None
    thumbnail_filename: str | None = None
    context: UploadContext = field(default_factory=UploadContext)
