"""Converted image value object.

Output of the conversion collaborator: the bytes that will be stored plus
what the pipeline needs to know about them.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ConvertedImage:
    """Image bytes ready for storage.

    Attributes:
        buffer: Encoded image bytes.
        content_type: MIME type of ``buffer`` (image/jpeg, image/png).
        processed: True if the upload needed format conversion.
        original_format: Source format name when converted (e.g. "NEF").
        width: Pixel width, when known.
        height: Pixel height, when known.
    """

    buffer: bytes
    content_type: str
    processed: bool = False
    original_format: str | None = None
    width: int | None = None
    height: int | None = None

    @property
    def size(self) -> int:
        """Number of bytes in the encoded image."""
        return len(self.buffer)
