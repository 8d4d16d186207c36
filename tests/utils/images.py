"""Pillow helpers for building test images."""

import io

from PIL import Image


def make_image_bytes(
    width: int = 64,
    height: int = 48,
    image_format: str = "JPEG",
    color: tuple[int, int, int] = (200, 30, 30),
) -> bytes:
    """Encode a solid-color image.

    Args:
        width: Pixel width.
        height: Pixel height.
        image_format: Pillow format name (JPEG, PNG, GIF, BMP, ...).
        color: RGB fill.

    Returns:
        Encoded image bytes.
    """
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=image_format)
    return buffer.getvalue()


def image_size(data: bytes) -> tuple[int, int]:
    """Pixel size of encoded image bytes."""
    with Image.open(io.BytesIO(data)) as img:
        return img.size
