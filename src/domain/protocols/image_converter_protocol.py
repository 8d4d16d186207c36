"""Image conversion protocol (port).

The conversion algorithm is a black box to the upload pipeline: bytes in,
storable bytes plus metadata out, or a typed ConversionError.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.errors import ConversionError
from src.domain.value_objects import ConvertedImage


class ImageConverterProtocol(Protocol):
    """Protocol for image converters.

    Implementations:
        - PillowImageConverter: Pillow plus an external RAW developer
    """

    async def convert(
        self, data: bytes, filename: str
    ) -> Result[ConvertedImage, ConversionError]:
        """Convert an uploaded file into a storable image.

        Args:
            data: Raw uploaded bytes.
            filename: Uploaded file name (its extension selects the path).

        Returns:
            Success(ConvertedImage) or Failure(ConversionError).
        """
        ...

    async def resize(
        self, image: ConvertedImage, max_width: int
    ) -> Result[ConvertedImage, ConversionError]:
        """Scale an image down to at most ``max_width`` pixels wide.

        Args:
            image: Image to scale.
            max_width: Maximum width in pixels.

        Returns:
            Success(ConvertedImage) as JPEG, or Failure(ConversionError).
        """
        ...
