"""Pillow image converter.

Implements ImageConverterProtocol:
- JPEG/PNG: stored as uploaded (processed=False)
- Camera RAW (.nef, ...): developed by an external command (darktable-cli)
  into JPEG, then scaled to IMAGE_MAX_WIDTH and re-encoded progressive
- Anything else Pillow can decode: re-encoded as progressive JPEG
- Anything Pillow cannot identify: unsupported format

Pillow work is CPU-bound and runs in worker threads.
"""

import asyncio
import io
import tempfile
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from src.core.constants import (
    DIRECT_IMAGE_EXTENSIONS,
    RAW_CONVERT_TIMEOUT_SECONDS,
    RAW_IMAGE_EXTENSIONS,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import ConversionError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects import ConvertedImage

# Errors Pillow raises for data it recognises but cannot decode.
_DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


class _ConversionFailed(Exception):
    """Internal signal carrying a ConversionError out of a worker thread."""

    def __init__(self, error: ConversionError) -> None:
        super().__init__(error.message)
        self.error = error


def _flatten_to_rgb(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        return Image.alpha_composite(background, rgba).convert("RGB")
    return img.convert("RGB")


def _encode_jpeg(
    img: Image.Image,
    *,
    quality: int,
    max_width: int | None = None,
    progressive: bool = True,
) -> tuple[bytes, int, int]:
    work = _flatten_to_rgb(img)
    if max_width is not None and work.width > max_width:
        height = max(1, round(work.height * max_width / work.width))
        work = work.resize((max_width, height), Image.Resampling.LANCZOS)
    out = io.BytesIO()
    work.save(
        out, format="JPEG", quality=quality, optimize=True, progressive=progressive
    )
    return out.getvalue(), work.width, work.height


class PillowImageConverter:
    """Converts uploads into storable JPEG/PNG images.

    Args:
        logger: Structured logger.
        image_max_width: Maximum width of converted images.
        jpeg_quality: JPEG quality for re-encoded images.
        raw_converter_command: Executable developing RAW files.
        raw_timeout_seconds: Upper bound for one RAW conversion.
    """

    def __init__(
        self,
        *,
        logger: LoggerProtocol,
        image_max_width: int = 2048,
        jpeg_quality: int = 85,
        raw_converter_command: str = "darktable-cli",
        raw_timeout_seconds: float = RAW_CONVERT_TIMEOUT_SECONDS,
    ) -> None:
        self._logger = logger
        self._max_width = image_max_width
        self._quality = jpeg_quality
        self._raw_command = raw_converter_command
        self._raw_timeout = raw_timeout_seconds

    async def convert(
        self, data: bytes, filename: str
    ) -> Result[ConvertedImage, ConversionError]:
        """Convert an uploaded file into a storable image.

        Args:
            data: Raw uploaded bytes.
            filename: Uploaded file name.

        Returns:
            Success(ConvertedImage) or Failure(ConversionError).
        """
        extension = Path(filename).suffix.lower()
        try:
            if extension in DIRECT_IMAGE_EXTENSIONS:
                image = await asyncio.to_thread(self._inspect, data, filename)
            elif extension in RAW_IMAGE_EXTENSIONS:
                image = await self._develop_raw(data, filename, extension)
            else:
                image = await asyncio.to_thread(
                    self._reencode, data, filename, extension
                )
        except _ConversionFailed as e:
            self._logger.warning(
                "image_conversion_failed",
                filename=filename,
                reason=e.error.reason,
                error_message=e.error.message,
            )
            return Failure(error=e.error)

        if image.processed:
            self._logger.info(
                "image_converted",
                filename=filename,
                original_format=image.original_format,
                width=image.width,
                height=image.height,
                size_bytes=image.size,
            )
        return Success(value=image)

    async def resize(
        self, image: ConvertedImage, max_width: int
    ) -> Result[ConvertedImage, ConversionError]:
        """Scale an image down to at most ``max_width`` pixels wide (JPEG).

        Args:
            image: Image to scale.
            max_width: Maximum width in pixels.

        Returns:
            Success(ConvertedImage) or Failure(ConversionError).
        """
        try:
            buffer, width, height = await asyncio.to_thread(
                self._resize_sync, image.buffer, max_width
            )
        except _DECODE_ERRORS as e:
            return Failure(
                error=ConversionError(
                    code=ErrorCode.CONVERSION_MALFORMED_FILE,
                    message=f"Failed to resize image: {e}",
                    field="thumb_file",
                )
            )
        return Success(
            value=ConvertedImage(
                buffer=buffer,
                content_type="image/jpeg",
                processed=image.processed,
                original_format=image.original_format,
                width=width,
                height=height,
            )
        )

    def _resize_sync(self, data: bytes, max_width: int) -> tuple[bytes, int, int]:
        with Image.open(io.BytesIO(data)) as img:
            return _encode_jpeg(img, quality=self._quality, max_width=max_width)

    def _inspect(self, data: bytes, filename: str) -> ConvertedImage:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
                image_format = img.format
                width, height = img.size
        except _DECODE_ERRORS as e:
            raise _ConversionFailed(self._malformed(filename, str(e))) from e

        if image_format not in ("JPEG", "PNG"):
            raise _ConversionFailed(
                self._malformed(filename, f"content is {image_format}, not JPEG/PNG")
            )
        return ConvertedImage(
            buffer=data,
            content_type="image/png" if image_format == "PNG" else "image/jpeg",
            processed=False,
            width=width,
            height=height,
        )

    def _reencode(self, data: bytes, filename: str, extension: str) -> ConvertedImage:
        try:
            with Image.open(io.BytesIO(data)) as img:
                buffer, width, height = _encode_jpeg(
                    img, quality=self._quality, max_width=self._max_width
                )
        except UnidentifiedImageError as e:
            raise _ConversionFailed(
                ConversionError(
                    code=ErrorCode.CONVERSION_UNSUPPORTED_FORMAT,
                    message=f"unsupported format: {extension or '(no extension)'}",
                    field="original_file",
                    filename=filename,
                )
            ) from e
        except _DECODE_ERRORS as e:
            raise _ConversionFailed(self._malformed(filename, str(e))) from e

        return ConvertedImage(
            buffer=buffer,
            content_type="image/jpeg",
            processed=True,
            original_format=extension.lstrip(".").upper() or None,
            width=width,
            height=height,
        )

    async def _develop_raw(
        self, data: bytes, filename: str, extension: str
    ) -> ConvertedImage:
        raw_format = extension.lstrip(".").upper()
        with tempfile.TemporaryDirectory(prefix="shutterfeed-raw-") as workdir:
            source = Path(workdir) / f"source{extension}"
            target = Path(workdir) / "developed.jpg"
            await asyncio.to_thread(source.write_bytes, data)

            try:
                process = await asyncio.create_subprocess_exec(
                    self._raw_command,
                    str(source),
                    str(target),
                    "--hq",
                    "false",
                    "--export-format",
                    "jpeg",
                    "--export-quality",
                    str(self._quality),
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except FileNotFoundError as e:
                raise _ConversionFailed(
                    ConversionError(
                        code=ErrorCode.CONVERSION_UNSUPPORTED_FORMAT,
                        message=f"unsupported format: {extension} (RAW converter unavailable)",
                        field="original_file",
                        filename=filename,
                    )
                ) from e

            try:
                _, stderr = await asyncio.wait_for(
                    process.communicate(), timeout=self._raw_timeout
                )
            except TimeoutError as e:
                raise _ConversionFailed(
                    self._malformed(
                        filename, f"Failed to process {raw_format} file: timed out"
                    )
                ) from e
            finally:
                # Timeout or cancellation: the child must not outlive workdir.
                if process.returncode is None:
                    process.kill()
                    await asyncio.shield(process.wait())

            if process.returncode != 0 or not target.exists():
                detail = stderr.decode(errors="replace").strip()[:500]
                raise _ConversionFailed(
                    self._malformed(
                        filename, f"Failed to process {raw_format} file: {detail}"
                    )
                )

            try:
                buffer, width, height = await asyncio.to_thread(
                    self._encode_developed, target
                )
            except _DECODE_ERRORS as e:
                raise _ConversionFailed(
                    self._malformed(
                        filename, f"Failed to process {raw_format} file: {e}"
                    )
                ) from e

        return ConvertedImage(
            buffer=buffer,
            content_type="image/jpeg",
            processed=True,
            original_format=raw_format,
            width=width,
            height=height,
        )

    def _encode_developed(self, path: Path) -> tuple[bytes, int, int]:
        with Image.open(path) as img:
            return _encode_jpeg(img, quality=self._quality, max_width=self._max_width)

    @staticmethod
    def _malformed(filename: str, detail: str) -> ConversionError:
        return ConversionError(
            code=ErrorCode.CONVERSION_MALFORMED_FILE,
            message=detail if detail.startswith("Failed") else f"malformed file: {detail}",
            field="original_file",
            filename=filename,
        )
