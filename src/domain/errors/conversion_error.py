"""Image conversion error types.

Returned by the conversion collaborator when an upload cannot be turned into
storable image bytes. This is the one failure that is fatal to an upload
before anything is written.

Usage:
    from src.domain.errors import ConversionError
    from src.core.enums import ErrorCode

    return Failure(error=ConversionError(
        code=ErrorCode.CONVERSION_UNSUPPORTED_FORMAT,
        message="unsupported format: .xyz",
        field="original_file",
    ))
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import ValidationError


@dataclass(frozen=True, slots=True, kw_only=True)
class ConversionError(ValidationError):
    """The uploaded file could not be converted.

    ``code`` distinguishes an unsupported format
    (CONVERSION_UNSUPPORTED_FORMAT) from a malformed file of a supported
    format (CONVERSION_MALFORMED_FILE).

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Form field holding the offending file.
        filename: Name of the offending file, when known.
        details: Additional context (converter output).
    """

    filename: str | None = None

    @property
    def reason(self) -> str:
        """Short machine-readable reason (unsupported_format, malformed_file)."""
        return self.code.value

    @property
    def is_unsupported_format(self) -> bool:
        """Whether the format itself is unsupported."""
        return self.code == ErrorCode.CONVERSION_UNSUPPORTED_FORMAT
