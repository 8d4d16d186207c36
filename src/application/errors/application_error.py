"""Application layer error types.

Application-level errors wrap domain errors and classify them for the
presentation layer, which maps each code to an HTTP status.

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
"""

from dataclasses import dataclass
from enum import Enum

from src.core.errors.domain_error import DomainError


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.CONVERSION_FAILED,
        ...     message="unsupported format: .xyz",
        ...     domain_error=conversion_error,
        ... )
    """

    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    CONVERSION_FAILED = "conversion_failed"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    QUERY_FAILED = "query_failed"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Attributes:
        code: Application error code (from ApplicationErrorCode enum)
        message: Human-readable error message
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None
