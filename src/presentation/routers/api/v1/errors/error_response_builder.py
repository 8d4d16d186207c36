"""Error response builder for RFC 9457 Problem Details.

Turns an ApplicationError returned by a photo handler into the JSON error
body clients see. The status tells an uploader whether retrying can help:
415 (fix the file) versus 503 (storage is down, retry later).

Exports:
    ErrorResponseBuilder: Utility class for building RFC 9457 responses
    ERROR_TYPE_BASE: Path prefix of problem ``type`` URIs
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

ERROR_TYPE_BASE = "/errors"

# ApplicationErrorCode -> (HTTP status, problem title)
_RESPONSES: dict[ApplicationErrorCode, tuple[int, str]] = {
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: (
        status.HTTP_400_BAD_REQUEST,
        "Validation Failed",
    ),
    ApplicationErrorCode.CONVERSION_FAILED: (
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        "Unsupported Media Type",
    ),
    ApplicationErrorCode.STORAGE_UNAVAILABLE: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Storage Unavailable",
    ),
    ApplicationErrorCode.UNAUTHORIZED: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication Required",
    ),
    ApplicationErrorCode.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Resource Not Found"),
    ApplicationErrorCode.QUERY_FAILED: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Query Failed",
    ),
}
_FALLBACK = (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Example:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.CONVERSION_FAILED,
        ...     message="unsupported format: .xyz",
        ...     domain_error=conversion_error,
        ... )
        >>> response = ErrorResponseBuilder.from_application_error(error, request)
        >>> # 415 with errors=[{"field": "original_file", "code": "unsupported_format", ...}]
    """

    @staticmethod
    def status_for(code: ApplicationErrorCode) -> int:
        """HTTP status for an application error code."""
        return _RESPONSES.get(code, _FALLBACK)[0]

    @staticmethod
    def from_application_error(
        error: ApplicationError, request: Request
    ) -> JSONResponse:
        """Convert ApplicationError to RFC 9457 JSON response.

        A domain error that names a form field (conversion and validation
        failures) is reported under ``errors`` with its machine-readable code.

        Args:
            error: Application layer error to convert.
            request: Current request (for the instance path).

        Returns:
            JSONResponse with RFC 9457 ProblemDetails content.
        """
        status_code, title = _RESPONSES.get(error.code, _FALLBACK)

        errors = None
        field = getattr(error.domain_error, "field", None)
        if error.domain_error is not None and field is not None:
            errors = [
                ErrorDetail(
                    field=field,
                    code=error.domain_error.code.value,
                    message=error.domain_error.message,
                )
            ]

        problem = ProblemDetails(
            type=f"{ERROR_TYPE_BASE}/{error.code.value}",
            title=title,
            status=status_code,
            detail=error.message,
            instance=request.url.path,
            errors=errors,
            trace_id=get_trace_id(),
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
        )
