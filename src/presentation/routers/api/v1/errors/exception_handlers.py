"""Global exception handlers for the Shutterfeed API.

Framework-level failures (unknown routes, missing form fields, the upload
key gate, unexpected exceptions) are rendered in the same RFC 9457 shape
as application errors, so gallery and uploader clients parse one format.

Handlers:
    http_exception_handler: HTTPException (404 routing, 401 upload key, ...)
    validation_exception_handler: RequestValidationError (422)
    generic_exception_handler: Anything else (500, logged)

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from src.core.container import get_logger
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors.error_response_builder import (
    ERROR_TYPE_BASE,
)
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

# Request locations stripped from validation error paths.
_LOCATIONS = frozenset({"body", "query", "path", "header"})


def _status_slug(status_code: int) -> tuple[str, str]:
    """Title and snake_case type slug for a status code."""
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return "Error", "error"
    return phrase, phrase.lower().replace(" ", "_").replace("-", "_")


def _trace_id(request: Request) -> str | None:
    # The 500 handler runs outside the trace middleware, after its context
    # variable was reset; request.state still carries the id.
    return get_trace_id() or getattr(request.state, "trace_id", None)


def _problem_response(
    request: Request,
    status_code: int,
    detail: str,
    *,
    slug: str | None = None,
    title: str | None = None,
    errors: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    default_title, default_slug = _status_slug(status_code)
    problem = ProblemDetails(
        type=f"{ERROR_TYPE_BASE}/{slug or default_slug}",
        title=title or default_title,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors or None,
        trace_id=_trace_id(request),
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException to RFC 9457 Problem Details response.

    Headers set on the exception (``WWW-Authenticate`` from the upload key
    gate) are kept on the response.
    """
    assert isinstance(exc, HTTPException)

    return _problem_response(
        request,
        exc.status_code,
        exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Convert RequestValidationError to RFC 9457 Problem Details response.

    Example:
        >>> # POST /api/v1/events/wedding-42/photos without original_file
        >>> # {
        >>> #   "type": "/errors/validation_failed",
        >>> #   "status": 422,
        >>> #   "errors": [
        >>> #     {"field": "original_file", "code": "missing", "message": "Field required"}
        >>> #   ],
        >>> # }
    """
    assert isinstance(exc, RequestValidationError)

    field_errors = []
    for error in exc.errors():
        parts = [str(p) for p in error.get("loc", ()) if p not in _LOCATIONS]
        field_errors.append(
            ErrorDetail(
                field=".".join(parts) or "unknown",
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    return _problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed. Check 'errors' for details.",
        slug="validation_failed",
        title="Validation Failed",
        errors=field_errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected exception and answer 500 without internals."""
    get_logger().error(
        "unhandled_exception",
        error=exc,
        trace_id=_trace_id(request),
        request_path=request.url.path,
        request_method=request.method,
    )

    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Report the trace ID when asking for help.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
