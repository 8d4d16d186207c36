"""RFC 9457 Problem Details for HTTP APIs.

This module implements RFC 9457 (Problem Details for HTTP APIs) using Pydantic
models for structured error responses.

RFC 9457: https://www.rfc-editor.org/rfc/rfc9457

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Attributes:
        field: Name of the field with error
        code: Machine-readable error code
        message: Human-readable error message

    Examples:
        >>> error = ErrorDetail(
        ...     field="original_file",
        ...     code="unsupported_format",
        ...     message="unsupported format: .xyz",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        errors: Optional list of field-specific errors
        trace_id: Optional request trace ID for debugging

    Examples:
        >>> problem = ProblemDetails(
        ...     type="/errors/conversion_failed",
        ...     title="Unsupported Media Type",
        ...     status=415,
        ...     detail="unsupported format: .xyz",
        ...     instance="/api/v1/events/wedding-42/photos",
        ...     errors=[
        ...         ErrorDetail(
        ...             field="original_file",
        ...             code="unsupported_format",
        ...             message="unsupported format: .xyz",
        ...         )
        ...     ],
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["/errors/conversion_failed"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Unsupported Media Type"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[415],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["unsupported format: .xyz"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/events/wedding-42/photos"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )
