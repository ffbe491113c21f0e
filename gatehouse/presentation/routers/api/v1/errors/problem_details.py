"""RFC 9457 Problem Details for HTTP APIs.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error (validation failures).

    Attributes:
        field: Name of the field with error
        code: Machine-readable error code
        message: Human-readable error message
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        errors: Field-specific errors (validation failures only)
        retry_after: Seconds until retry (429 only)
        trace_id: Request trace ID for debugging

    Examples:
        >>> problem = ProblemDetails(
        ...     type="http://localhost:8000/errors/csrf_token_invalid",
        ...     title="Access Denied",
        ...     status=403,
        ...     detail="CSRF token invalid",
        ...     instance="/api/v1/admin/auth/login",
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: str = Field(..., description="URI reference identifying this occurrence")
    errors: list[ErrorDetail] | None = Field(
        None, description="List of field-specific errors"
    )
    retry_after: int | None = Field(None, description="Seconds until retry")
    trace_id: str | None = Field(None, description="Request trace ID for debugging")
