"""Global exception handlers.

Every error leaving the API is RFC 9457 ``application/problem+json``:
    http_exception_handler: HTTPException (auth dependencies, route checks,
        unknown routes)
    validation_exception_handler: RequestValidationError (pydantic)
    generic_exception_handler: anything unhandled (500, no internals leaked)
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gatehouse.presentation.routers.api.v1.errors.error_response_builder import (
    problem_response,
)
from gatehouse.presentation.routers.api.v1.errors.problem_details import ErrorDetail


class ProblemException(HTTPException):
    """HTTPException carrying a problem type slug.

    Route handlers raise this when the problem type should name the domain
    error (``otp_too_many_attempts``) instead of the bare status.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        *,
        slug: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.slug = slug


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException to Problem Details, keeping its headers."""
    assert isinstance(exc, StarletteHTTPException)

    headers = dict(exc.headers or {})
    retry_after: int | None = None
    if exc.status_code == status.HTTP_429_TOO_MANY_REQUESTS and "Retry-After" in headers:
        retry_after = int(headers.pop("Retry-After"))

    return problem_response(
        request,
        status_code=exc.status_code,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        slug=getattr(exc, "slug", None),
        retry_after=retry_after,
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Convert RequestValidationError to Problem Details with field errors."""
    assert isinstance(exc, RequestValidationError)

    field_errors: list[ErrorDetail] = []
    for error in exc.errors():
        field_parts = [str(p) for p in error.get("loc", []) if p != "body"]
        field_errors.append(
            ErrorDetail(
                field=".".join(field_parts) if field_parts else "unknown",
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    return problem_response(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Request validation failed. Check 'errors' for details.",
        errors=field_errors or None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unhandled exception: log it, answer 500 with the trace id only."""
    container = getattr(request.app.state, "container", None)
    if container is not None:
        container.logger.error(
            "Unhandled exception",
            error=exc,
            path=str(request.url.path),
            method=request.method,
        )
    return problem_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please contact support with the trace ID.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
