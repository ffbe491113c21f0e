"""Build RFC 9457 responses.

Used by exception handlers and by middleware, which runs outside FastAPI's
exception handling and has to return responses directly.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from gatehouse.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

PROBLEM_MEDIA_TYPE = "application/problem+json"

# HTTP status code to (title, slug)
_HTTP_STATUS_INFO: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    409: ("Resource Conflict", "conflict"),
    422: ("Validation Failed", "validation-failed"),
    429: ("Too Many Requests", "rate-limit-exceeded"),
    500: ("Internal Server Error", "internal-server-error"),
    502: ("Bad Gateway", "bad-gateway"),
    503: ("Service Unavailable", "service-unavailable"),
}


def status_title(status_code: int) -> str:
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[0]


def status_slug(status_code: int) -> str:
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))[1]


def problem_response(
    request: Request,
    *,
    status_code: int,
    detail: str,
    slug: str | None = None,
    errors: list[ErrorDetail] | None = None,
    retry_after: int | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """RFC 9457 JSON response for the current request.

    Args:
        request: Current request (instance path, trace id, base URL).
        status_code: HTTP status.
        detail: Human-readable explanation.
        slug: Problem type slug; defaults to one derived from the status.
        errors: Field errors.
        retry_after: Seconds until retry; also sent as ``Retry-After``.
        headers: Extra response headers.
    """
    base_url = request.app.state.settings.api_base_url
    problem = ProblemDetails(
        type=f"{base_url}/errors/{slug or status_slug(status_code)}",
        title=status_title(status_code),
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        errors=errors,
        retry_after=retry_after,
        trace_id=getattr(request.state, "trace_id", None),
    )
    response_headers = dict(headers or {})
    if retry_after is not None:
        response_headers["Retry-After"] = str(retry_after)
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=response_headers,
        media_type=PROBLEM_MEDIA_TYPE,
    )
