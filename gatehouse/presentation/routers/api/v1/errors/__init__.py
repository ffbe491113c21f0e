"""RFC 9457 error responses."""

from gatehouse.presentation.routers.api.v1.errors.domain_errors import http_error_for
from gatehouse.presentation.routers.api.v1.errors.error_response_builder import (
    problem_response,
)
from gatehouse.presentation.routers.api.v1.errors.exception_handlers import (
    ProblemException,
    register_exception_handlers,
)
from gatehouse.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ErrorDetail",
    "ProblemDetails",
    "ProblemException",
    "http_error_for",
    "problem_response",
    "register_exception_handlers",
]
