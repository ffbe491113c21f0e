"""HTTP middleware and request dependencies."""

from gatehouse.presentation.routers.api.middleware.csrf_middleware import (
    CsrfMiddleware,
)
from gatehouse.presentation.routers.api.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
    policy_for_path,
)
from gatehouse.presentation.routers.api.middleware.trace_middleware import (
    TraceMiddleware,
    get_trace_id,
)

__all__ = [
    "CsrfMiddleware",
    "RateLimitMiddleware",
    "TraceMiddleware",
    "get_trace_id",
    "policy_for_path",
]
