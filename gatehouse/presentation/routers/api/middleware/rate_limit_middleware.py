"""Rate limit middleware for FastAPI.

Applies a fixed-window policy to every request under the API prefix:

    /admin/auth/login, /admin/auth/2fa/*  -> AUTH
    /auth/otp/verify, /csrf               -> AUTH
    /auth/otp/send                        -> STRICT
    everything else under the prefix      -> STANDARD

The client key is ``{client_ip}:{path}``, so each endpoint has its own
budget per client.

Response Headers:
    - X-RateLimit-Limit: Requests allowed per window
    - X-RateLimit-Remaining: Requests left in the window
    - X-RateLimit-Reset: Seconds until the window resets
    - Retry-After: Seconds until retry allowed (on 429)

Fail-Open:
    A storage failure allows the request (the limiter logs it). Rate limit
    infrastructure must never cause a denial of service.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from gatehouse.core.result import Success
from gatehouse.domain.entities import AuditEvent
from gatehouse.domain.enums import ActorType, AuditAction, AuditStatus
from gatehouse.domain.value_objects import RateLimitDecision, RateLimitPolicy
from gatehouse.presentation.routers.api.request_context import (
    audit_context,
    client_ip,
)
from gatehouse.presentation.routers.api.v1.errors import problem_response

if TYPE_CHECKING:
    from gatehouse.core.container import Container

# Path suffix (after the API prefix) to policy. Prefix match, first hit wins.
_POLICY_TABLE: tuple[tuple[str, RateLimitPolicy], ...] = (
    ("/admin/auth/login", RateLimitPolicy.AUTH),
    ("/admin/auth/2fa/", RateLimitPolicy.AUTH),
    ("/auth/otp/send", RateLimitPolicy.STRICT),
    ("/auth/otp/verify", RateLimitPolicy.AUTH),
    ("/csrf", RateLimitPolicy.AUTH),
)


def policy_for_path(path: str, api_prefix: str) -> RateLimitPolicy | None:
    """Policy for a request path, or None when the path is not rate limited.

    Examples:
        >>> policy_for_path("/api/v1/auth/otp/send", "/api/v1")
        <RateLimitPolicy.STRICT: 'strict'>
        >>> policy_for_path("/health", "/api/v1") is None
        True
    """
    if not path.startswith(api_prefix):
        return None
    suffix = path[len(api_prefix) :]
    for route, policy in _POLICY_TABLE:
        if suffix.startswith(route):
            return policy
    return RateLimitPolicy.STANDARD


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Starlette middleware enforcing per-endpoint request budgets."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Count the request; answer 429 or pass it on with rate headers.

        Args:
            request: Incoming HTTP request.
            call_next: Next handler in middleware chain.
        """
        container: Container = request.app.state.container
        policy = policy_for_path(request.url.path, container.settings.api_v1_prefix)
        if policy is None:
            return await call_next(request)

        client_key = f"{client_ip(request)}:{request.url.path}"
        result = await container.rate_limiter.check(
            client_key=client_key, policy=policy
        )
        if not isinstance(result, Success):
            # Limiter already logged; fail open
            return await call_next(request)

        decision = result.value
        now = time.time()
        if not decision.allowed:
            await container.audit.record(
                AuditEvent(
                    action=AuditAction.SECURITY_RATE_LIMIT_EXCEEDED,
                    actor_type=ActorType.SYSTEM,
                    status=AuditStatus.FAILURE,
                    details=f"policy={policy.value} limit={decision.limit}",
                    **audit_context(request),
                )
            )
            return problem_response(
                request,
                status_code=429,
                detail=(
                    f"Rate limit exceeded. Try again in {decision.retry_after} seconds."
                ),
                slug="rate_limit_exceeded",
                retry_after=decision.retry_after,
                headers=_rate_headers(decision, now),
            )

        response = await call_next(request)
        response.headers.update(_rate_headers(decision, now))
        return response


def _rate_headers(decision: RateLimitDecision, now: float) -> dict[str, str]:
    return {
        "X-RateLimit-Limit": str(decision.limit),
        "X-RateLimit-Remaining": str(decision.remaining),
        "X-RateLimit-Reset": str(decision.reset_seconds(now)),
    }
