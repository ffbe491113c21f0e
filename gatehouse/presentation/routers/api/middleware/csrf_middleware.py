"""CSRF middleware (double-submit cookie).

Every POST, PUT, PATCH and DELETE under the API prefix must carry an
``X-CSRF-Token`` header equal to its ``csrf_token`` cookie. Exempt: the
token issuing route itself and health checks.

A rejected request is answered here with 403 problem+json and a
``security.csrf_violation`` audit event. The route handler never runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from gatehouse.core.constants import CSRF_COOKIE, CSRF_HEADER
from gatehouse.core.result import Failure
from gatehouse.domain.entities import AuditEvent
from gatehouse.domain.enums import ActorType, AuditAction, AuditStatus
from gatehouse.presentation.routers.api.request_context import audit_context
from gatehouse.presentation.routers.api.v1.errors import problem_response

if TYPE_CHECKING:
    from gatehouse.core.container import Container

UNSAFE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class CsrfMiddleware(BaseHTTPMiddleware):
    """Reject state-changing API requests without a matching CSRF token."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        container: Container = request.app.state.container
        if not self._requires_token(request, container.settings.api_v1_prefix):
            return await call_next(request)

        result = container.csrf.check(
            request.headers.get(CSRF_HEADER), request.cookies.get(CSRF_COOKIE)
        )
        if isinstance(result, Failure):
            error = result.error
            container.logger.warning(
                "CSRF validation failed",
                error_code=error.code.value,
                path=request.url.path,
                method=request.method,
            )
            await container.audit.record(
                AuditEvent(
                    action=AuditAction.SECURITY_CSRF_VIOLATION,
                    actor_type=ActorType.SYSTEM,
                    status=AuditStatus.FAILURE,
                    details=error.code.value,
                    **audit_context(request),
                )
            )
            return problem_response(
                request,
                status_code=403,
                detail=error.message,
                slug=error.code.value,
            )

        return await call_next(request)

    @staticmethod
    def _requires_token(request: Request, api_prefix: str) -> bool:
        if request.method not in UNSAFE_METHODS:
            return False
        path = request.url.path
        if not path.startswith(api_prefix):
            return False
        return path.rstrip("/") not in (f"{api_prefix}/csrf", f"{api_prefix}/health")
