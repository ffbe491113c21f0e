"""Trace middleware to inject a trace_id per request.

- Reads X-Trace-Id from the request or generates a uuid4
- Binds it into structlog contextvars so every log line carries it
- Stores it on ``request.state`` for problem details
- Adds X-Trace-Id response header
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Awaitable, Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from gatehouse.core.constants import TRACE_HEADER

trace_id_context: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    """Return the current trace ID, or None outside a request."""
    return trace_id_context.get()


class TraceMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that injects a trace ID into each request context."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Set the trace ID, run the request, echo the ID back.

        Args:
            request: Incoming request.
            call_next: Next handler.

        Returns:
            Response with X-Trace-Id header added.
        """
        trace_id = request.headers.get(TRACE_HEADER) or str(uuid4())
        request.state.trace_id = trace_id
        token = trace_id_context.set(trace_id)
        structlog.contextvars.bind_contextvars(trace_id=trace_id)
        try:
            response = await call_next(request)
            response.headers[TRACE_HEADER] = trace_id
            return response
        finally:
            # Clear context after request
            structlog.contextvars.unbind_contextvars("trace_id")
            trace_id_context.reset(token)
