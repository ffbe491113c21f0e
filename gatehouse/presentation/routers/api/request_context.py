"""Request-derived fields shared by middleware and route handlers."""

from typing import TypedDict

from starlette.requests import Request

from gatehouse.core.fingerprinting import get_client_ip, get_user_agent


class AuditContext(TypedDict):
    endpoint: str
    ip_address: str
    user_agent: str


def client_ip(request: Request) -> str:
    """Client IP, believing forwarding headers only from configured proxies."""
    return get_client_ip(request, request.app.state.settings.trusted_proxy_list)


def audit_context(request: Request) -> AuditContext:
    """Endpoint, client IP and User-Agent for an AuditEvent."""
    return AuditContext(
        endpoint=request.url.path,
        ip_address=client_ip(request),
        user_agent=get_user_agent(request),
    )
