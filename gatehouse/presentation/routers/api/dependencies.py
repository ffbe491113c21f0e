"""Authentication dependencies.

FastAPI dependencies in front of protected routes. They read the container
from ``app.state``; admin checks delegate to the AdminAuthFacade.

    require_admin          verified admin session        else 401
    require_super_admin    verified super_admin session  else 401 / 403
    require_pending_admin  admin session, 2FA optional   else 401
                           (two-factor routes only)
    require_user           end-user session              else 401

Every 401 carries the same detail and records ``security.unauthorized``.

Usage:
    @router.get("/me")
    async def me(principal: CurrentAdmin) -> AdminProfileResponse:
        ...
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from gatehouse.application.services import decode_session_cookie
from gatehouse.core.constants import ADMIN_SESSION_COOKIE, USER_SESSION_COOKIE
from gatehouse.core.container import Container
from gatehouse.core.result import Failure, Success
from gatehouse.domain.entities import AdminPrincipal, AuditEvent, Session
from gatehouse.domain.enums import (
    ActorType,
    AdminRole,
    AuditAction,
    AuditStatus,
    PrincipalKind,
)
from gatehouse.presentation.routers.api.request_context import audit_context


def get_container(request: Request) -> Container:
    """Container stored on the app by the lifespan."""
    return request.app.state.container


ContainerDep = Annotated[Container, Depends(get_container)]


async def _record_unauthorized(
    request: Request, container: Container, reason: str
) -> None:
    await container.audit.record(
        AuditEvent(
            action=AuditAction.SECURITY_UNAUTHORIZED,
            actor_type=ActorType.SYSTEM,
            status=AuditStatus.FAILURE,
            details=reason,
            **audit_context(request),
        )
    )


async def _authenticate(
    request: Request, container: Container, *, allow_unverified: bool
) -> AdminPrincipal:
    result = await container.admin_auth.authenticate(
        request.cookies.get(ADMIN_SESSION_COOKIE),
        allow_unverified=allow_unverified,
    )
    match result:
        case Success(value=principal):
            return principal
        case Failure(error=error):
            await _record_unauthorized(request, container, error.code.value)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=error.message,
            )


async def require_admin(request: Request, container: ContainerDep) -> AdminPrincipal:
    """Verified admin session.

    Raises:
        HTTPException 401: Missing, malformed, expired, revoked or
            unverified session, or inactive admin.
    """
    return await _authenticate(request, container, allow_unverified=False)


async def require_pending_admin(
    request: Request, container: ContainerDep
) -> AdminPrincipal:
    """Admin session that may still be waiting on its second factor."""
    return await _authenticate(request, container, allow_unverified=True)


CurrentAdmin = Annotated[AdminPrincipal, Depends(require_admin)]
PendingAdmin = Annotated[AdminPrincipal, Depends(require_pending_admin)]


async def require_super_admin(
    principal: CurrentAdmin, container: ContainerDep
) -> AdminPrincipal:
    """Verified super_admin session.

    Raises:
        HTTPException 403: Authenticated admin without the super_admin role.
    """
    match container.admin_auth.authorize(principal, AdminRole.SUPER_ADMIN):
        case Success(value=authorized):
            return authorized
        case Failure(error=error):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail=error.message
            )


SuperAdmin = Annotated[AdminPrincipal, Depends(require_super_admin)]


async def require_user(request: Request, container: ContainerDep) -> Session:
    """End-user session named by the ``user_session_token`` cookie.

    Raises:
        HTTPException 401: Missing, malformed, expired or revoked session, or
            a session that does not belong to an end user.
    """
    match decode_session_cookie(request.cookies.get(USER_SESSION_COOKIE)):
        case Failure(error=error):
            reason = error.code.value
        case Success(value=cookie):
            match await container.session_store.verify_session(cookie.token):
                case Success(value=session) if (
                    session.principal_kind is PrincipalKind.USER
                ):
                    return session
                case Success():
                    reason = "not_user_session"
                case Failure(error=error):
                    reason = error.code.value

    await _record_unauthorized(request, container, reason)
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
    )


CurrentUser = Annotated[Session, Depends(require_user)]
