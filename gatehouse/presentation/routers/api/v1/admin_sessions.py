"""Admin sessions router.

Endpoints (verified admin session required):
    GET    /api/v1/admin/sessions          - List own sessions (current flagged)
    DELETE /api/v1/admin/sessions/{id}     - Revoke one other session
    DELETE /api/v1/admin/sessions          - Revoke all other sessions
    POST   /api/v1/admin/sessions/refresh  - Touch the current session
    POST   /api/v1/admin/sessions/cleanup  - Delete expired sessions (super_admin)
"""

from uuid import UUID

from fastapi import APIRouter, Path, Request, status
from fastapi.responses import Response

from gatehouse.core.result import Failure, Success
from gatehouse.domain.entities import AuditEvent
from gatehouse.domain.enums import ActorType, AuditAction, PrincipalKind
from gatehouse.presentation.routers.api.dependencies import (
    ContainerDep,
    CurrentAdmin,
    SuperAdmin,
)
from gatehouse.presentation.routers.api.request_context import audit_context
from gatehouse.presentation.routers.api.v1.errors import (
    ProblemException,
    http_error_for,
)
from gatehouse.schemas.session_schemas import (
    SessionCleanupResponse,
    SessionListResponse,
    SessionResponse,
    SessionRevokeAllResponse,
)

router = APIRouter(prefix="/admin/sessions", tags=["Admin Sessions"])


@router.get("", response_model=SessionListResponse, summary="List sessions")
async def list_sessions(
    principal: CurrentAdmin, container: ContainerDep
) -> SessionListResponse:
    """Active sessions of the calling admin, most recently active first."""
    result = await container.session_store.list_sessions(
        str(principal.admin.id),
        PrincipalKind.ADMIN,
        current_session_id=principal.session_id,
    )
    if isinstance(result, Failure):
        raise http_error_for(result.error)

    rows = result.value
    return SessionListResponse(
        sessions=[
            SessionResponse.from_session(r.session, is_current=r.is_current)
            for r in rows
        ],
        total=len(rows),
    )


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Revoke session",
)
async def revoke_session(
    request: Request,
    principal: CurrentAdmin,
    container: ContainerDep,
    session_id: UUID = Path(..., description="Session to revoke"),
) -> Response:
    """Revoke one of the admin's other sessions.

    Idempotent: an unknown id (or one owned by someone else) is a no-op.

    Raises:
        ProblemException 400: ``session_id`` is the current session; use logout.
    """
    if session_id == principal.session_id:
        raise ProblemException(
            status.HTTP_400_BAD_REQUEST,
            "Cannot revoke the current session. Use logout instead.",
        )

    result = await container.session_store.revoke_session(
        session_id, principal_id=str(principal.admin.id)
    )
    match result:
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=True):
            await container.audit.record(
                AuditEvent(
                    action=AuditAction.SESSION_REVOKED,
                    actor_id=str(principal.admin.id),
                    actor_type=ActorType.ADMIN,
                    resource_type="session",
                    resource_id=str(session_id),
                    **audit_context(request),
                )
            )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "",
    response_model=SessionRevokeAllResponse,
    summary="Revoke all other sessions",
)
async def revoke_other_sessions(
    request: Request, principal: CurrentAdmin, container: ContainerDep
) -> SessionRevokeAllResponse:
    """Log out every other device; the current session survives."""
    result = await container.session_store.revoke_all(
        str(principal.admin.id),
        PrincipalKind.ADMIN,
        except_session_id=principal.session_id,
    )
    if isinstance(result, Failure):
        raise http_error_for(result.error)

    await container.audit.record(
        AuditEvent(
            action=AuditAction.SESSION_REVOKED_ALL,
            actor_id=str(principal.admin.id),
            actor_type=ActorType.ADMIN,
            resource_type="session",
            details=f"revoked={result.value}",
            **audit_context(request),
        )
    )
    return SessionRevokeAllResponse(revoked_count=result.value)


@router.post("/refresh", response_model=SessionResponse, summary="Refresh session")
async def refresh_session(
    principal: CurrentAdmin, container: ContainerDep
) -> SessionResponse:
    """Touch ``last_active_at`` of the current session and return it."""
    store = container.session_store
    match await store.find_session(principal.session_id):
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=session):
            pass

    match await store.refresh(session):
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=refreshed):
            return SessionResponse.from_session(refreshed, is_current=True)


@router.post(
    "/cleanup",
    response_model=SessionCleanupResponse,
    summary="Delete expired sessions",
)
async def cleanup_expired_sessions(
    request: Request, principal: SuperAdmin, container: ContainerDep
) -> SessionCleanupResponse:
    """Remove every expired session, all principals. super_admin only."""
    result = await container.session_store.cleanup_expired()
    if isinstance(result, Failure):
        raise http_error_for(result.error)

    await container.audit.record(
        AuditEvent(
            action=AuditAction.SESSION_CLEANUP,
            actor_id=str(principal.admin.id),
            actor_type=ActorType.ADMIN,
            resource_type="session",
            details=f"deleted={result.value}",
            **audit_context(request),
        )
    )
    return SessionCleanupResponse(deleted_count=result.value)
