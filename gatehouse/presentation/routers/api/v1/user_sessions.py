"""End-user sessions and login history router.

Endpoints (end-user session required):
    GET    /api/v1/user/sessions                - List own sessions (current flagged)
    DELETE /api/v1/user/sessions/{id}           - Revoke one other session
    POST   /api/v1/user/sessions/revoke-all     - Revoke all other sessions
    GET    /api/v1/user/security/login-history  - Recent logins, newest first
"""

from uuid import UUID

from fastapi import APIRouter, Path, Query, Request, status
from fastapi.responses import Response

from gatehouse.core.constants import AUDIT_QUERY_MAX_LIMIT
from gatehouse.core.fingerprinting import parse_user_agent
from gatehouse.core.result import Failure, Success
from gatehouse.domain.entities import AuditEvent, AuditFilters
from gatehouse.domain.enums import ActorType, AuditAction, PrincipalKind
from gatehouse.presentation.routers.api.dependencies import ContainerDep, CurrentUser
from gatehouse.presentation.routers.api.request_context import audit_context
from gatehouse.presentation.routers.api.v1.errors import (
    ProblemException,
    http_error_for,
)
from gatehouse.schemas.session_schemas import (
    SessionListResponse,
    SessionResponse,
    SessionRevokeAllResponse,
)
from gatehouse.schemas.user_schemas import LoginHistoryEntry, LoginHistoryResponse

router = APIRouter(prefix="/user", tags=["User Sessions"])


@router.get("/sessions", response_model=SessionListResponse, summary="List sessions")
async def list_sessions(
    session: CurrentUser, container: ContainerDep
) -> SessionListResponse:
    """Active sessions of the calling user, most recently active first."""
    result = await container.session_store.list_sessions(
        session.principal_id, PrincipalKind.USER, current_session_id=session.id
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
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Revoke session",
)
async def revoke_session(
    request: Request,
    session: CurrentUser,
    container: ContainerDep,
    session_id: UUID = Path(..., description="Session to revoke"),
) -> Response:
    """Revoke one of the user's other sessions.

    Idempotent: an unknown id (or one owned by someone else) is a no-op.

    Raises:
        ProblemException 400: ``session_id`` is the current session; use logout.
    """
    if session_id == session.id:
        raise ProblemException(
            status.HTTP_400_BAD_REQUEST,
            "Cannot revoke the current session. Use logout instead.",
        )

    result = await container.session_store.revoke_session(
        session_id, principal_id=session.principal_id
    )
    match result:
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=True):
            await container.audit.record(
                AuditEvent(
                    action=AuditAction.SESSION_REVOKED,
                    actor_id=session.principal_id,
                    actor_type=ActorType.USER,
                    resource_type="session",
                    resource_id=str(session_id),
                    **audit_context(request),
                )
            )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/sessions/revoke-all",
    response_model=SessionRevokeAllResponse,
    summary="Revoke all other sessions",
)
async def revoke_other_sessions(
    request: Request, session: CurrentUser, container: ContainerDep
) -> SessionRevokeAllResponse:
    """Log out every other device; the current session survives."""
    result = await container.session_store.revoke_all(
        session.principal_id, PrincipalKind.USER, except_session_id=session.id
    )
    if isinstance(result, Failure):
        raise http_error_for(result.error)

    await container.audit.record(
        AuditEvent(
            action=AuditAction.SESSION_REVOKED_ALL,
            actor_id=session.principal_id,
            actor_type=ActorType.USER,
            resource_type="session",
            details=f"revoked={result.value}",
            **audit_context(request),
        )
    )
    return SessionRevokeAllResponse(revoked_count=result.value)


@router.get(
    "/security/login-history",
    response_model=LoginHistoryResponse,
    summary="Login history",
)
async def login_history(
    session: CurrentUser,
    container: ContainerDep,
    limit: int = Query(50, ge=1, le=AUDIT_QUERY_MAX_LIMIT),
    offset: int = Query(0, ge=0),
) -> LoginHistoryResponse:
    filters = AuditFilters(actor_id=session.principal_id, action=AuditAction.USER_LOGIN)
    match await container.audit.query(filters, limit=limit, offset=offset):
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=events):
            return LoginHistoryResponse(
                history=[
                    LoginHistoryEntry(
                        session_id=event.resource_id,
                        ip_address=event.ip_address,
                        user_agent=event.user_agent,
                        device_name=parse_user_agent(event.user_agent).device_name,
                        created_at=event.created_at,
                    )
                    for event in events
                ],
                limit=limit,
                offset=offset,
            )
