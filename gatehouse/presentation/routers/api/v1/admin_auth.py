"""Admin authentication router.

Endpoints:
    POST /api/v1/admin/auth/login            - Check credentials, open an unverified session
    POST /api/v1/admin/auth/2fa/send-code    - Email a second-factor code
    POST /api/v1/admin/auth/2fa/verify-code  - Verify the code, promote the session
    POST /api/v1/admin/auth/logout           - Revoke the current session
    GET  /api/v1/admin/auth/me               - Current admin profile

Flow:
    login -> cookie (unverified) -> send-code -> verify-code -> privileged routes
"""

from fastapi import APIRouter, HTTPException, Request, Response, status

from gatehouse.core.constants import ADMIN_SESSION_COOKIE
from gatehouse.core.result import Failure, Success
from gatehouse.domain.entities import AuditEvent
from gatehouse.domain.enums import ActorType, AuditAction, AuditStatus, PrincipalKind
from gatehouse.presentation.routers.api.cookies import (
    clear_session_cookie,
    set_session_cookie,
)
from gatehouse.presentation.routers.api.dependencies import (
    ContainerDep,
    CurrentAdmin,
    PendingAdmin,
)
from gatehouse.presentation.routers.api.request_context import audit_context
from gatehouse.presentation.routers.api.v1.errors import (
    ProblemException,
    http_error_for,
)
from gatehouse.schemas.auth_schemas import (
    AdminLoginRequest,
    AdminLoginResponse,
    AdminProfileResponse,
    MessageResponse,
    TwoFactorCodeRequest,
)

router = APIRouter(prefix="/admin/auth", tags=["Admin Authentication"])


@router.post(
    "/login",
    response_model=AdminLoginResponse,
    summary="Admin login",
    description="Verify email and password. The new session still needs a second factor.",
)
async def login(
    request: Request,
    response: Response,
    data: AdminLoginRequest,
    container: ContainerDep,
) -> AdminLoginResponse:
    """Check primary credentials and open an unverified admin session.

    POST /api/v1/admin/auth/login -> 200, sets ``admin_session_token``

    Raises:
        ProblemException 401: Invalid email or password (one message for
            every reason).
    """
    context = audit_context(request)

    match await container.admin_authenticator.login(data.email, data.password):
        case Failure(error=error):
            await container.audit.record(
                AuditEvent(
                    action=AuditAction.ADMIN_LOGIN_FAILED,
                    actor_type=ActorType.ADMIN,
                    status=AuditStatus.FAILURE,
                    details=error.code.value,
                    **context,
                )
            )
            raise http_error_for(error)
        case Success(value=admin):
            pass

    match await container.session_store.create_session(
        principal_id=str(admin.id),
        principal_kind=PrincipalKind.ADMIN,
        ip_address=context["ip_address"],
        user_agent=context["user_agent"],
    ):
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=issued):
            pass

    set_session_cookie(
        response,
        name=ADMIN_SESSION_COOKIE,
        token=issued.token,
        ttl=container.session_store.ttl_for(PrincipalKind.ADMIN),
        secure=container.settings.secure_cookies,
    )
    await container.audit.record(
        AuditEvent(
            action=AuditAction.ADMIN_LOGIN,
            actor_id=str(admin.id),
            actor_type=ActorType.ADMIN,
            resource_type="session",
            resource_id=str(issued.session.id),
            **context,
        )
    )
    return AdminLoginResponse(session_id=issued.session.id)


@router.post(
    "/2fa/send-code",
    response_model=MessageResponse,
    summary="Send second-factor code",
)
async def send_two_factor_code(
    request: Request, principal: PendingAdmin, container: ContainerDep
) -> MessageResponse:
    """Email a fresh code to the admin of the current session.

    Raises:
        ProblemException 502: The email could not be sent.
    """
    sent = await container.two_factor_gate.send_challenge(
        session_id=principal.session_id, admin=principal.admin
    )
    await container.audit.record(
        AuditEvent(
            action=AuditAction.ADMIN_TWO_FACTOR_SENT,
            actor_id=str(principal.admin.id),
            actor_type=ActorType.ADMIN,
            resource_type="session",
            resource_id=str(principal.session_id),
            status=AuditStatus.SUCCESS if sent else AuditStatus.FAILURE,
            **audit_context(request),
        )
    )
    if not sent:
        raise ProblemException(
            status.HTTP_502_BAD_GATEWAY,
            "Could not send the verification code. Try again later.",
            slug="otp_delivery_failed",
        )
    return MessageResponse(message="Verification code sent.")


@router.post(
    "/2fa/verify-code",
    response_model=MessageResponse,
    summary="Verify second-factor code",
)
async def verify_two_factor_code(
    request: Request,
    data: TwoFactorCodeRequest,
    principal: PendingAdmin,
    container: ContainerDep,
) -> MessageResponse:
    """Verify the emailed code and promote the current session.

    Raises:
        HTTPException 422: Code is not exactly ``otp_code_length`` digits.
        ProblemException 400: Wrong, expired or missing code.
        ProblemException 429: The challenge is locked after too many tries.
    """
    expected_length = container.otp_service.code_length
    if len(data.code) != expected_length:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Code must be exactly {expected_length} digits",
        )

    result = await container.two_factor_gate.complete(
        session_id=principal.session_id, admin=principal.admin, code=data.code
    )
    failed = isinstance(result, Failure)
    await container.audit.record(
        AuditEvent(
            action=(
                AuditAction.ADMIN_TWO_FACTOR_FAILED
                if failed
                else AuditAction.ADMIN_TWO_FACTOR_VERIFIED
            ),
            actor_id=str(principal.admin.id),
            actor_type=ActorType.ADMIN,
            resource_type="session",
            resource_id=str(principal.session_id),
            status=AuditStatus.FAILURE if failed else AuditStatus.SUCCESS,
            details=result.error.code.value if isinstance(result, Failure) else None,
            **audit_context(request),
        )
    )
    if isinstance(result, Failure):
        raise http_error_for(result.error)
    return MessageResponse(message="Two-factor verification complete.")


@router.post("/logout", response_model=MessageResponse, summary="Admin logout")
async def logout(
    request: Request,
    response: Response,
    principal: PendingAdmin,
    container: ContainerDep,
) -> MessageResponse:
    """Revoke the current session and clear its cookie."""
    revoked = await container.session_store.revoke_session(principal.session_id)
    if isinstance(revoked, Failure):
        raise http_error_for(revoked.error)

    clear_session_cookie(
        response,
        name=ADMIN_SESSION_COOKIE,
        secure=container.settings.secure_cookies,
    )
    await container.audit.record(
        AuditEvent(
            action=AuditAction.ADMIN_LOGOUT,
            actor_id=str(principal.admin.id),
            actor_type=ActorType.ADMIN,
            resource_type="session",
            resource_id=str(principal.session_id),
            **audit_context(request),
        )
    )
    return MessageResponse(message="Logged out.")


@router.get("/me", response_model=AdminProfileResponse, summary="Current admin")
async def me(principal: CurrentAdmin) -> AdminProfileResponse:
    admin = principal.admin
    return AdminProfileResponse(
        id=admin.id,
        email=admin.email,
        full_name=admin.full_name,
        role=admin.role,
        session_id=principal.session_id,
        two_factor_verified=principal.two_factor_verified,
    )
