"""End-user OTP login router.

Endpoints:
    POST /api/v1/auth/otp/send    - Email a one-time code (always 202)
    POST /api/v1/auth/otp/verify  - Verify it; ``login`` opens a user session
    POST /api/v1/auth/logout      - End the user session (idempotent)

The send endpoint answers identically whether or not the address exists or
the email went out, so it cannot be used to probe for accounts.
"""

from fastapi import APIRouter, Request, Response, status

from gatehouse.application.services import decode_session_cookie, normalize_email
from gatehouse.core.constants import USER_SESSION_COOKIE
from gatehouse.core.result import Failure, Success
from gatehouse.domain.entities import AuditEvent
from gatehouse.domain.enums import (
    ActorType,
    AuditAction,
    AuditStatus,
    OtpPurpose,
    PrincipalKind,
)
from gatehouse.presentation.routers.api.cookies import (
    clear_session_cookie,
    set_session_cookie,
)
from gatehouse.presentation.routers.api.dependencies import ContainerDep
from gatehouse.presentation.routers.api.request_context import audit_context
from gatehouse.presentation.routers.api.v1.errors import http_error_for
from gatehouse.schemas.auth_schemas import (
    MessageResponse,
    OtpSendRequest,
    OtpSendResponse,
    OtpVerifyRequest,
    OtpVerifyResponse,
)

router = APIRouter(prefix="/auth", tags=["OTP Authentication"])


@router.post(
    "/otp/send",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=OtpSendResponse,
    summary="Request a one-time code",
)
async def send_code(
    request: Request, data: OtpSendRequest, container: ContainerDep
) -> OtpSendResponse:
    sent = await container.otp_service.create_and_send(data.email, data.purpose)
    await container.audit.record(
        AuditEvent(
            action=AuditAction.OTP_REQUESTED,
            actor_id=normalize_email(data.email),
            actor_type=ActorType.USER,
            resource_type="otp_challenge",
            status=AuditStatus.SUCCESS if sent else AuditStatus.FAILURE,
            details=f"purpose={data.purpose.value}",
            **audit_context(request),
        )
    )
    return OtpSendResponse()


@router.post(
    "/otp/verify",
    response_model=OtpVerifyResponse,
    summary="Verify a one-time code",
)
async def verify_code(
    request: Request,
    response: Response,
    data: OtpVerifyRequest,
    container: ContainerDep,
) -> OtpVerifyResponse:
    """Verify a code. A ``login`` code also opens a user session.

    Raises:
        ProblemException 400: Invalid or expired code.
        ProblemException 429: Too many failed attempts on this challenge.
    """
    email = normalize_email(data.email)
    context = audit_context(request)

    result = await container.otp_service.verify(email, data.purpose, data.code)
    if isinstance(result, Failure):
        await container.audit.record(
            AuditEvent(
                action=AuditAction.OTP_FAILED,
                actor_id=email,
                actor_type=ActorType.USER,
                resource_type="otp_challenge",
                status=AuditStatus.FAILURE,
                details=result.error.code.value,
                **context,
            )
        )
        raise http_error_for(result.error)

    await container.audit.record(
        AuditEvent(
            action=AuditAction.OTP_VERIFIED,
            actor_id=email,
            actor_type=ActorType.USER,
            resource_type="otp_challenge",
            details=f"purpose={data.purpose.value}",
            **context,
        )
    )
    if data.purpose is not OtpPurpose.LOGIN:
        return OtpVerifyResponse()

    match await container.session_store.create_session(
        principal_id=email,
        principal_kind=PrincipalKind.USER,
        ip_address=context["ip_address"],
        user_agent=context["user_agent"],
    ):
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=issued):
            pass

    set_session_cookie(
        response,
        name=USER_SESSION_COOKIE,
        token=issued.token,
        ttl=container.session_store.ttl_for(PrincipalKind.USER),
        secure=container.settings.secure_cookies,
    )
    await container.audit.record(
        AuditEvent(
            action=AuditAction.USER_LOGIN,
            actor_id=email,
            actor_type=ActorType.USER,
            resource_type="session",
            resource_id=str(issued.session.id),
            **context,
        )
    )
    return OtpVerifyResponse(session_id=issued.session.id)


@router.post("/logout", response_model=MessageResponse, summary="User logout")
async def logout(
    request: Request, response: Response, container: ContainerDep
) -> MessageResponse:
    """Revoke the user session named by the cookie, if any, and clear it."""
    store = container.session_store
    match decode_session_cookie(request.cookies.get(USER_SESSION_COOKIE)):
        case Success(value=cookie):
            verified = await store.verify_session(cookie.token)
            if (
                isinstance(verified, Success)
                and verified.value.principal_kind is PrincipalKind.USER
            ):
                session = verified.value
                await store.revoke_session(session.id)
                await container.audit.record(
                    AuditEvent(
                        action=AuditAction.USER_LOGOUT,
                        actor_id=session.principal_id,
                        actor_type=ActorType.USER,
                        resource_type="session",
                        resource_id=str(session.id),
                        **audit_context(request),
                    )
                )
        case Failure():
            pass

    clear_session_cookie(
        response, name=USER_SESSION_COOKIE, secure=container.settings.secure_cookies
    )
    return MessageResponse(message="Logged out.")
