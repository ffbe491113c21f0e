"""CSRF token router.

Endpoints:
    GET /api/v1/csrf - Issue a token (body + csrf_token cookie)
"""

from fastapi import APIRouter, Response

from gatehouse.presentation.routers.api.cookies import set_csrf_cookie
from gatehouse.presentation.routers.api.dependencies import ContainerDep
from gatehouse.schemas.csrf_schemas import CsrfTokenResponse

router = APIRouter(prefix="/csrf", tags=["CSRF"])


@router.get(
    "",
    response_model=CsrfTokenResponse,
    summary="Issue CSRF token",
    description=(
        "Returns a token and sets it as an HTTP-only cookie. Echo the body "
        "value in the X-CSRF-Token header on every state-changing request."
    ),
)
async def issue_csrf_token(
    response: Response, container: ContainerDep
) -> CsrfTokenResponse:
    token = container.csrf.issue_token()
    set_csrf_cookie(
        response,
        token=token.value,
        max_age=token.expires_in,
        secure=container.settings.secure_cookies,
    )
    return CsrfTokenResponse(token=token.value, expires_in=token.expires_in)
