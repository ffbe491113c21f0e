"""Admin and end-user authentication schemas.

Endpoints:
    POST /api/v1/admin/auth/login            - Primary credentials
    POST /api/v1/admin/auth/2fa/send-code    - Email a second-factor code
    POST /api/v1/admin/auth/2fa/verify-code  - Clear the second factor
    POST /api/v1/admin/auth/logout           - End the current session
    GET  /api/v1/admin/auth/me               - Current admin
    POST /api/v1/auth/otp/send               - Email a one-time code
    POST /api/v1/auth/otp/verify             - Exchange a code for a session
"""

from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from gatehouse.domain.enums import AdminRole, OtpPurpose


# =============================================================================
# Admin
# =============================================================================


class AdminLoginRequest(BaseModel):
    """Admin primary credentials."""

    email: EmailStr = Field(..., description="Admin email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "admin@example.com", "password": "correct horse"}
        }
    )


class AdminLoginResponse(BaseModel):
    """Login accepted; the session still needs its second factor."""

    session_id: UUID = Field(..., description="Public id of the new session")
    two_factor_required: bool = Field(
        default=True, description="Always true for admin logins"
    )
    message: str = Field(
        default="Login accepted. Complete two-factor verification to continue."
    )


class TwoFactorCodeRequest(BaseModel):
    """Second-factor code. Exact length is checked against settings."""

    code: str = Field(
        ...,
        pattern=r"^\d+$",
        max_length=10,
        description="Numeric code from the verification email",
        examples=["042137"],
    )


class MessageResponse(BaseModel):
    """Generic message body."""

    message: str


class AdminProfileResponse(BaseModel):
    """Authenticated admin."""

    id: UUID
    email: str
    full_name: str
    role: AdminRole
    session_id: UUID
    two_factor_verified: bool


# =============================================================================
# End-user OTP
# =============================================================================


def _reject_admin_purpose(value: OtpPurpose) -> OtpPurpose:
    if value is OtpPurpose.TWO_FACTOR:
        raise ValueError("two_factor codes are issued through the admin flow")
    return value


PublicOtpPurpose = Annotated[OtpPurpose, AfterValidator(_reject_admin_purpose)]


class OtpSendRequest(BaseModel):
    """Ask for a one-time code."""

    email: EmailStr = Field(..., description="Recipient address")
    purpose: PublicOtpPurpose = Field(default=OtpPurpose.LOGIN)


class OtpSendResponse(BaseModel):
    """Identical for every request, known address or not."""

    message: str = Field(
        default="If the address can receive email, a code is on its way."
    )


class OtpVerifyRequest(BaseModel):
    """Submit a one-time code."""

    email: EmailStr
    purpose: PublicOtpPurpose = Field(default=OtpPurpose.LOGIN)
    code: str = Field(..., pattern=r"^\d+$", max_length=10)


class OtpVerifyResponse(BaseModel):
    """Code accepted."""

    verified: bool = True
    session_id: UUID | None = Field(
        None, description="Set when the code was a login code"
    )
