"""CSRF token response schema.

GET /api/v1/csrf
"""

from pydantic import BaseModel, ConfigDict, Field


class CsrfTokenResponse(BaseModel):
    """Issued anti-forgery token.

    The same value is set as the ``csrf_token`` cookie; clients echo it back
    in the ``X-CSRF-Token`` header on state-changing requests.
    """

    token: str = Field(..., description="64-character hex token")
    expires_in: int = Field(..., description="Seconds until the token expires")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "9f2c" * 16,
                "expires_in": 86400,
            }
        }
    )
