"""API v1 routers.

Resources:
    /api/v1/csrf                    - CSRF token issuance
    /api/v1/admin/auth              - Admin login, second factor, logout, profile
    /api/v1/admin/sessions          - Admin session enumeration and revocation
    /api/v1/admin/audit-logs        - Audit trail
    /api/v1/admin/security          - Security statistics and export
    /api/v1/auth                    - End-user OTP login and logout
    /api/v1/user                    - End-user sessions and login history
"""

from fastapi import APIRouter

from gatehouse.presentation.routers.api.v1 import (
    admin_auth,
    admin_sessions,
    audit,
    csrf,
    otp_auth,
    user_sessions,
)


def build_v1_router(prefix: str = "/api/v1") -> APIRouter:
    """v1 router mounted under ``prefix`` (``settings.api_v1_prefix``)."""
    v1_router = APIRouter(prefix=prefix)
    for module in (
        csrf,
        admin_auth,
        admin_sessions,
        audit,
        otp_auth,
        user_sessions,
    ):
        v1_router.include_router(module.router)
    return v1_router


__all__ = ["build_v1_router"]
