"""Admin authentication: primary credentials and the auth façade.

AdminAuthenticator checks email and password at login.

AdminAuthFacade is the single gate in front of privileged routes:

    cookie -> decode -> verify_session -> load admin -> active?
        any failure -> AuthenticationError(UNAUTHORIZED)

The precise reason (missing cookie, expired, second factor pending, deleted
admin, store down) is logged at warning level and never returned, so a
caller cannot tell one failure from another.
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar
from uuid import UUID

from gatehouse.application.services.bounded import bounded
from gatehouse.application.services.otp_service import normalize_email
from gatehouse.application.services.session_cookie import decode_session_cookie
from gatehouse.application.services.session_store import SessionStore
from gatehouse.core.enums import ErrorCode
from gatehouse.core.errors import AuthenticationError, AuthorizationError, DomainError
from gatehouse.core.result import Failure, Result, Success
from gatehouse.domain.entities import AdminPrincipal, AdminUser
from gatehouse.domain.enums import AdminRole, PrincipalKind
from gatehouse.domain.protocols import (
    AdminUserRepository,
    LoggerProtocol,
    PasswordHashingProtocol,
)

T = TypeVar("T")

_TIMING_PASSWORD = "gatehouse-timing-equaliser"


class AdminAuthenticator:
    """Primary-credential check for admins.

    Unknown emails still run one bcrypt comparison against a throwaway hash,
    so response time does not reveal whether an account exists.
    """

    def __init__(
        self,
        *,
        repository: AdminUserRepository,
        password_hasher: PasswordHashingProtocol,
        logger: LoggerProtocol,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._repository = repository
        self._hasher = password_hasher
        self._logger = logger
        self._timeout = timeout_seconds
        self._dummy_hash = password_hasher.hash_password(_TIMING_PASSWORD)

    async def login(
        self, email: str, password: str
    ) -> Result[AdminUser, AuthenticationError]:
        """Return the admin for valid credentials, INVALID_CREDENTIALS otherwise."""
        found = await bounded(
            self._repository.find_by_email(normalize_email(email)),
            timeout=self._timeout,
            logger=self._logger,
            operation="admin_user.find_by_email",
        )
        admin = found.value if isinstance(found, Success) else None

        stored_hash = admin.password_hash if admin else self._dummy_hash
        password_ok = await asyncio.to_thread(
            self._hasher.verify_password, password, stored_hash
        )

        if admin is None or not password_ok or not admin.is_active:
            self._logger.warning(
                "Admin login rejected",
                reason=_login_rejection_reason(found, admin, password_ok),
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_CREDENTIALS,
                    message="Invalid email or password",
                )
            )

        self._logger.info("Admin credentials accepted", admin_id=str(admin.id))
        return Success(value=admin)


def _login_rejection_reason(
    found: Result[AdminUser | None, DomainError],
    admin: AdminUser | None,
    password_ok: bool,
) -> str:
    if isinstance(found, Failure):
        return "store_unavailable"
    if admin is None:
        return "unknown_email"
    if not password_ok:
        return "bad_password"
    return "inactive"


class AdminAuthFacade:
    """Authenticate and authorize admin requests.

    Args:
        session_store: Session lifecycle service.
        repository: Admin account lookup.
        logger: Structured logger.
        timeout_seconds: Bound on the admin lookup.
    """

    def __init__(
        self,
        *,
        session_store: SessionStore,
        repository: AdminUserRepository,
        logger: LoggerProtocol,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._sessions = session_store
        self._repository = repository
        self._logger = logger
        self._timeout = timeout_seconds

    async def authenticate(
        self, cookie_value: str | None, *, allow_unverified: bool = False
    ) -> Result[AdminPrincipal, AuthenticationError]:
        """Resolve an admin session cookie to an AdminPrincipal.

        Args:
            cookie_value: Raw ``admin_session_token`` cookie (may be None).
            allow_unverified: Accept sessions still waiting on their second
                factor. Only the two-factor routes pass True.
        """
        match decode_session_cookie(cookie_value):
            case Failure(error=error):
                return self._reject(error)
            case Success(value=cookie):
                pass

        match await self._sessions.verify_session(
            cookie.token, allow_unverified=allow_unverified
        ):
            case Failure(error=error):
                return self._reject(error)
            case Success(value=session):
                pass

        if session.principal_kind is not PrincipalKind.ADMIN:
            return self._reject_reason("not_admin_session")

        loaded = await self._load_admin(session.principal_id)
        if isinstance(loaded, Failure):
            return self._reject(loaded.error)
        account = loaded.value
        if account is None:
            return self._reject_reason("admin_missing")
        if not account.is_active:
            return self._reject_reason("admin_inactive")

        return Success(
            value=AdminPrincipal(
                admin=account,
                session_id=session.id,
                two_factor_verified=session.two_factor_verified,
            )
        )

    def authorize(
        self, principal: AdminPrincipal, required_role: AdminRole
    ) -> Result[AdminPrincipal, AuthorizationError]:
        """Check the principal's role against ``required_role``."""
        if principal.admin.role.satisfies(required_role):
            return Success(value=principal)
        self._logger.warning(
            "Admin lacks required role",
            admin_id=str(principal.admin.id),
            role=principal.admin.role.value,
            required_role=required_role.value,
        )
        return Failure(
            error=AuthorizationError(
                code=ErrorCode.FORBIDDEN,
                message="Insufficient privileges",
                required_role=required_role.value,
            )
        )

    async def _load_admin(
        self, principal_id: str
    ) -> Result[AdminUser | None, DomainError]:
        try:
            admin_id = UUID(principal_id)
        except ValueError:
            return Success(value=None)
        return await self._call(
            self._repository.find_by_id(admin_id), "admin_user.find_by_id"
        )

    async def _call(
        self, call: Awaitable[T], operation: str
    ) -> Result[T, DomainError]:
        return await bounded(
            call, timeout=self._timeout, logger=self._logger, operation=operation
        )

    def _reject(self, error: DomainError) -> Failure[AuthenticationError]:
        return self._reject_reason(error.code.value)

    def _reject_reason(self, reason: str) -> Failure[AuthenticationError]:
        self._logger.warning("Admin authentication rejected", reason=reason)
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.UNAUTHORIZED,
                message="Authentication required",
            )
        )
