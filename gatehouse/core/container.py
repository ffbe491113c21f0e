"""Dependency container (composition root).

Built once by the process entry point from Settings, stored on
``app.state.container`` by the FastAPI lifespan, and closed on shutdown.
Nothing is created lazily on first use: every store handle and service
exists from ``build_container`` on.

Backends:
    storage_backend=database -> SQLAlchemy repositories on one Database
    storage_backend=memory   -> in-memory repositories (tests, local dev)
    rate_limit_backend=redis -> Lua fixed-window counters in Redis
    rate_limit_backend=memory -> lock-guarded dict

Usage:
    container = build_container(get_settings())
    await container.init()
    ...
    await container.close()
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from redis.asyncio import Redis
from redis.exceptions import RedisError
from uuid_extensions import uuid7

from gatehouse.application.services import (
    AdminAuthenticator,
    AdminAuthFacade,
    OtpService,
    SessionStore,
    TwoFactorGate,
)
from gatehouse.core.config import Settings
from gatehouse.core.enums import RateLimitBackend, StorageBackend
from gatehouse.domain.entities import AdminUser
from gatehouse.domain.enums import AdminRole
from gatehouse.infrastructure.audit import AuditLogger
from gatehouse.infrastructure.email import LoggingEmailAdapter
from gatehouse.infrastructure.logging import create_logger
from gatehouse.infrastructure.memory import (
    MemoryAdminUserRepository,
    MemoryAuditStore,
    MemoryOtpChallengeRepository,
    MemorySessionRepository,
)
from gatehouse.infrastructure.persistence import Database
from gatehouse.infrastructure.persistence.repositories import (
    DatabaseAuditStore,
    SqlAdminUserRepository,
    SqlOtpChallengeRepository,
    SqlSessionRepository,
)
from gatehouse.infrastructure.rate_limit import (
    FixedWindowRateLimiter,
    MemoryFixedWindowStorage,
    RedisFixedWindowStorage,
)
from gatehouse.infrastructure.security import (
    BcryptPasswordService,
    CsrfTokenManager,
    OtpCodeHasher,
)

if TYPE_CHECKING:
    from gatehouse.domain.protocols import (
        AdminUserRepository,
        AuditStoreProtocol,
        EmailProtocol,
        OtpChallengeRepository,
        RateLimitStorageProtocol,
        SessionRepository,
    )


class Container:
    """Owns every long-lived object of the process.

    Attributes:
        settings: The settings the container was built from.
        logger: Shared structured logger.
        database: SQLAlchemy database (None with the memory backend).
        redis: Redis client (None with the memory rate-limit backend).
        session_store, two_factor_gate, csrf, rate_limiter, otp_service,
        audit, admin_authenticator, admin_auth: Services used by the API.
    """

    def __init__(
        self, settings: Settings, *, email: EmailProtocol | None = None
    ) -> None:
        self.settings = settings
        self.logger = create_logger(settings)
        timeout = settings.store_timeout_seconds

        self.database: Database | None = None
        self.session_repository: SessionRepository
        self.otp_repository: OtpChallengeRepository
        self.admin_repository: AdminUserRepository
        self.audit_store: AuditStoreProtocol
        if settings.storage_backend is StorageBackend.DATABASE:
            self.database = Database(
                settings.database_url,
                echo=settings.db_echo,
                command_timeout=timeout,
            )
            self.session_repository = SqlSessionRepository(self.database)
            self.otp_repository = SqlOtpChallengeRepository(self.database)
            self.admin_repository = SqlAdminUserRepository(self.database)
            self.audit_store = DatabaseAuditStore(self.database)
        else:
            self.session_repository = MemorySessionRepository()
            self.otp_repository = MemoryOtpChallengeRepository()
            self.admin_repository = MemoryAdminUserRepository()
            self.audit_store = MemoryAuditStore()

        self.redis: Redis | None = None
        self.rate_limit_storage: RateLimitStorageProtocol
        if settings.rate_limit_backend is RateLimitBackend.REDIS:
            self.redis = Redis.from_url(
                settings.redis_url,
                socket_connect_timeout=timeout,
                socket_timeout=timeout,
            )
            self.rate_limit_storage = RedisFixedWindowStorage(redis_client=self.redis)
        else:
            self.rate_limit_storage = MemoryFixedWindowStorage()

        self.password_service = BcryptPasswordService(settings.bcrypt_rounds)
        self.email: EmailProtocol = email or LoggingEmailAdapter(logger=self.logger)

        self.rate_limiter = FixedWindowRateLimiter(
            storage=self.rate_limit_storage, logger=self.logger
        )
        self.csrf = CsrfTokenManager(ttl_seconds=settings.csrf_token_ttl_seconds)
        self.audit = AuditLogger(
            store=self.audit_store,
            logger=self.logger,
            timeout_seconds=timeout,
            fallback_capacity=settings.audit_fallback_capacity,
        )
        self.session_store = SessionStore(
            repository=self.session_repository,
            logger=self.logger,
            admin_ttl=timedelta(days=settings.admin_session_ttl_days),
            user_ttl=timedelta(days=settings.user_session_ttl_days),
            timeout_seconds=timeout,
        )
        self.otp_service = OtpService(
            repository=self.otp_repository,
            codes=OtpCodeHasher(
                secret_key=settings.secret_key,
                code_length=settings.otp_code_length,
            ),
            email=self.email,
            logger=self.logger,
            ttl=timedelta(minutes=settings.otp_ttl_minutes),
            max_attempts=settings.otp_max_attempts,
            timeout_seconds=timeout,
        )
        self.two_factor_gate = TwoFactorGate(
            otp_service=self.otp_service,
            session_store=self.session_store,
            logger=self.logger,
        )
        self.admin_authenticator = AdminAuthenticator(
            repository=self.admin_repository,
            password_hasher=self.password_service,
            logger=self.logger,
            timeout_seconds=timeout,
        )
        self.admin_auth = AdminAuthFacade(
            session_store=self.session_store,
            repository=self.admin_repository,
            logger=self.logger,
            timeout_seconds=timeout,
        )

    async def init(self) -> None:
        """Prepare store handles.

        Creates tables outside production (migrations own production
        schemas), preloads the rate-limit Lua script and creates the
        bootstrap admin if configured.
        """
        if self.database is not None and (
            self.settings.is_development or self.settings.is_testing
        ):
            await self.database.create_all()

        if isinstance(self.rate_limit_storage, RedisFixedWindowStorage):
            try:
                await self.rate_limit_storage.load_scripts()
            except (RedisError, OSError) as exc:
                # Loaded again on first use; rate limiting fails open meanwhile.
                self.logger.warning(
                    "Rate limit script preload failed",
                    error_type=type(exc).__name__,
                )

        await self._bootstrap_admin()

        self.logger.info(
            "Container initialised",
            environment=self.settings.environment.value,
            storage_backend=self.settings.storage_backend.value,
            rate_limit_backend=self.settings.rate_limit_backend.value,
        )

    async def close(self) -> None:
        """Release connections. Safe to call once at shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
        if self.database is not None:
            await self.database.close()
        self.logger.info("Container closed")

    async def _bootstrap_admin(self) -> None:
        email = self.settings.bootstrap_admin_email
        password = self.settings.bootstrap_admin_password
        if not email or password is None:
            return
        if await self.admin_repository.find_by_email(email) is not None:
            return
        admin = AdminUser(
            id=uuid7(),
            email=email.strip().lower(),
            full_name="Administrator",
            role=AdminRole.SUPER_ADMIN,
            password_hash=self.password_service.hash_password(
                password.get_secret_value()
            ),
        )
        await self.admin_repository.save(admin)
        self.logger.info("Bootstrap admin created", admin_id=str(admin.id))


def build_container(
    settings: Settings, *, email: EmailProtocol | None = None
) -> Container:
    """Build the container for ``settings``.

    Args:
        settings: Application settings.
        email: Optional email adapter override (tests inject doubles here).
    """
    return Container(settings, email=email)
