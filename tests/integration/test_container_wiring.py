"""Integration tests for container construction and startup."""

import pytest
from pydantic import SecretStr
from redis.asyncio import Redis

from gatehouse.core.config import Settings
from gatehouse.core.container import build_container
from gatehouse.core.enums import RateLimitBackend, StorageBackend
from gatehouse.core.result import Success
from gatehouse.domain.enums import AdminRole
from gatehouse.infrastructure.memory import MemoryAuditStore, MemorySessionRepository
from gatehouse.infrastructure.persistence import Database
from gatehouse.infrastructure.persistence.repositories import (
    DatabaseAuditStore,
    SqlSessionRepository,
)
from gatehouse.infrastructure.rate_limit import (
    MemoryFixedWindowStorage,
    RedisFixedWindowStorage,
)


@pytest.mark.integration
class TestBackendSelection:
    def test_memory_backends(self, settings: Settings) -> None:
        container = build_container(settings)

        assert container.database is None
        assert container.redis is None
        assert isinstance(container.session_repository, MemorySessionRepository)
        assert isinstance(container.audit_store, MemoryAuditStore)
        assert isinstance(container.rate_limit_storage, MemoryFixedWindowStorage)

    @pytest.mark.asyncio
    async def test_store_backends_are_built_without_connecting(
        self, settings: Settings
    ) -> None:
        """Should create handles lazily; nothing connects before first use."""
        configured = settings.model_copy(
            update={
                "storage_backend": StorageBackend.DATABASE,
                "rate_limit_backend": RateLimitBackend.REDIS,
            }
        )

        container = build_container(configured)
        try:
            assert isinstance(container.database, Database)
            assert isinstance(container.redis, Redis)
            assert isinstance(container.session_repository, SqlSessionRepository)
            assert isinstance(container.audit_store, DatabaseAuditStore)
            assert isinstance(container.rate_limit_storage, RedisFixedWindowStorage)
        finally:
            await container.close()

    def test_services_share_one_logger(self, settings: Settings) -> None:
        container = build_container(settings)

        assert container.rate_limiter._logger is container.logger
        assert container.session_store._logger is container.logger


@pytest.mark.integration
class TestBootstrapAdmin:
    @pytest.mark.asyncio
    async def test_created_on_init(self, settings: Settings) -> None:
        configured = settings.model_copy(
            update={
                "bootstrap_admin_email": "Root@Example.com",
                "bootstrap_admin_password": SecretStr("bootstrap-password"),
            }
        )
        container = build_container(configured)

        await container.init()

        admin = await container.admin_repository.find_by_email("root@example.com")
        assert admin is not None
        assert admin.role is AdminRole.SUPER_ADMIN
        login = await container.admin_authenticator.login(
            "root@example.com", "bootstrap-password"
        )
        assert isinstance(login, Success)

    @pytest.mark.asyncio
    async def test_existing_admin_is_left_alone(self, settings: Settings) -> None:
        configured = settings.model_copy(
            update={
                "bootstrap_admin_email": "root@example.com",
                "bootstrap_admin_password": SecretStr("first"),
            }
        )
        container = build_container(configured)
        await container.init()
        first = await container.admin_repository.find_by_email("root@example.com")

        await container.init()

        again = await container.admin_repository.find_by_email("root@example.com")
        assert again is not None and first is not None
        assert again.id == first.id
        assert again.password_hash == first.password_hash

    @pytest.mark.asyncio
    async def test_skipped_without_password(self, settings: Settings) -> None:
        configured = settings.model_copy(
            update={"bootstrap_admin_email": "root@example.com"}
        )
        container = build_container(configured)

        await container.init()

        assert await container.admin_repository.find_by_email("root@example.com") is None
