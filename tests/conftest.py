"""Shared fixtures.

Every test runs against the in-memory backends: no database, no Redis.

Fixtures:
    settings        testing Settings (memory backends, bcrypt cost 4)
    logger          Mock LoggerProtocol
    container       Container built from ``settings`` (not initialised)
    client          TestClient around ``create_app(settings, container=...)``
    admin           active ADMIN account (password ``ADMIN_PASSWORD``)
    super_admin     active SUPER_ADMIN account
"""

import asyncio
from collections.abc import Iterator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from gatehouse.core.config import Settings
from gatehouse.core.container import Container, build_container
from gatehouse.core.enums import Environment, RateLimitBackend, StorageBackend
from gatehouse.domain.entities import AdminUser
from gatehouse.domain.enums import AdminRole
from gatehouse.main import create_app
from tests.utils.auth_helpers import ADMIN_PASSWORD, make_admin


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment=Environment.TESTING,
        storage_backend=StorageBackend.MEMORY,
        rate_limit_backend=RateLimitBackend.MEMORY,
        bcrypt_rounds=4,
        secret_key="test-secret-key-0123456789abcdef0123456789abcdef",
        log_level="WARNING",
    )


@pytest.fixture
def logger() -> Mock:
    """LoggerProtocol double; ``bind`` returns itself."""
    mock = Mock()
    mock.bind.return_value = mock
    return mock


@pytest.fixture
def container(settings: Settings) -> Container:
    return build_container(settings)


@pytest.fixture
def client(settings: Settings, container: Container) -> Iterator[TestClient]:
    app = create_app(settings, container=container)
    with TestClient(app) as test_client:
        yield test_client


def _seed(container: Container, admin: AdminUser) -> AdminUser:
    asyncio.run(container.admin_repository.save(admin))
    return admin


@pytest.fixture
def admin(container: Container) -> AdminUser:
    return _seed(
        container,
        make_admin(
            container.password_service,
            email="admin@example.com",
            password=ADMIN_PASSWORD,
        ),
    )


@pytest.fixture
def super_admin(container: Container) -> AdminUser:
    return _seed(
        container,
        make_admin(
            container.password_service,
            email="root@example.com",
            password=ADMIN_PASSWORD,
            role=AdminRole.SUPER_ADMIN,
        ),
    )
