"""Fixtures for HTTP tests through the FastAPI app.

Every test gets:
- a TestClient over ``src.main.app`` (lifespan not started, so no tables
  are created and no Redis connection is opened)
- a permissive rate limiter (all tiers disabled)
- a user repository that knows ``dashboard_user``
- an authenticator that accepts ``VALID_KEY`` as ``tenant_key``

Tests override single handler factories on top of these.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fakeredis import FakeAsyncRedis
from fastapi.testclient import TestClient
from uuid_extensions import uuid7

from src.application.dtos.api_key_dtos import AuthenticatedApiKey
from src.core.container import (
    get_api_key_authenticator,
    get_rate_limit,
    get_user_repository,
)
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Success
from src.domain.entities.user import User
from src.domain.enums import RateLimitTier
from src.domain.value_objects.rate_limit_rule import RateLimitRule
from src.infrastructure.rate_limit import FixedWindowAdapter, RedisStorage
from src.main import app

VALID_KEY = "bk_valid-test-key"


class StubAuthenticator:
    """Accepts exactly one key."""

    def __init__(self, api_key: AuthenticatedApiKey) -> None:
        self.api_key = api_key
        self.calls: list[tuple[str | None, str | None]] = []

    async def authenticate(self, presented_key, *, client_ip):
        self.calls.append((presented_key, client_ip))
        if presented_key == VALID_KEY:
            return Success(value=self.api_key)
        return Failure(
            error=AuthenticationError(code=ErrorCode.API_KEY_INVALID, message="Invalid API key")
        )


@pytest.fixture
def dashboard_user() -> User:
    return User(id=uuid7(), email="owner@example.com")


@pytest.fixture
def tenant_key(dashboard_user) -> AuthenticatedApiKey:
    return AuthenticatedApiKey(key_id=uuid7(), user_id=dashboard_user.id, app_id=uuid7())


@pytest.fixture
def user_headers(dashboard_user) -> dict[str, str]:
    return {"X-User-Id": str(dashboard_user.id)}


@pytest.fixture
def key_headers() -> dict[str, str]:
    return {"X-API-Key": VALID_KEY}


@pytest.fixture
def authenticator(tenant_key) -> StubAuthenticator:
    return StubAuthenticator(tenant_key)


@pytest.fixture
def client(dashboard_user, authenticator):
    user_repo = AsyncMock()
    user_repo.find_by_id.side_effect = lambda user_id: (
        dashboard_user if user_id == dashboard_user.id else None
    )
    permissive = FixedWindowAdapter(
        storage=RedisStorage(redis_client=FakeAsyncRedis()),
        rules={
            tier: RateLimitRule(max_requests=1, window_ms=60_000, enabled=False)
            for tier in RateLimitTier
        },
        logger=MagicMock(),
    )

    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_api_key_authenticator] = lambda: authenticator
    app.dependency_overrides[get_rate_limit] = lambda: permissive
    yield TestClient(app)
    app.dependency_overrides.clear()
