"""Pytest configuration shared by unit, integration and API tests.

Provides:
1. fakeredis-backed Redis fixtures (Lua enabled) for store tests
2. A MagicMock logger satisfying LoggerProtocol
3. Entity factories for events, apps and API keys
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import MagicMock
from uuid import UUID

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis
from uuid_extensions import uuid7

from src.domain.entities.api_key import ApiKey
from src.domain.entities.app import App
from src.domain.entities.event import Event
from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter
from src.infrastructure.security.api_key_service import ApiKeyService


# =============================================================================
# Redis
# =============================================================================


@pytest_asyncio.fixture
async def redis_client():
    """In-memory Redis speaking bytes, like the production pool."""
    client = FakeAsyncRedis(decode_responses=False)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def redis_adapter(redis_client) -> RedisAdapter:
    return RedisAdapter(redis_client=redis_client)


@pytest.fixture
def cache_keys() -> CacheKeys:
    return CacheKeys(prefix="test")


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double; bind() returns the same mock so calls stay visible."""
    logger = MagicMock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def trusted_proxy(monkeypatch):
    """Honour X-Forwarded-For / X-Real-IP for the duration of a test."""
    from src.core.config import settings

    monkeypatch.setattr(settings, "trust_forwarded_ip", True)


# =============================================================================
# Entity factories
# =============================================================================


def make_event(
    *,
    api_key_id: UUID,
    event_type: str = "click",
    tracking_user_id: str | None = None,
    device: str | None = None,
    timestamp: datetime | None = None,
    ip_address: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Event:
    return Event(
        id=uuid7(),
        api_key_id=api_key_id,
        event_type=event_type,
        url="https://example.com/pricing",
        timestamp=timestamp or datetime.now(UTC),
        device=device,
        ip_address=ip_address,
        tracking_user_id=tracking_user_id,
        metadata=metadata or {},
    )


def make_app(*, user_id: UUID, name: str = "Marketing site") -> App:
    return App(id=uuid7(), user_id=user_id, name=name, url="https://example.com")


def make_api_key(
    *,
    user_id: UUID,
    app_id: UUID,
    plaintext: str | None = None,
    is_active: bool = True,
    expires_at: datetime | None = None,
    ip_restrictions: list[str] | None = None,
) -> ApiKey:
    """API key entity; hashes ``plaintext`` when given."""
    secret = plaintext or ApiKeyService().generate_key()[0]
    return ApiKey(
        id=uuid7(),
        user_id=user_id,
        app_id=app_id,
        key_hash=ApiKeyService.hash_key(secret),
        key_prefix=secret[:10],
        expires_at=expires_at or datetime.now(UTC) + timedelta(days=30),
        is_active=is_active,
        ip_restrictions=ip_restrictions or [],
    )


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests against Redis or PostgreSQL"
    )
    config.addinivalue_line("markers", "api: HTTP tests through the FastAPI app")
