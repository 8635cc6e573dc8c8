"""API tests for rate limit admission and response headers.

Tests:
- X-RateLimit-Limit / X-RateLimit-Remaining / X-RateLimit-Reset on admitted responses
- The same headers on Problem Details responses of admitted requests
- 429 with Retry-After once the window is used up
- Requests rejected by authentication never consume quota
- Fail-open when the limiter cannot answer

The limiter is an in-memory double of RateLimitProtocol; the Redis window
itself is covered in tests/integration.
"""

from collections import Counter
from unittest.mock import AsyncMock, MagicMock

import pytest
from uuid_extensions import uuid7

from src.application.dtos.event_dtos import RecordedEvent
from src.core.container import (
    get_cache,
    get_database,
    get_event_summary_handler,
    get_rate_limit,
    get_record_event_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Success
from src.domain.enums import RateLimitTier
from src.domain.errors import RateLimitError
from src.domain.value_objects.rate_limit_rule import RateLimitResult, RateLimitRule
from src.main import app

EVENTS_URL = "/api/v1/events"
BODY = {
    "event": "click",
    "url": "https://example.com/",
    "timestamp": "2024-03-01T12:00:00Z",
}


class CountingLimiter:
    """Fixed quota per (tier, identifier) that never resets."""

    def __init__(self, max_requests: int) -> None:
        self.rule = RateLimitRule(
            max_requests=max_requests,
            window_ms=60_000,
            message="Too many data collection requests, please try again later.",
        )
        self.hits: Counter[tuple[RateLimitTier, str]] = Counter()

    def rule_for(self, tier):
        return self.rule

    async def is_allowed(self, *, tier, identifier):
        self.hits[(tier, identifier)] += 1
        used = self.hits[(tier, identifier)]
        if used > self.rule.max_requests:
            return Success(
                value=RateLimitResult(
                    allowed=False,
                    limit=self.rule.max_requests,
                    remaining=0,
                    reset_seconds=42,
                    retry_after=42,
                )
            )
        return Success(
            value=RateLimitResult(
                allowed=True,
                limit=self.rule.max_requests,
                remaining=self.rule.max_requests - used,
                reset_seconds=42,
            )
        )


@pytest.fixture
def record_handler():
    handler = MagicMock()
    handler.handle = AsyncMock(
        side_effect=lambda cmd: Success(
            value=RecordedEvent(event_id=uuid7(), event_type=cmd.event_type, timestamp=cmd.timestamp)
        )
    )
    app.dependency_overrides[get_record_event_handler] = lambda: handler
    yield handler
    app.dependency_overrides.pop(get_record_event_handler, None)


@pytest.fixture
def limiter(client):
    limiter = CountingLimiter(max_requests=2)
    app.dependency_overrides[get_rate_limit] = lambda: limiter
    return limiter


@pytest.mark.api
class TestRateLimitHeaders:
    def test_admitted_response_carries_headers(self, client, key_headers, record_handler, limiter):
        response = client.post(EVENTS_URL, json=BODY, headers=key_headers)

        assert response.status_code == 201
        assert response.headers["X-RateLimit-Limit"] == "2"
        assert response.headers["X-RateLimit-Remaining"] == "1"
        assert response.headers["X-RateLimit-Reset"] == "42"

    def test_error_response_still_carries_headers(self, client, key_headers, limiter):
        handler = MagicMock()
        handler.handle = AsyncMock(
            return_value=Failure(
                error=DomainError(
                    code=ErrorCode.PERSISTENCE_FAILED, message="Failed to save event"
                )
            )
        )
        app.dependency_overrides[get_record_event_handler] = lambda: handler

        response = client.post(EVENTS_URL, json=BODY, headers=key_headers)

        assert response.status_code == 500
        assert response.headers["X-RateLimit-Limit"] == "2"
        assert response.headers["X-RateLimit-Remaining"] == "1"
        assert response.headers["X-RateLimit-Reset"] == "42"

    def test_not_found_response_carries_headers(self, client, user_headers, limiter):
        handler = MagicMock()
        handler.handle = AsyncMock(
            return_value=Failure(
                error=NotFoundError(
                    code=ErrorCode.APP_NOT_FOUND,
                    message="App not found for user",
                    resource_type="App",
                    resource_id="x",
                )
            )
        )
        app.dependency_overrides[get_event_summary_handler] = lambda: handler

        response = client.get(
            "/api/v1/analytics/event-summary",
            params={"event": "click", "app_id": str(uuid7())},
            headers=user_headers,
        )

        assert response.status_code == 404
        assert response.headers["X-RateLimit-Remaining"] == "1"

    def test_denied_after_quota(self, client, key_headers, record_handler, limiter):
        for _ in range(2):
            assert client.post(EVENTS_URL, json=BODY, headers=key_headers).status_code == 201

        response = client.post(EVENTS_URL, json=BODY, headers=key_headers)

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "42"
        assert response.headers["X-RateLimit-Remaining"] == "0"
        body = response.json()
        assert body["status"] == 429
        assert body["detail"] == "Too many data collection requests, please try again later."
        assert record_handler.handle.await_count == 2

    def test_quota_is_counted_per_api_key(
        self, client, key_headers, record_handler, limiter, tenant_key
    ):
        client.post(EVENTS_URL, json=BODY, headers=key_headers)

        assert limiter.hits == Counter({(RateLimitTier.COLLECTION, f"key:{tenant_key.key_id}"): 1})

    def test_unauthenticated_requests_do_not_consume_quota(
        self, client, key_headers, record_handler, limiter
    ):
        for _ in range(3):
            assert client.post(EVENTS_URL, json=BODY).status_code == 401

        assert client.post(EVENTS_URL, json=BODY, headers=key_headers).status_code == 201
        assert sum(limiter.hits.values()) == 1

    def test_dashboard_routes_use_user_identity(self, client, user_headers, limiter, dashboard_user):
        client.get("/api/v1/analytics/event-summary", headers=user_headers)

        assert (RateLimitTier.ANALYTICS, f"user:{dashboard_user.id}") in limiter.hits


@pytest.mark.api
class TestRateLimitFailOpen:
    def test_limiter_error_admits_request(self, client, key_headers, record_handler):
        broken = MagicMock()
        broken.rule_for.return_value = RateLimitRule(max_requests=300, window_ms=60_000)
        broken.is_allowed = AsyncMock(
            return_value=Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_CHECK_FAILED, message="Redis unavailable"
                )
            )
        )
        app.dependency_overrides[get_rate_limit] = lambda: broken

        response = client.post(EVENTS_URL, json=BODY, headers=key_headers)

        assert response.status_code == 201
        record_handler.handle.assert_awaited_once()

    def test_health_is_not_rate_limited(self, client, limiter):
        cache = MagicMock(ping=AsyncMock(return_value=Success(value=True)))
        database = MagicMock(check_connection=AsyncMock(return_value=True))
        app.dependency_overrides[get_cache] = lambda: cache
        app.dependency_overrides[get_database] = lambda: database

        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response.headers
        assert not limiter.hits
