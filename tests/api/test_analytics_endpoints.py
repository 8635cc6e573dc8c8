"""API tests for analytics endpoints.

Tests:
- GET /api/v1/analytics/event-summary (camelCase payload, query mapping)
- GET /api/v1/analytics/user-stats (API key authenticated)
- DELETE /api/v1/analytics/cache
- Failure mapping (400 invalid range, 404 foreign app / unknown credentials)
"""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from uuid_extensions import uuid7

from src.application.dtos.analytics_dtos import (
    CacheInvalidationResult,
    EventSummaryResult,
    UserStatsResult,
)
from src.core.container import (
    get_event_summary_handler,
    get_invalidate_analytics_cache_handler,
    get_user_stats_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import NotFoundError, ValidationError
from src.core.result import Failure, Success
from src.domain.value_objects.analytics import (
    DeviceBreakdown,
    DeviceDetails,
    EventSummary,
    TopEvent,
    UserStats,
)
from src.main import app

SUMMARY_URL = "/api/v1/analytics/event-summary"
USER_STATS_URL = "/api/v1/analytics/user-stats"
CACHE_URL = "/api/v1/analytics/cache"


def _summary_result(*, cached: bool = False, app_id=None) -> EventSummaryResult:
    return EventSummaryResult(
        summary=EventSummary(
            event_type="click",
            count=3,
            unique_users=2,
            device_data=DeviceBreakdown(mobile=2, desktop=1),
        ),
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 7),
        app_id=app_id,
        cached=cached,
    )


@pytest.fixture
def summary_handler():
    handler = MagicMock()
    handler.handle = AsyncMock(return_value=Success(value=_summary_result()))
    app.dependency_overrides[get_event_summary_handler] = lambda: handler
    yield handler
    app.dependency_overrides.pop(get_event_summary_handler, None)


@pytest.fixture
def stats_handler():
    handler = MagicMock()
    app.dependency_overrides[get_user_stats_handler] = lambda: handler
    yield handler
    app.dependency_overrides.pop(get_user_stats_handler, None)


@pytest.fixture
def invalidate_handler():
    handler = MagicMock()
    handler.handle = AsyncMock(return_value=Success(value=CacheInvalidationResult(deleted=4)))
    app.dependency_overrides[get_invalidate_analytics_cache_handler] = lambda: handler
    yield handler
    app.dependency_overrides.pop(get_invalidate_analytics_cache_handler, None)


# =============================================================================
# Event summary
# =============================================================================


@pytest.mark.api
class TestEventSummary:
    def test_returns_camel_case_summary(self, client, user_headers, summary_handler):
        response = client.get(
            SUMMARY_URL,
            params={"event": "click", "startDate": "2024-03-01", "endDate": "2024-03-07"},
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "event": "click",
            "count": 3,
            "uniqueUsers": 2,
            "deviceData": {"mobile": 2, "desktop": 1},
            "startDate": "2024-03-01",
            "endDate": "2024-03-07",
            "cached": False,
        }

    def test_query_parameters_reach_handler(
        self, client, user_headers, summary_handler, dashboard_user
    ):
        app_id = uuid7()

        client.get(
            SUMMARY_URL,
            params={"event": "click", "app_id": str(app_id), "bypassCache": "true"},
            headers=user_headers,
        )

        query = summary_handler.handle.await_args.args[0]
        assert query.user_id == dashboard_user.id
        assert query.event_type == "click"
        assert query.app_id == app_id
        assert query.bypass_cache is True
        assert query.start_date is None
        assert query.end_date is None

    def test_cached_flag_is_reported(self, client, user_headers, summary_handler):
        summary_handler.handle.return_value = Success(value=_summary_result(cached=True))

        response = client.get(SUMMARY_URL, params={"event": "click"}, headers=user_headers)

        assert response.json()["cached"] is True

    def test_event_is_required(self, client, user_headers, summary_handler):
        response = client.get(SUMMARY_URL, headers=user_headers)

        assert response.status_code == 422
        summary_handler.handle.assert_not_awaited()

    def test_malformed_date_is_422(self, client, user_headers, summary_handler):
        response = client.get(
            SUMMARY_URL,
            params={"event": "click", "startDate": "03/01/2024"},
            headers=user_headers,
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "query.startDate"

    def test_inverted_range_is_400(self, client, user_headers, summary_handler):
        summary_handler.handle.return_value = Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_DATE_RANGE,
                message="startDate must not be after endDate",
                field="startDate",
            )
        )

        response = client.get(
            SUMMARY_URL,
            params={"event": "click", "startDate": "2024-03-10", "endDate": "2024-03-01"},
            headers=user_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "startDate must not be after endDate"
        assert body["errors"][0]["field"] == "startDate"

    def test_foreign_app_is_404(self, client, user_headers, summary_handler):
        summary_handler.handle.return_value = Failure(
            error=NotFoundError(
                code=ErrorCode.APP_NOT_FOUND,
                message="App not found",
                resource_type="App",
                resource_id="x",
            )
        )

        response = client.get(
            SUMMARY_URL, params={"event": "click", "app_id": str(uuid7())}, headers=user_headers
        )

        assert response.status_code == 404

    def test_requires_user(self, client, summary_handler):
        response = client.get(SUMMARY_URL, params={"event": "click"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_unknown_user_is_401(self, client, summary_handler):
        response = client.get(
            SUMMARY_URL, params={"event": "click"}, headers={"X-User-Id": str(uuid7())}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Unknown user"

    def test_malformed_user_id_is_401(self, client, summary_handler):
        response = client.get(
            SUMMARY_URL, params={"event": "click"}, headers={"X-User-Id": "not-a-uuid"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid user id"


# =============================================================================
# User stats
# =============================================================================


@pytest.mark.api
class TestUserStats:
    def test_returns_stats(self, client, key_headers, stats_handler, tenant_key):
        stats_handler.handle = AsyncMock(
            return_value=Success(
                value=UserStatsResult(
                    stats=UserStats(
                        tracking_user_id="u1",
                        total_events=7,
                        device_details=DeviceDetails(
                            device="mobile", browser="Firefox", os="Android", screen_size="390x844"
                        ),
                        ip_address="203.0.113.7",
                        last_seen=datetime(2024, 3, 5, 9, 30, tzinfo=UTC),
                        top_events=(
                            TopEvent(event_type="click", count=5),
                            TopEvent(event_type="scroll", count=2),
                        ),
                    )
                )
            )
        )

        response = client.get(USER_STATS_URL, params={"userId": "u1"}, headers=key_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == "u1"
        assert body["totalEvents"] == 7
        assert body["deviceDetails"]["screenSize"] == "390x844"
        assert body["ipAddress"] == "203.0.113.7"
        assert body["topEvents"] == [
            {"event": "click", "count": 5},
            {"event": "scroll", "count": 2},
        ]
        query = stats_handler.handle.await_args.args[0]
        assert query.api_key_id == tenant_key.key_id
        assert query.tracking_user_id == "u1"

    def test_user_id_is_required(self, client, key_headers, stats_handler):
        stats_handler.handle = AsyncMock()

        response = client.get(USER_STATS_URL, headers=key_headers)

        assert response.status_code == 422
        stats_handler.handle.assert_not_awaited()

    def test_unknown_credentials_is_404(self, client, key_headers, stats_handler):
        stats_handler.handle = AsyncMock(
            return_value=Failure(
                error=NotFoundError(
                    code=ErrorCode.CREDENTIALS_NOT_FOUND,
                    message="No API keys found for this account",
                    resource_type="ApiKey",
                    resource_id="x",
                )
            )
        )

        response = client.get(USER_STATS_URL, params={"userId": "u1"}, headers=key_headers)

        assert response.status_code == 404

    def test_requires_api_key(self, client, stats_handler):
        response = client.get(USER_STATS_URL, params={"userId": "u1"})

        assert response.status_code == 401


# =============================================================================
# Cache invalidation
# =============================================================================


@pytest.mark.api
class TestInvalidateSummaryCache:
    def test_returns_deleted_count(
        self, client, user_headers, invalidate_handler, dashboard_user
    ):
        response = client.delete(CACHE_URL, params={"event": "click"}, headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": 4}
        command = invalidate_handler.handle.await_args.args[0]
        assert command.user_id == dashboard_user.id
        assert command.event_type == "click"
        assert command.app_id is None

    def test_requires_user(self, client, invalidate_handler):
        response = client.delete(CACHE_URL)

        assert response.status_code == 401
        invalidate_handler.handle.assert_not_awaited()
