"""Integration tests for RedisRollingCounters on fakeredis."""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.core.result import Failure
from src.domain.enums import IngestionState
from src.infrastructure.cache.rolling_counters import RedisRollingCounters
from tests.conftest import make_event

MARCH_1 = datetime(2024, 3, 1, 15, tzinfo=UTC)


@pytest.fixture
def counters(redis_adapter, cache_keys, mock_logger) -> RedisRollingCounters:
    return RedisRollingCounters(
        store=redis_adapter, keys=cache_keys, logger=mock_logger, ttl_days=7
    )


@pytest.mark.integration
class TestRollingCounters:
    async def test_counts_events_and_unique_visitors_per_day(self, counters):
        app_id = uuid7()
        key_id = uuid7()
        for user in ("u1", "u1", "u2", None):
            state = await counters.record(
                make_event(api_key_id=key_id, tracking_user_id=user, timestamp=MARCH_1),
                app_id=app_id,
            )
            assert state == IngestionState.COUNTERS_UPDATED

        assert await counters.daily_count(app_id=app_id, event_type="click", day="2024-03-01") == 4
        assert await counters.daily_unique_visitors(app_id=app_id, day="2024-03-01") == 2
        assert await counters.daily_count(app_id=app_id, event_type="click", day="2024-03-02") == 0

    async def test_counters_carry_ttl(self, counters, cache_keys, redis_client):
        app_id = uuid7()
        await counters.record(
            make_event(api_key_id=uuid7(), tracking_user_id="u1", timestamp=MARCH_1),
            app_id=app_id,
        )

        count_ttl = await redis_client.ttl(
            cache_keys.event_count(app_id=app_id, event_type="click", day="2024-03-01")
        )
        visitors_ttl = await redis_client.ttl(
            cache_keys.unique_visitors(app_id=app_id, day="2024-03-01")
        )

        assert 0 < count_ttl <= 7 * 86400
        assert 0 < visitors_ttl <= 7 * 86400

    async def test_apps_are_counted_separately(self, counters):
        first, second = uuid7(), uuid7()
        await counters.record(make_event(api_key_id=uuid7(), timestamp=MARCH_1), app_id=first)

        assert await counters.daily_count(app_id=second, event_type="click", day="2024-03-01") == 0

    async def test_store_failure_is_reported_not_raised(self, cache_keys, mock_logger):
        store = AsyncMock()
        store.increment.return_value = Failure(error=SimpleNamespace(message="redis down"))
        counters = RedisRollingCounters(store=store, keys=cache_keys, logger=mock_logger)

        state = await counters.record(make_event(api_key_id=uuid7()), app_id=uuid7())

        assert state == IngestionState.COUNTERS_FAILED
        mock_logger.warning.assert_called_once()
