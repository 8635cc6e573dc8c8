"""Integration tests for SummaryCache on fakeredis.

Covers the read-through contract: round trips, expiry, per-user and
per-app invalidation, and degradation when the store fails.
"""

import asyncio
from datetime import date
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from src.infrastructure.cache.redis_adapter import RedisAdapter
from src.infrastructure.cache.summary_cache import SummaryCache

PAYLOAD = {
    "event": "click",
    "count": 3,
    "uniqueUsers": 2,
    "deviceData": {"mobile": 2, "desktop": 1},
}


@pytest.fixture
def summary_cache(redis_adapter, cache_keys, mock_logger) -> SummaryCache:
    return SummaryCache(cache=redis_adapter, keys=cache_keys, logger=mock_logger, ttl_seconds=60)


@pytest.fixture
def user_id() -> UUID:
    return uuid7()


def _fingerprint(cache: SummaryCache, user_id: UUID, event: str = "click", app_id=None) -> str:
    return cache.fingerprint(
        user_id=user_id,
        event_type=event,
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 7),
        app_id=app_id,
    )


@pytest.mark.integration
class TestSummaryCacheRoundTrip:
    async def test_put_then_get(self, summary_cache, user_id):
        key = _fingerprint(summary_cache, user_id)

        assert await summary_cache.put(key, PAYLOAD) is True
        assert await summary_cache.get(key) == PAYLOAD

    async def test_miss_is_none(self, summary_cache, user_id):
        assert await summary_cache.get(_fingerprint(summary_cache, user_id)) is None

    async def test_entry_expires_after_ttl(self, summary_cache, user_id):
        key = _fingerprint(summary_cache, user_id)
        await summary_cache.put(key, PAYLOAD, ttl_seconds=1)

        await asyncio.sleep(1.1)

        assert await summary_cache.get(key) is None

    async def test_delete(self, summary_cache, user_id):
        key = _fingerprint(summary_cache, user_id)
        await summary_cache.put(key, PAYLOAD)

        assert await summary_cache.delete(key) is True
        assert await summary_cache.get(key) is None


@pytest.mark.integration
class TestSummaryCacheInvalidation:
    async def test_invalidate_user_spares_other_users(self, summary_cache, user_id):
        other_user = uuid7()
        mine = [_fingerprint(summary_cache, user_id, event) for event in ("click", "signup")]
        theirs = _fingerprint(summary_cache, other_user)
        for key in [*mine, theirs]:
            await summary_cache.put(key, PAYLOAD)

        deleted = await summary_cache.invalidate_user(user_id)

        assert deleted == 2
        assert await summary_cache.get(theirs) == PAYLOAD

    async def test_invalidate_by_event_type(self, summary_cache, user_id):
        click = _fingerprint(summary_cache, user_id, "click")
        signup = _fingerprint(summary_cache, user_id, "signup")
        await summary_cache.put(click, PAYLOAD)
        await summary_cache.put(signup, PAYLOAD)

        await summary_cache.invalidate_user(user_id, event_type="click")

        assert await summary_cache.get(click) is None
        assert await summary_cache.get(signup) == PAYLOAD

    async def test_invalidate_by_app_includes_unscoped_entries(self, summary_cache, user_id):
        app_id = uuid7()
        other_app = uuid7()
        scoped = _fingerprint(summary_cache, user_id, app_id=app_id)
        unscoped = _fingerprint(summary_cache, user_id)
        other = _fingerprint(summary_cache, user_id, app_id=other_app)
        for key in (scoped, unscoped, other):
            await summary_cache.put(key, PAYLOAD)

        deleted = await summary_cache.invalidate_user(user_id, app_id=app_id)

        assert deleted == 2
        assert await summary_cache.get(other) == PAYLOAD

    async def test_glob_characters_in_event_type_are_literal(self, summary_cache, user_id):
        literal = _fingerprint(summary_cache, user_id, "a*")
        lookalike = _fingerprint(summary_cache, user_id, "abc")
        await summary_cache.put(literal, PAYLOAD)
        await summary_cache.put(lookalike, PAYLOAD)

        await summary_cache.invalidate_user(user_id, event_type="a*")

        assert await summary_cache.get(literal) is None
        assert await summary_cache.get(lookalike) == PAYLOAD


@pytest.mark.integration
class TestSummaryCacheDegradation:
    @pytest.fixture
    def broken_cache(self, cache_keys, mock_logger) -> SummaryCache:
        client = AsyncMock()
        for method in ("get", "setex", "delete"):
            getattr(client, method).side_effect = ConnectionError("redis down")
        client.scan_iter = MagicMock(side_effect=ConnectionError("redis down"))
        return SummaryCache(
            cache=RedisAdapter(redis_client=client), keys=cache_keys, logger=mock_logger
        )

    async def test_failures_look_like_misses(self, broken_cache, mock_logger, user_id):
        key = _fingerprint(broken_cache, user_id)

        assert await broken_cache.get(key) is None
        assert await broken_cache.put(key, PAYLOAD) is False
        assert await broken_cache.delete(key) is False
        assert mock_logger.warning.call_count == 3

    async def test_invalidation_failure_reports_zero(self, broken_cache, user_id):
        assert await broken_cache.invalidate_user(user_id) == 0
