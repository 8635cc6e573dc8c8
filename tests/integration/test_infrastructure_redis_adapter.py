"""Integration tests for RedisAdapter on fakeredis.

Covers JSON round-trips, atomic counters, set cardinality, pattern
deletion and error translation into Failure results.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.core.result import Failure, Success
from src.infrastructure.cache.redis_adapter import RedisAdapter


@pytest.mark.integration
class TestRedisAdapterValues:
    async def test_json_round_trip_with_ttl(self, redis_adapter):
        await redis_adapter.set_json("test:json", {"count": 3}, ttl=30)

        assert (await redis_adapter.get_json("test:json")).value == {"count": 3}
        assert 0 < (await redis_adapter.ttl("test:json")).value <= 30

    async def test_missing_key_is_none(self, redis_adapter):
        assert (await redis_adapter.get("test:missing")) == Success(value=None)
        assert (await redis_adapter.ttl("test:missing")) == Success(value=None)

    async def test_corrupt_json_is_a_failure(self, redis_adapter):
        await redis_adapter.set("test:bad", "{not json")

        assert isinstance(await redis_adapter.get_json("test:bad"), Failure)

    async def test_delete_reports_existence(self, redis_adapter):
        await redis_adapter.set("test:gone", "1")

        assert (await redis_adapter.delete("test:gone")).value is True
        assert (await redis_adapter.delete("test:gone")).value is False


@pytest.mark.integration
class TestRedisAdapterCounters:
    async def test_concurrent_increments_are_not_lost(self, redis_adapter):
        await asyncio.gather(
            *(redis_adapter.increment("test:count", 1, ttl=60) for _ in range(50))
        )

        assert (await redis_adapter.get("test:count")).value == "50"
        assert (await redis_adapter.ttl("test:count")).value is not None

    async def test_set_membership_counts_distinct_values(self, redis_adapter):
        await redis_adapter.add_to_set("test:users", "u1", ttl=60)
        await redis_adapter.add_to_set("test:users", "u2", "u1", ttl=60)

        assert (await redis_adapter.set_size("test:users")).value == 2
        assert (await redis_adapter.set_size("test:nobody")).value == 0


@pytest.mark.integration
class TestRedisAdapterPatterns:
    async def test_delete_pattern_removes_only_matches(self, redis_adapter, redis_client):
        for i in range(30):
            await redis_adapter.set(f"test:analytics:summary:u1:e{i}", "x")
        await redis_adapter.set("test:analytics:summary:u2:e0", "x")

        deleted = await redis_adapter.delete_pattern("test:analytics:summary:u1:*")

        assert deleted.value == 30
        assert await redis_client.exists("test:analytics:summary:u2:e0") == 1

    async def test_delete_pattern_without_matches(self, redis_adapter):
        assert (await redis_adapter.delete_pattern("test:nothing:*")).value == 0


@pytest.mark.integration
class TestRedisAdapterErrors:
    async def test_store_errors_become_failures(self):
        broken = AsyncMock()
        broken.get.side_effect = ConnectionError("refused")
        broken.ping.side_effect = ConnectionError("refused")
        adapter = RedisAdapter(redis_client=broken)

        assert isinstance(await adapter.get("k"), Failure)
        assert isinstance(await adapter.ping(), Failure)

    async def test_ping(self, redis_adapter):
        assert (await redis_adapter.ping()) == Success(value=True)
