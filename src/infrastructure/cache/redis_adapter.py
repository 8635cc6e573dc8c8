"""Redis adapter implementing CacheProtocol and CounterStoreProtocol.

Wraps an async Redis client and exposes the operations the analytics core
needs from its shared store: plain and JSON values with TTL, atomic
counters, visitor sets, expiry and pattern deletion.

Architecture:
- Implements the protocols without inheritance (structural typing)
- Maps Redis exceptions to CacheError
- Returns Result types for all operations; callers decide how to degrade
"""

import json
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError, TimeoutError as RedisTimeoutError

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError

# Keys per DEL call during pattern deletion
_DELETE_BATCH_SIZE = 500


def _cache_error(
    operation: str,
    infrastructure_code: InfrastructureErrorCode,
    exc: Exception,
    **details: Any,
) -> CacheError:
    if isinstance(exc, RedisTimeoutError):
        infrastructure_code = InfrastructureErrorCode.CACHE_TIMEOUT
    message = (
        f"Redis {operation} failed"
        if isinstance(exc, RedisError)
        else f"Unexpected error during Redis {operation}"
    )
    return CacheError(
        code=ErrorCode.CACHE_UNAVAILABLE,
        infrastructure_code=infrastructure_code,
        message=message,
        details={**details, "error": str(exc), "type": type(exc).__name__},
    )


class RedisAdapter:
    """Redis implementation of the cache and counter store protocols.

    Attributes:
        _redis: Async Redis client. Connection and socket timeouts are
            configured on its pool, so every call here is bounded.
    """

    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    @property
    def client(self) -> Redis:
        """Underlying client, for components that run Lua scripts."""
        return self._redis

    async def get(self, key: str) -> Result[str | None, CacheError]:
        """Get a string value.

        Returns:
            Success(None) on miss, Success(str) on hit, Failure on store error.
        """
        try:
            value = await self._redis.get(key)
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "get", InfrastructureErrorCode.CACHE_GET_ERROR, e, key=key
                )
            )
        if value is None:
            return Success(value=None)
        decoded = value.decode("utf-8") if isinstance(value, bytes) else value
        return Success(value=decoded)

    async def get_json(self, key: str) -> Result[dict[str, Any] | None, CacheError]:
        """Get and parse a JSON object value."""
        match await self.get(key):
            case Success(value=None):
                return Success(value=None)
            case Success(value=raw):
                try:
                    return Success(value=json.loads(raw))
                except json.JSONDecodeError as e:
                    return Failure(
                        error=_cache_error(
                            "decode",
                            InfrastructureErrorCode.CACHE_SERIALIZATION_ERROR,
                            e,
                            key=key,
                        )
                    )
            case Failure(error=err):
                return Failure(error=err)

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """Store a string value.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Seconds to live (None = no expiration).
        """
        try:
            if ttl is not None:
                await self._redis.setex(key, ttl, value)
            else:
                await self._redis.set(key, value)
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "set", InfrastructureErrorCode.CACHE_SET_ERROR, e, key=key, ttl=ttl
                )
            )
        return Success(value=None)

    async def set_json(
        self,
        key: str,
        value: dict[str, Any],
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """Serialize ``value`` to JSON and store it."""
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            return Failure(
                error=_cache_error(
                    "encode",
                    InfrastructureErrorCode.CACHE_SERIALIZATION_ERROR,
                    e,
                    key=key,
                )
            )
        return await self.set(key, serialized, ttl)

    async def delete(self, key: str) -> Result[bool, CacheError]:
        """Delete a key.

        Returns:
            Success(True) if the key existed.
        """
        try:
            deleted_count = await self._redis.delete(key)
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "delete", InfrastructureErrorCode.CACHE_DELETE_ERROR, e, key=key
                )
            )
        return Success(value=deleted_count > 0)

    async def delete_pattern(self, pattern: str) -> Result[int, CacheError]:
        """Delete every key matching a glob pattern.

        Iterates with SCAN rather than KEYS so a large keyspace never blocks
        the server. Keys created while the scan runs may survive.

        Returns:
            Success with the number of keys removed.
        """
        deleted = 0
        batch: list[Any] = []
        try:
            async for key in self._redis.scan_iter(match=pattern, count=_DELETE_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= _DELETE_BATCH_SIZE:
                    deleted += await self._redis.delete(*batch)
                    batch = []
            if batch:
                deleted += await self._redis.delete(*batch)
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "delete_pattern",
                    InfrastructureErrorCode.CACHE_DELETE_ERROR,
                    e,
                    pattern=pattern,
                    deleted=deleted,
                )
            )
        return Success(value=deleted)

    async def expire(self, key: str, seconds: int) -> Result[bool, CacheError]:
        """Set a key's expiration.

        Returns:
            Success(False) if the key does not exist.
        """
        try:
            was_set = await self._redis.expire(key, seconds)
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "expire",
                    InfrastructureErrorCode.CACHE_SET_ERROR,
                    e,
                    key=key,
                    seconds=seconds,
                )
            )
        return Success(value=bool(was_set))

    async def ttl(self, key: str) -> Result[int | None, CacheError]:
        """Remaining seconds to live, None when missing or persistent."""
        try:
            ttl_value = await self._redis.ttl(key)
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "ttl", InfrastructureErrorCode.CACHE_GET_ERROR, e, key=key
                )
            )
        # -2: key missing, -1: no expiration
        if ttl_value < 0:
            return Success(value=None)
        return Success(value=ttl_value)

    async def increment(
        self,
        key: str,
        amount: int = 1,
        ttl: int | None = None,
    ) -> Result[int, CacheError]:
        """Atomically increment a counter, optionally refreshing its TTL.

        INCRBY and EXPIRE are sent in one MULTI/EXEC pipeline. The increment
        itself never loses updates under concurrency.

        Returns:
            Success with the value after increment.
        """
        try:
            if ttl is None:
                new_value = await self._redis.incrby(key, amount)
            else:
                async with self._redis.pipeline(transaction=True) as pipe:
                    pipe.incrby(key, amount)
                    pipe.expire(key, ttl)
                    new_value, _ = await pipe.execute()
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "increment",
                    InfrastructureErrorCode.CACHE_SET_ERROR,
                    e,
                    key=key,
                    amount=amount,
                )
            )
        return Success(value=int(new_value))

    async def add_to_set(
        self,
        key: str,
        *members: str,
        ttl: int | None = None,
    ) -> Result[int, CacheError]:
        """Add members to a set, optionally refreshing its TTL.

        Returns:
            Success with the number of members that were newly added.
        """
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.sadd(key, *members)
                if ttl is not None:
                    pipe.expire(key, ttl)
                results = await pipe.execute()
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "add_to_set", InfrastructureErrorCode.CACHE_SET_ERROR, e, key=key
                )
            )
        return Success(value=int(results[0]))

    async def set_size(self, key: str) -> Result[int, CacheError]:
        """Cardinality of a set (0 when missing)."""
        try:
            size = await self._redis.scard(key)
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "set_size", InfrastructureErrorCode.CACHE_GET_ERROR, e, key=key
                )
            )
        return Success(value=int(size))

    async def ping(self) -> Result[bool, CacheError]:
        """Check Redis connectivity (health check)."""
        try:
            await self._redis.ping()  # type: ignore[misc]
        except Exception as e:
            return Failure(
                error=_cache_error(
                    "ping", InfrastructureErrorCode.CACHE_CONNECTION_ERROR, e
                )
            )
        return Success(value=True)
