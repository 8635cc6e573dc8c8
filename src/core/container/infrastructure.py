"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Redis client (one pool shared by cache, counters and rate limiter)
- Cache and summary cache (Redis)
- Database (PostgreSQL)
- API key service
- Rate limiting (fixed window)
- Background tasks
- Logging (console)

Every singleton is built lazily on first use and released by
``close_infrastructure()`` during application shutdown.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.rate_limit_protocol import RateLimitProtocol
    from src.infrastructure.cache.cache_keys import CacheKeys
    from src.infrastructure.cache.redis_adapter import RedisAdapter
    from src.infrastructure.cache.rolling_counters import RedisRollingCounters
    from src.infrastructure.cache.summary_cache import SummaryCache
    from src.infrastructure.security.api_key_service import ApiKeyService
    from src.infrastructure.tasks.background_task_runner import BackgroundTaskRunner


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_redis_client() -> "Redis":
    """Get the shared Redis client (app-scoped).

    Socket timeouts bound every store call, so an unreachable Redis can
    only delay a request by ``REDIS_SOCKET_TIMEOUT`` seconds.
    """
    from redis.asyncio import ConnectionPool, Redis

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_max_connections,
        decode_responses=False,
        socket_connect_timeout=settings.redis_socket_timeout,
        socket_timeout=settings.redis_socket_timeout,
        retry_on_timeout=False,
        socket_keepalive=True,
    )
    return Redis(connection_pool=pool)


@lru_cache()
def get_cache() -> "RedisAdapter":
    """Get cache client singleton (app-scoped).

    Returns RedisAdapter over the shared pool. It implements both
    CacheProtocol and CounterStoreProtocol.

    Usage:
        # Presentation Layer (FastAPI Depends)
        cache: CacheProtocol = Depends(get_cache)
    """
    from src.infrastructure.cache.redis_adapter import RedisAdapter

    return RedisAdapter(redis_client=get_redis_client())


@lru_cache()
def get_cache_keys() -> "CacheKeys":
    from src.infrastructure.cache.cache_keys import CacheKeys

    return CacheKeys(prefix=settings.redis_key_prefix)


@lru_cache()
def get_summary_cache() -> "SummaryCache":
    """Get analytics summary cache singleton (app-scoped)."""
    from src.infrastructure.cache.summary_cache import SummaryCache

    return SummaryCache(
        cache=get_cache(),
        keys=get_cache_keys(),
        logger=get_logger(),
        ttl_seconds=settings.cache_summary_ttl,
    )


@lru_cache()
def get_rolling_counters() -> "RedisRollingCounters":
    """Get rolling counters singleton (app-scoped)."""
    from src.infrastructure.cache.rolling_counters import RedisRollingCounters

    return RedisRollingCounters(
        store=get_cache(),
        keys=get_cache_keys(),
        logger=get_logger(),
        ttl_days=settings.counter_ttl_days,
    )


@lru_cache()
def get_background_tasks() -> "BackgroundTaskRunner":
    """Get background task runner singleton (app-scoped).

    Used for fire-and-forget work that must never delay a response.
    Drained on shutdown.
    """
    from src.infrastructure.tasks.background_task_runner import BackgroundTaskRunner

    return BackgroundTaskRunner(
        logger=get_logger(),
        max_concurrency=settings.background_task_limit,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session

    Usage:
        @router.post("/events")
        async def record_event(
            session: AsyncSession = Depends(get_db_session)
        ):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_api_key_service() -> "ApiKeyService":
    """Get API key service singleton (app-scoped)."""
    from src.infrastructure.security import ApiKeyService

    return ApiKeyService(expiration_days=settings.api_key_expiration_days)


# ============================================================================
# Rate Limiting (Application-Scoped)
# ============================================================================


@lru_cache()
def get_rate_limit() -> "RateLimitProtocol":
    """Get rate limiter singleton (app-scoped).

    Creates FixedWindowAdapter with:
    - RedisStorage running the fixed-window Lua script on the shared pool
    - One rule per tier built from settings
    - Logger for structured logging

    Fail-Open Design:
        Store errors and timeouts admit the request. Rate limiting must
        never take the service down with Redis.
    """
    from src.infrastructure.rate_limit import (
        FixedWindowAdapter,
        RedisStorage,
        build_rate_limit_rules,
    )

    return FixedWindowAdapter(
        storage=RedisStorage(redis_client=get_redis_client()),
        rules=build_rate_limit_rules(settings),
        logger=get_logger(),
        key_prefix=settings.redis_key_prefix,
        timeout=settings.redis_socket_timeout,
    )


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


# ============================================================================
# Lifecycle
# ============================================================================


async def close_infrastructure() -> None:
    """Release every app-scoped resource that has been created.

    Background tasks are drained first so pending counter updates can still
    reach Redis. Singletons are cleared, so a later call rebuilds them.
    """
    if get_background_tasks.cache_info().currsize:
        await get_background_tasks().drain(timeout=5.0)
    if get_redis_client.cache_info().currsize:
        client = get_redis_client()
        await client.aclose()
        await client.connection_pool.disconnect()
    if get_database.cache_info().currsize:
        await get_database().close()

    for factory in (
        get_redis_client,
        get_cache,
        get_cache_keys,
        get_summary_cache,
        get_rolling_counters,
        get_background_tasks,
        get_database,
        get_api_key_service,
        get_rate_limit,
    ):
        factory.cache_clear()
