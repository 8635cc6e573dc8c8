"""System handlers.

Handlers:
    health - Liveness plus store reachability
"""

from typing import Annotated

from fastapi import Depends

from src.core.config import settings
from src.core.container import get_cache, get_database
from src.core.result import Success
from src.domain.protocols.cache_protocol import CacheProtocol
from src.infrastructure.persistence.database import Database
from src.schemas.common_schemas import HealthResponse


async def health(
    cache: Annotated[CacheProtocol, Depends(get_cache)],
    database: Annotated[Database, Depends(get_database)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers.

    GET /api/v1/health → 200 OK

    Always answers 200; a store that cannot be reached turns the status to
    "degraded" because the service keeps serving without the cache.
    """
    redis_ok = isinstance(await cache.ping(), Success)
    database_ok = await database.check_connection()

    checks = {
        "redis": "ok" if redis_ok else "unavailable",
        "database": "ok" if database_ok else "unavailable",
    }
    return HealthResponse(
        status="healthy" if redis_ok and database_ok else "degraded",
        version=settings.app_version,
        checks=checks,
    )
