"""Read-through cache for analytics summaries.

Key Patterns:
    - {prefix}:analytics:summary:{user}:{event}:{start}:{end}:{app|all} -> JSON

Architecture:
    - Uses CacheProtocol for low-level Redis operations
    - Store failures degrade: a failed read is a miss, a failed write or
      delete is logged and ignored
    - Values carry no version; an entry is authoritative until its TTL ends
      or it is invalidated
"""

from datetime import date
from typing import Any
from uuid import UUID

from src.core.result import Failure, Success
from src.domain.protocols.cache_protocol import CacheProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.cache.cache_keys import CacheKeys

DEFAULT_SUMMARY_TTL = 3600


class SummaryCache:
    """Cache of computed summary payloads.

    Attributes:
        keys: Key builder shared with invalidation.
    """

    def __init__(
        self,
        *,
        cache: CacheProtocol,
        keys: CacheKeys,
        logger: LoggerProtocol,
        ttl_seconds: int = DEFAULT_SUMMARY_TTL,
    ) -> None:
        self._cache = cache
        self.keys = keys
        self._logger = logger
        self._ttl = ttl_seconds

    def fingerprint(
        self,
        *,
        user_id: UUID,
        event_type: str,
        start_date: date,
        end_date: date,
        app_id: UUID | None,
    ) -> str:
        return self.keys.event_summary(
            user_id=user_id,
            event_type=event_type,
            start_date=start_date,
            end_date=end_date,
            app_id=app_id,
        )

    async def get(self, fingerprint: str) -> dict[str, Any] | None:
        """Cached payload, or None on miss or store error."""
        match await self._cache.get_json(fingerprint):
            case Success(value=value):
                return value
            case Failure(error=err):
                self._logger.warning(
                    "summary_cache_get_failed",
                    key=fingerprint,
                    error_message=err.message,
                )
                return None

    async def put(
        self,
        fingerprint: str,
        value: dict[str, Any],
        ttl_seconds: int | None = None,
    ) -> bool:
        """Store a payload; returns False when the store rejected it."""
        ttl = ttl_seconds if ttl_seconds is not None else self._ttl
        match await self._cache.set_json(fingerprint, value, ttl=ttl):
            case Success():
                return True
            case Failure(error=err):
                self._logger.warning(
                    "summary_cache_put_failed",
                    key=fingerprint,
                    error_message=err.message,
                )
                return False

    async def delete(self, fingerprint: str) -> bool:
        """Drop one entry; True when something was removed."""
        match await self._cache.delete(fingerprint):
            case Success(value=existed):
                return existed
            case Failure(error=err):
                self._logger.warning(
                    "summary_cache_delete_failed",
                    key=fingerprint,
                    error_message=err.message,
                )
                return False

    async def invalidate(self, pattern: str) -> int:
        """Delete every entry matching a glob; returns how many were removed."""
        match await self._cache.delete_pattern(pattern):
            case Success(value=deleted):
                return deleted
            case Failure(error=err):
                self._logger.warning(
                    "summary_cache_invalidate_failed",
                    pattern=pattern,
                    error_message=err.message,
                )
                return 0

    async def invalidate_user(
        self,
        user_id: UUID,
        *,
        event_type: str | None = None,
        app_id: UUID | None = None,
    ) -> int:
        """Invalidate a user's summaries, optionally one event type or app."""
        deleted = 0
        for pattern in self.keys.event_summary_patterns(
            user_id=user_id, event_type=event_type, app_id=app_id
        ):
            deleted += await self.invalidate(pattern)
        self._logger.info(
            "summary_cache_invalidated",
            user_id=str(user_id),
            event_type=event_type,
            app_id=str(app_id) if app_id else None,
            deleted=deleted,
        )
        return deleted
