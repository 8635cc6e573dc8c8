"""Invalidate analytics cache handler.

Store failures are logged by the cache and reported as zero deletions;
this command never fails.
"""

from src.application.commands.analytics_commands import InvalidateAnalyticsCache
from src.application.dtos.analytics_dtos import CacheInvalidationResult
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.protocols.summary_cache_protocol import SummaryCacheProtocol


class InvalidateAnalyticsCacheHandler:
    """Handler for InvalidateAnalyticsCache command."""

    def __init__(self, summary_cache: SummaryCacheProtocol) -> None:
        self._summary_cache = summary_cache

    async def handle(
        self, cmd: InvalidateAnalyticsCache
    ) -> Result[CacheInvalidationResult, DomainError]:
        deleted = await self._summary_cache.invalidate_user(
            cmd.user_id,
            event_type=cmd.event_type,
            app_id=cmd.app_id,
        )
        return Success(value=CacheInvalidationResult(deleted=deleted))
