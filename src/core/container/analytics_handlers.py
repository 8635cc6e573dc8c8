"""Analytics handler dependency factories.

Request-scoped handler instances for ingestion and analytics:
- AggregationEngine and ApiKeyAuthenticator (shared services)
- RecordEvent command
- GetEventSummary / GetUserStats queries
- InvalidateAnalyticsCache command
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.services.aggregation_engine import AggregationEngine
from src.core.config import settings
from src.core.container.infrastructure import (
    get_api_key_service,
    get_background_tasks,
    get_db_session,
    get_logger,
    get_rolling_counters,
    get_summary_cache,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.invalidate_analytics_cache_handler import (
        InvalidateAnalyticsCacheHandler,
    )
    from src.application.commands.handlers.record_event_handler import (
        RecordEventHandler,
    )
    from src.application.queries.handlers.get_event_summary_handler import (
        GetEventSummaryHandler,
    )
    from src.application.queries.handlers.get_user_stats_handler import (
        GetUserStatsHandler,
    )
    from src.application.services.api_key_authenticator import ApiKeyAuthenticator


# ============================================================================
# Shared Services (Request-Scoped)
# ============================================================================


async def get_aggregation_engine(
    session: AsyncSession = Depends(get_db_session),
) -> AggregationEngine:
    """Get aggregation engine (request-scoped).

    Creates engine with:
    - EventRepository, ApiKeyRepository, AppRepository (request-scoped)
    - Rolling counters and background task runner (app-scoped)
    """
    from src.infrastructure.persistence.repositories import (
        ApiKeyRepository,
        AppRepository,
        EventRepository,
    )

    return AggregationEngine(
        event_repo=EventRepository(session=session),
        api_key_repo=ApiKeyRepository(session=session),
        app_repo=AppRepository(session=session),
        rolling_counters=get_rolling_counters(),
        background_tasks=get_background_tasks(),
        logger=get_logger(),
    )


async def get_api_key_authenticator(
    session: AsyncSession = Depends(get_db_session),
) -> "ApiKeyAuthenticator":
    """Get API key authenticator (request-scoped)."""
    from src.application.services.api_key_authenticator import ApiKeyAuthenticator
    from src.infrastructure.persistence.repositories import ApiKeyRepository

    return ApiKeyAuthenticator(
        api_key_repo=ApiKeyRepository(session=session),
        api_key_service=get_api_key_service(),
        logger=get_logger(),
    )


# ============================================================================
# Handler Factories (Request-Scoped)
# ============================================================================


async def get_record_event_handler(
    session: AsyncSession = Depends(get_db_session),
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> "RecordEventHandler":
    """Get RecordEvent command handler (request-scoped)."""
    from src.application.commands.handlers.record_event_handler import (
        RecordEventHandler,
    )
    from src.infrastructure.persistence.repositories import EventRepository

    return RecordEventHandler(
        event_repo=EventRepository(session=session),
        aggregation_engine=engine,
        logger=get_logger(),
    )


async def get_event_summary_handler(
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> "GetEventSummaryHandler":
    """Get GetEventSummary query handler (request-scoped)."""
    from src.application.queries.handlers.get_event_summary_handler import (
        GetEventSummaryHandler,
    )

    return GetEventSummaryHandler(
        aggregation_engine=engine,
        summary_cache=get_summary_cache(),
        logger=get_logger(),
        default_range_days=settings.default_range_days,
    )


async def get_user_stats_handler(
    session: AsyncSession = Depends(get_db_session),
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> "GetUserStatsHandler":
    """Get GetUserStats query handler (request-scoped)."""
    from src.application.queries.handlers.get_user_stats_handler import (
        GetUserStatsHandler,
    )
    from src.infrastructure.persistence.repositories import ApiKeyRepository

    return GetUserStatsHandler(
        api_key_repo=ApiKeyRepository(session=session),
        aggregation_engine=engine,
    )


async def get_invalidate_analytics_cache_handler() -> "InvalidateAnalyticsCacheHandler":
    from src.application.commands.handlers.invalidate_analytics_cache_handler import (
        InvalidateAnalyticsCacheHandler,
    )

    return InvalidateAnalyticsCacheHandler(summary_cache=get_summary_cache())
