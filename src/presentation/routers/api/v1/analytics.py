"""Analytics resource handlers.

Handler functions for summaries, per-user statistics and cache control.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    get_event_summary       - Aggregate one event type over a date range
    get_user_stats          - Activity of one tracked end-user
    invalidate_summary_cache - Drop the caller's cached summaries
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.responses import JSONResponse

from src.application.commands.analytics_commands import InvalidateAnalyticsCache
from src.application.commands.handlers.invalidate_analytics_cache_handler import (
    InvalidateAnalyticsCacheHandler,
)
from src.application.queries.analytics_queries import GetEventSummary, GetUserStats
from src.application.queries.handlers.get_event_summary_handler import (
    GetEventSummaryHandler,
)
from src.application.queries.handlers.get_user_stats_handler import (
    GetUserStatsHandler,
)
from src.core.container import (
    get_event_summary_handler,
    get_invalidate_analytics_cache_handler,
    get_user_stats_handler,
)
from src.core.result import Failure
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentApiKey,
    CurrentUserId,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.analytics_schemas import (
    CacheInvalidationResponse,
    EventSummaryResponse,
    UserStatsResponse,
)


async def get_event_summary(
    request: Request,
    user_id: CurrentUserId,
    event: Annotated[
        str,
        Query(min_length=1, max_length=255, description="Event name to summarize"),
    ],
    start_date: Annotated[
        date | None,
        Query(alias="startDate", description="First day (YYYY-MM-DD)"),
    ] = None,
    end_date: Annotated[
        date | None,
        Query(alias="endDate", description="Last day (YYYY-MM-DD), inclusive"),
    ] = None,
    app_id: Annotated[
        UUID | None,
        Query(alias="app_id", description="Restrict to one of your apps"),
    ] = None,
    bypass_cache: Annotated[
        bool,
        Query(alias="bypassCache", description="Recompute and refresh the cache"),
    ] = False,
    handler: GetEventSummaryHandler = Depends(get_event_summary_handler),
) -> EventSummaryResponse | JSONResponse:
    """Summarize one event type.

    GET /api/v1/analytics/event-summary → 200 OK

    Defaults to the trailing week when no dates are given.

    Returns:
        EventSummaryResponse with count, unique users and device split.
        JSONResponse with RFC 9457 error on failure.
    """
    query = GetEventSummary(
        user_id=user_id,
        event_type=event,
        start_date=start_date,
        end_date=end_date,
        app_id=app_id,
        bypass_cache=bypass_cache,
    )
    result = await handler.handle(query)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
            is_query=True,
        )

    return EventSummaryResponse.from_dto(result.value)


async def get_user_stats(
    request: Request,
    api_key: CurrentApiKey,
    user_id: Annotated[
        str,
        Query(
            alias="userId",
            min_length=1,
            max_length=255,
            description="Tracking user id supplied when recording events",
        ),
    ],
    handler: GetUserStatsHandler = Depends(get_user_stats_handler),
) -> UserStatsResponse | JSONResponse:
    """Statistics for one tracked end-user.

    GET /api/v1/analytics/user-stats → 200 OK

    Covers every API key of the account that owns the calling key.
    """
    query = GetUserStats(api_key_id=api_key.key_id, tracking_user_id=user_id)
    result = await handler.handle(query)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
            is_query=True,
        )

    return UserStatsResponse.from_dto(result.value)


async def invalidate_summary_cache(
    request: Request,
    user_id: CurrentUserId,
    event: Annotated[
        str | None,
        Query(max_length=255, description="Only this event type"),
    ] = None,
    app_id: Annotated[
        UUID | None,
        Query(alias="app_id", description="Only summaries covering this app"),
    ] = None,
    handler: InvalidateAnalyticsCacheHandler = Depends(
        get_invalidate_analytics_cache_handler
    ),
) -> CacheInvalidationResponse | JSONResponse:
    """Drop cached summaries.

    DELETE /api/v1/analytics/cache → 200 OK
    """
    command = InvalidateAnalyticsCache(user_id=user_id, event_type=event, app_id=app_id)
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
        )

    return CacheInvalidationResponse.from_dto(result.value)
