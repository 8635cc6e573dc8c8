"""Get event summary query handler.

Read-through over the summary cache:

1. Resolve the date range (defaults: trailing window ending today, UTC)
2. Build the fingerprint from (user, event type, start, end, app scope)
3. Bypass: delete the entry; otherwise return a cache hit if present
4. Compute from the event log via AggregationEngine
5. Store the fresh value, return it

Cache failures behave as misses, so the summary is always served when the
database is reachable.
"""

from datetime import date

from src.application.dtos.analytics_dtos import EventSummaryResult
from src.application.queries.analytics_queries import GetEventSummary
from src.application.services.aggregation_engine import AggregationEngine
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.summary_cache_protocol import SummaryCacheProtocol
from src.domain.value_objects.analytics import EventSummary
from src.domain.value_objects.date_range import DEFAULT_RANGE_DAYS, DateRange


class GetEventSummaryHandler:
    """Handler for GetEventSummary query."""

    def __init__(
        self,
        aggregation_engine: AggregationEngine,
        summary_cache: SummaryCacheProtocol,
        logger: LoggerProtocol,
        default_range_days: int = DEFAULT_RANGE_DAYS,
    ) -> None:
        self._aggregation_engine = aggregation_engine
        self._summary_cache = summary_cache
        self._logger = logger
        self._default_range_days = default_range_days

    async def handle(
        self,
        query: GetEventSummary,
        *,
        today: date | None = None,
    ) -> Result[EventSummaryResult, DomainError]:
        """Handle GetEventSummary query.

        Args:
            query: Summary parameters.
            today: Reference day for default ranges (tests).

        Returns:
            Success(EventSummaryResult).
            Failure(ValidationError) if start is after end.
            Failure(NotFoundError) if the app scope is not the user's.
        """
        match DateRange.resolve(
            start=query.start_date,
            end=query.end_date,
            today=today,
            default_days=self._default_range_days,
        ):
            case Failure() as failure:
                return failure
            case Success(value=date_range):
                pass

        fingerprint = self._summary_cache.fingerprint(
            user_id=query.user_id,
            event_type=query.event_type,
            start_date=date_range.start,
            end_date=date_range.end,
            app_id=query.app_id,
        )

        if query.bypass_cache:
            await self._summary_cache.delete(fingerprint)
        else:
            cached = await self._summary_cache.get(fingerprint)
            if cached is not None:
                try:
                    summary = EventSummary.from_dict(cached)
                except (KeyError, TypeError, ValueError) as e:
                    self._logger.warning(
                        "summary_cache_entry_unreadable",
                        key=fingerprint,
                        error_message=str(e),
                    )
                else:
                    return Success(
                        value=EventSummaryResult(
                            summary=summary,
                            start_date=date_range.start,
                            end_date=date_range.end,
                            app_id=query.app_id,
                            cached=True,
                        )
                    )

        match await self._aggregation_engine.summarize(
            user_id=query.user_id,
            event_type=query.event_type,
            date_range=date_range,
            app_id=query.app_id,
        ):
            case Failure() as failure:
                return failure
            case Success(value=summary):
                pass

        await self._summary_cache.put(fingerprint, summary.to_dict())

        return Success(
            value=EventSummaryResult(
                summary=summary,
                start_date=date_range.start,
                end_date=date_range.end,
                app_id=query.app_id,
                cached=False,
            )
        )
