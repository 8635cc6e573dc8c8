"""Aggregation engine.

Computes analytics from the durable event log and keeps the rolling
counters up to date after ingestion.

Architecture:
    - Application service (uses repository protocols, no infrastructure)
    - Summaries are always computed from the event log; rolling counters
      are never consulted for reads
    - Cache population is the caller's job (GetEventSummaryHandler)

Ownership Chain:
    Event -> ApiKey -> (User, App)

Usage:
    engine = AggregationEngine(
        event_repo=event_repo,
        api_key_repo=api_key_repo,
        app_repo=app_repo,
        rolling_counters=counters,
        background_tasks=tasks,
        logger=logger,
    )
    result = await engine.summarize(
        user_id=user_id,
        event_type="click",
        date_range=date_range,
        app_id=None,
    )
"""

from uuid import UUID

from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities.event import Event
from src.domain.errors.app_error import AppError
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.app_repository import AppRepository
from src.domain.protocols.background_task_protocol import BackgroundTaskProtocol
from src.domain.protocols.event_repository import EventRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.rolling_counter_protocol import RollingCounterProtocol
from src.domain.value_objects.analytics import (
    DeviceBreakdown,
    DeviceDetails,
    EventSummary,
    TopEvent,
    UserStats,
)
from src.domain.value_objects.date_range import DateRange

TOP_EVENTS_LIMIT = 5


class AggregationEngine:
    """Summary, per-user statistics and rolling counter updates.

    Dependencies (injected via constructor):
        - EventRepository: Aggregate queries over the event log
        - ApiKeyRepository: Credential resolution
        - AppRepository: App scope ownership checks
        - RollingCounterProtocol: Daily counters
        - BackgroundTaskProtocol: Detached counter updates
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        *,
        event_repo: EventRepository,
        api_key_repo: ApiKeyRepository,
        app_repo: AppRepository,
        rolling_counters: RollingCounterProtocol,
        background_tasks: BackgroundTaskProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._event_repo = event_repo
        self._api_key_repo = api_key_repo
        self._app_repo = app_repo
        self._rolling_counters = rolling_counters
        self._background_tasks = background_tasks
        self._logger = logger

    async def resolve_credentials(
        self,
        *,
        user_id: UUID,
        app_id: UUID | None = None,
    ) -> Result[list[UUID], NotFoundError]:
        """Credential ids the user may aggregate over.

        A foreign or unknown app yields the same not-found error, so the
        response never reveals that another user's app exists.
        """
        if app_id is not None:
            app = await self._app_repo.find_by_id(app_id)
            if app is None or not app.is_owned_by(user_id):
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.APP_NOT_FOUND,
                        message=AppError.NOT_FOUND,
                        resource_type="App",
                        resource_id=str(app_id),
                    )
                )
        ids = await self._api_key_repo.find_ids_by_user(user_id, app_id=app_id)
        return Success(value=ids)

    async def summarize(
        self,
        *,
        user_id: UUID,
        event_type: str,
        date_range: DateRange,
        app_id: UUID | None = None,
    ) -> Result[EventSummary, NotFoundError]:
        """Count, unique users and device split for one event type.

        Returns:
            Success(EventSummary), zero-valued when the user has no
            credentials. Failure(NotFoundError) when the app scope is not
            the user's.
        """
        match await self.resolve_credentials(user_id=user_id, app_id=app_id):
            case Failure() as failure:
                return failure
            case Success(value=api_key_ids):
                pass

        if not api_key_ids:
            return Success(value=EventSummary.empty(event_type))

        # One session per request, so the queries run one after another
        count = await self._event_repo.count(
            api_key_ids=api_key_ids, event_type=event_type, date_range=date_range
        )
        unique_users = await self._event_repo.count_distinct_tracking_users(
            api_key_ids=api_key_ids, event_type=event_type, date_range=date_range
        )
        device_rows = await self._event_repo.count_by_device(
            api_key_ids=api_key_ids, event_type=event_type, date_range=date_range
        )

        return Success(
            value=EventSummary(
                event_type=event_type,
                count=count,
                unique_users=unique_users,
                device_data=DeviceBreakdown.from_counts(device_rows),
            )
        )

    async def user_stats(
        self,
        *,
        tracking_user_id: str,
        api_key_ids: list[UUID],
    ) -> UserStats:
        """Totals, latest context and top events of one tracked user."""
        total = await self._event_repo.count_for_tracking_user(
            api_key_ids=api_key_ids, tracking_user_id=tracking_user_id
        )
        if total == 0:
            return UserStats(tracking_user_id=tracking_user_id)

        latest = await self._event_repo.latest_for_tracking_user(
            api_key_ids=api_key_ids, tracking_user_id=tracking_user_id
        )
        top_rows = await self._event_repo.top_events_for_tracking_user(
            api_key_ids=api_key_ids,
            tracking_user_id=tracking_user_id,
            limit=TOP_EVENTS_LIMIT,
        )

        details = DeviceDetails()
        if latest is not None:
            meta = latest.meta
            details = DeviceDetails(
                device=latest.device,
                browser=meta.browser,
                os=meta.os,
                screen_size=meta.screen_size,
            )

        return UserStats(
            tracking_user_id=tracking_user_id,
            total_events=total,
            device_details=details,
            ip_address=latest.ip_address if latest else None,
            last_seen=latest.timestamp if latest else None,
            top_events=tuple(
                TopEvent(event_type=event_type, count=int(count))
                for event_type, count in top_rows
            ),
        )

    def schedule_counter_update(self, event: Event, *, app_id: UUID) -> None:
        """Update rolling counters in the background.

        Returns immediately; the outcome is only logged.
        """
        self._background_tasks.spawn(
            self._rolling_counters.record(event, app_id=app_id),
            name=f"rolling-counters-{event.id}",
        )
