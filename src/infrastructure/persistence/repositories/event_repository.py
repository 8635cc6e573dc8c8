"""EventRepository - SQLAlchemy implementation of EventRepository protocol.

All aggregation happens in SQL; only counts and small groupings come back.
Every query excludes soft-deleted rows.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.event import Event
from src.domain.value_objects.date_range import DateRange
from src.infrastructure.persistence.base import as_utc
from src.infrastructure.persistence.models.event import Event as EventModel


def _summary_filter(
    api_key_ids: Sequence[UUID],
    event_type: str,
    date_range: DateRange,
) -> list[ColumnElement[bool]]:
    return [
        EventModel.api_key_id.in_(list(api_key_ids)),
        EventModel.event_type == event_type,
        EventModel.timestamp >= date_range.starts_at,
        EventModel.timestamp < date_range.ends_before,
        EventModel.deleted_at.is_(None),
    ]


def _tracking_user_filter(
    api_key_ids: Sequence[UUID],
    tracking_user_id: str,
) -> list[ColumnElement[bool]]:
    return [
        EventModel.api_key_id.in_(list(api_key_ids)),
        EventModel.tracking_user_id == tracking_user_id,
        EventModel.deleted_at.is_(None),
    ]


class EventRepository:
    """SQLAlchemy implementation of EventRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, event: Event) -> None:
        """Insert an event and commit (durable before returning).

        A failed commit is rolled back before re-raising, so the request
        session can still close cleanly.
        """
        self.session.add(self._to_model(event))
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def find_by_id(self, event_id: UUID) -> Event | None:
        stmt = select(EventModel).where(
            EventModel.id == event_id,
            EventModel.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def count(
        self,
        *,
        api_key_ids: Sequence[UUID],
        event_type: str,
        date_range: DateRange,
    ) -> int:
        if not api_key_ids:
            return 0
        stmt = select(func.count(EventModel.id)).where(
            *_summary_filter(api_key_ids, event_type, date_range)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_distinct_tracking_users(
        self,
        *,
        api_key_ids: Sequence[UUID],
        event_type: str,
        date_range: DateRange,
    ) -> int:
        if not api_key_ids:
            return 0
        # COUNT(DISTINCT col) ignores NULL
        stmt = select(func.count(func.distinct(EventModel.tracking_user_id))).where(
            *_summary_filter(api_key_ids, event_type, date_range)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_by_device(
        self,
        *,
        api_key_ids: Sequence[UUID],
        event_type: str,
        date_range: DateRange,
    ) -> list[tuple[str | None, int]]:
        if not api_key_ids:
            return []
        stmt = (
            select(EventModel.device, func.count(EventModel.id))
            .where(*_summary_filter(api_key_ids, event_type, date_range))
            .group_by(EventModel.device)
        )
        result = await self.session.execute(stmt)
        return [(device, int(count)) for device, count in result.all()]

    async def count_for_tracking_user(
        self,
        *,
        api_key_ids: Sequence[UUID],
        tracking_user_id: str,
    ) -> int:
        if not api_key_ids:
            return 0
        stmt = select(func.count(EventModel.id)).where(
            *_tracking_user_filter(api_key_ids, tracking_user_id)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def latest_for_tracking_user(
        self,
        *,
        api_key_ids: Sequence[UUID],
        tracking_user_id: str,
    ) -> Event | None:
        if not api_key_ids:
            return None
        stmt = (
            select(EventModel)
            .where(*_tracking_user_filter(api_key_ids, tracking_user_id))
            .order_by(EventModel.timestamp.desc(), EventModel.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def top_events_for_tracking_user(
        self,
        *,
        api_key_ids: Sequence[UUID],
        tracking_user_id: str,
        limit: int = 5,
    ) -> list[tuple[str, int]]:
        if not api_key_ids:
            return []
        count_col = func.count(EventModel.id).label("count")
        stmt = (
            select(EventModel.event_type, count_col)
            .where(*_tracking_user_filter(api_key_ids, tracking_user_id))
            .group_by(EventModel.event_type)
            .order_by(desc(count_col))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(event_type, int(count)) for event_type, count in result.all()]

    def _to_domain(self, model: EventModel) -> Event:
        return Event(
            id=model.id,
            api_key_id=model.api_key_id,
            event_type=model.event_type,
            url=model.url,
            timestamp=as_utc(model.timestamp),
            referrer=model.referrer,
            device=model.device,
            ip_address=model.ip_address,
            tracking_user_id=model.tracking_user_id,
            session_id=model.session_id,
            page_title=model.page_title,
            page_load_time=model.page_load_time,
            metadata=dict(model.event_metadata or {}),
            created_at=as_utc(model.created_at),
            deleted_at=as_utc(model.deleted_at),
        )

    def _to_model(self, event: Event) -> EventModel:
        return EventModel(
            id=event.id,
            api_key_id=event.api_key_id,
            event_type=event.event_type,
            url=event.url,
            referrer=event.referrer,
            device=event.device,
            ip_address=event.ip_address,
            timestamp=event.timestamp,
            tracking_user_id=event.tracking_user_id,
            session_id=event.session_id,
            page_title=event.page_title,
            page_load_time=event.page_load_time,
            event_metadata=dict(event.metadata),
            created_at=event.created_at,
            deleted_at=event.deleted_at,
        )
