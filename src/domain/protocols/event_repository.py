"""EventRepository protocol (port).

The event table is append-only. Aggregations run in the database and return
plain numbers, so the aggregation engine never loads event rows in bulk.
"""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from src.domain.entities.event import Event
from src.domain.value_objects.date_range import DateRange


class EventRepository(Protocol):
    """Event persistence and aggregation queries.

    Every query excludes soft-deleted events.
    """

    async def save(self, event: Event) -> None:
        """Append an event (flush, commit is the session's job)."""
        ...

    async def find_by_id(self, event_id: UUID) -> Event | None: ...

    async def count(
        self,
        *,
        api_key_ids: Sequence[UUID],
        event_type: str,
        date_range: DateRange,
    ) -> int: ...

    async def count_distinct_tracking_users(
        self,
        *,
        api_key_ids: Sequence[UUID],
        event_type: str,
        date_range: DateRange,
    ) -> int:
        """Distinct non-null tracking-user ids among matching events."""
        ...

    async def count_by_device(
        self,
        *,
        api_key_ids: Sequence[UUID],
        event_type: str,
        date_range: DateRange,
    ) -> list[tuple[str | None, int]]:
        """(stored device string, count) pairs, device strings as stored."""
        ...

    async def count_for_tracking_user(
        self,
        *,
        api_key_ids: Sequence[UUID],
        tracking_user_id: str,
    ) -> int: ...

    async def latest_for_tracking_user(
        self,
        *,
        api_key_ids: Sequence[UUID],
        tracking_user_id: str,
    ) -> Event | None: ...

    async def top_events_for_tracking_user(
        self,
        *,
        api_key_ids: Sequence[UUID],
        tracking_user_id: str,
        limit: int = 5,
    ) -> list[tuple[str, int]]:
        """(event type, count), most frequent first."""
        ...
