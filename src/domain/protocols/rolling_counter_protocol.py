"""Rolling counter protocol.

Per-day event-type counters and unique-visitor sets kept alongside the
durable event log. They are hints, never the source of truth for summaries.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.event import Event
from src.domain.enums import IngestionState


class RollingCounterProtocol(Protocol):
    """Best-effort daily aggregates."""

    async def record(self, event: Event, *, app_id: UUID) -> IngestionState:
        """Apply one persisted event.

        Returns:
            COUNTERS_UPDATED, or COUNTERS_FAILED when any store call failed.
            Never raises for store failures.
        """
        ...

    async def daily_count(self, *, app_id: UUID, event_type: str, day: str) -> int: ...

    async def daily_unique_visitors(self, *, app_id: UUID, day: str) -> int: ...
