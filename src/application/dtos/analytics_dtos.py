"""Analytics query DTOs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.domain.value_objects.analytics import EventSummary, UserStats


@dataclass(frozen=True, kw_only=True)
class EventSummaryResult:
    """Summary plus how it was served.

    Attributes:
        summary: The aggregate.
        start_date: Resolved first day.
        end_date: Resolved last day.
        app_id: App scope, None when all apps.
        cached: True when served from the summary cache.
    """

    summary: EventSummary
    start_date: date
    end_date: date
    app_id: UUID | None
    cached: bool


@dataclass(frozen=True, kw_only=True)
class UserStatsResult:
    stats: UserStats


@dataclass(frozen=True, kw_only=True)
class CacheInvalidationResult:
    deleted: int
