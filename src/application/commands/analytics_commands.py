"""Analytics cache commands."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class InvalidateAnalyticsCache:
    """Drop a user's cached summaries.

    Attributes:
        user_id: Owner of the cached entries.
        event_type: Only this event type, when given.
        app_id: Only this app (and unscoped entries), when given.
    """

    user_id: UUID
    event_type: str | None = None
    app_id: UUID | None = None
