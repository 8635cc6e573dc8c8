"""Analytics queries (CQRS read operations).

Queries represent requests for data. They are immutable and never change
state; the summary cache they may populate is derived data.
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class GetEventSummary:
    """Summary of one event type for a user's credentials.

    Attributes:
        user_id: Requesting user.
        event_type: Event name.
        start_date: First day (defaults to the trailing window).
        end_date: Last day (defaults to today, UTC).
        app_id: Restrict to one owned app.
        bypass_cache: Recompute and overwrite the cached entry.

    Example:
        >>> query = GetEventSummary(user_id=user_id, event_type="click")
        >>> result = await handler.handle(query)
    """

    user_id: UUID
    event_type: str
    start_date: date | None = None
    end_date: date | None = None
    app_id: UUID | None = None
    bypass_cache: bool = False


@dataclass(frozen=True, kw_only=True)
class GetUserStats:
    """Activity of one tracked end-user, seen from a credential.

    Attributes:
        api_key_id: Requesting credential.
        tracking_user_id: Client-chosen end-user id.
    """

    api_key_id: UUID
    tracking_user_id: str
