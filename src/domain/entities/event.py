"""Event domain entity.

A single client-side occurrence (page view, click, ...). Events are
append-only facts: created once at ingestion, never updated, removed only by
soft delete. ``timestamp`` is when the client says it happened, not when the
server received it.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from src.domain.errors.event_error import EventError
from src.domain.value_objects.event_metadata import EventMetadata

MAX_EVENT_TYPE_LENGTH = 255
MAX_URL_LENGTH = 2048


@dataclass
class Event:
    """Ingested behavioral event.

    Attributes:
        id: Unique event identifier.
        api_key_id: Credential that submitted the event.
        event_type: Event name ("click", "page_view", ...).
        url: Page where it happened.
        timestamp: Client-supplied occurrence time (timezone-aware).
        referrer: Optional referring URL.
        device: Optional device class string as sent by the client.
        ip_address: Source address (filled from the request when absent).
        tracking_user_id: Optional end-user id chosen by the client.
        session_id: Optional client session id.
        page_title: Optional document title.
        page_load_time: Optional load time in milliseconds.
        metadata: Open key-value map.
        created_at: Server-side creation time.
        deleted_at: Soft-delete marker.
    """

    id: UUID
    api_key_id: UUID
    event_type: str
    url: str
    timestamp: datetime
    referrer: str | None = None
    device: str | None = None
    ip_address: str | None = None
    tracking_user_id: str | None = None
    session_id: str | None = None
    page_title: str | None = None
    page_load_time: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        """Enforce the mandatory fields.

        Raises:
            ValueError: With an EventError message.
        """
        if not self.event_type or not self.event_type.strip():
            raise ValueError(EventError.EVENT_TYPE_REQUIRED)
        if len(self.event_type) > MAX_EVENT_TYPE_LENGTH:
            raise ValueError(EventError.EVENT_TYPE_TOO_LONG)
        if not self.url:
            raise ValueError(EventError.URL_REQUIRED)
        if len(self.url) > MAX_URL_LENGTH:
            raise ValueError(EventError.URL_TOO_LONG)
        if self.timestamp.tzinfo is None:
            raise ValueError(EventError.TIMESTAMP_NAIVE)
        if self.page_load_time is not None and self.page_load_time < 0:
            raise ValueError(EventError.INVALID_PAGE_LOAD_TIME)

    @property
    def meta(self) -> EventMetadata:
        return EventMetadata(self.metadata)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def day(self) -> str:
        """UTC calendar day of the event (YYYY-MM-DD)."""
        return self.timestamp.astimezone(UTC).date().isoformat()
