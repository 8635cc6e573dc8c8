"""Event ingestion commands (CQRS write operations).

All commands are immutable (frozen=True) and use keyword-only arguments
(kw_only=True).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RecordEvent:
    """Record one behavioral event for an authenticated credential.

    Attributes:
        api_key_id: Credential submitting the event.
        app_id: App owning that credential (rolling counter scope).
        event_type: Event name.
        url: Page URL.
        timestamp: Client-supplied occurrence time.
        client_ip: Request source address, used when ``ip_address`` is absent.

    Example:
        >>> command = RecordEvent(
        ...     api_key_id=key.key_id,
        ...     app_id=key.app_id,
        ...     event_type="click",
        ...     url="https://example.com/pricing",
        ...     timestamp=datetime.now(UTC),
        ...     tracking_user_id="u1",
        ... )
        >>> result = await handler.handle(command)
    """

    api_key_id: UUID
    app_id: UUID
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
    client_ip: str | None = None
