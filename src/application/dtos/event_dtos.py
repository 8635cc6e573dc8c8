"""Event ingestion DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RecordedEvent:
    """Result of a successful ingestion.

    Attributes:
        event_id: Identifier of the persisted event.
        event_type: Event name as stored.
        timestamp: Client-supplied occurrence time.
    """

    event_id: UUID
    event_type: str
    timestamp: datetime
