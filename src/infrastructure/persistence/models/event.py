"""Event database model.

Append-only: there is no updated_at column. Removal is soft (deleted_at).

Indexes:
    - ix_events_key_type_ts: (api_key_id, event_type, timestamp) for summaries
    - ix_events_key_tracking_user: (api_key_id, tracking_user_id) for user stats
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, JSONType, SoftDeleteMixin


class Event(SoftDeleteMixin, BaseModel):
    """Ingested behavioral event."""

    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_key_type_ts", "api_key_id", "event_type", "timestamp"),
        Index("ix_events_key_tracking_user", "api_key_id", "tracking_user_id"),
    )

    api_key_id: Mapped[UUID] = mapped_column(
        ForeignKey("api_keys.id", ondelete="RESTRICT"),
        nullable=False,
        comment="Credential that submitted the event",
    )
    event_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Event name (click, page_view, ...)",
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    referrer: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    device: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        comment="Device class as sent by the client",
    )
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Client-supplied occurrence time",
    )
    tracking_user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    session_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    page_title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    page_load_time: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Page load time in milliseconds",
    )
    event_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSONType,
        nullable=False,
        default=dict,
        comment="Open key-value metadata (browser, os, screenSize, ...)",
    )
