"""Aggregate values produced by the analytics engine.

These are plain immutable values: they round-trip through the summary
cache as JSON (``to_dict`` / ``from_dict``) and are rendered by the API
schemas.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.enums import DeviceClass


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceBreakdown:
    """Event counts per device bucket.

    Only ``mobile`` and ``desktop`` exist. Other device values are dropped,
    not folded into either bucket.
    """

    mobile: int = 0
    desktop: int = 0

    @classmethod
    def from_counts(cls, rows: Iterable[tuple[str | None, int]]) -> "DeviceBreakdown":
        """Bucket (stored device string, count) pairs case-insensitively."""
        totals = {DeviceClass.MOBILE: 0, DeviceClass.DESKTOP: 0}
        for raw_device, count in rows:
            bucket = DeviceClass.from_raw(raw_device)
            if bucket is not None:
                totals[bucket] += int(count)
        return cls(
            mobile=totals[DeviceClass.MOBILE],
            desktop=totals[DeviceClass.DESKTOP],
        )

    def to_dict(self) -> dict[str, int]:
        return {"mobile": self.mobile, "desktop": self.desktop}


@dataclass(frozen=True, slots=True, kw_only=True)
class EventSummary:
    """Summary of one event type over a date range.

    Attributes:
        event_type: Event name the summary covers.
        count: Matching events.
        unique_users: Distinct non-null tracking-user ids among them.
        device_data: Mobile/desktop split.
    """

    event_type: str
    count: int = 0
    unique_users: int = 0
    device_data: DeviceBreakdown = field(default_factory=DeviceBreakdown)

    @classmethod
    def empty(cls, event_type: str) -> "EventSummary":
        return cls(event_type=event_type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event_type,
            "count": self.count,
            "uniqueUsers": self.unique_users,
            "deviceData": self.device_data.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EventSummary":
        """Rebuild from ``to_dict`` output (cache entries).

        Raises:
            KeyError: If a required key is missing.
        """
        devices = data.get("deviceData") or {}
        return cls(
            event_type=data["event"],
            count=int(data["count"]),
            unique_users=int(data["uniqueUsers"]),
            device_data=DeviceBreakdown(
                mobile=int(devices.get("mobile", 0)),
                desktop=int(devices.get("desktop", 0)),
            ),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class TopEvent:
    """One entry of a user's most frequent events."""

    event_type: str
    count: int


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceDetails:
    """Device description taken from a user's latest event."""

    device: str | None = None
    browser: str | None = None
    os: str | None = None
    screen_size: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UserStats:
    """Activity of one tracked end-user across a tenant's credentials.

    Attributes:
        tracking_user_id: The end-user identifier supplied by the client.
        total_events: Events recorded for that user.
        device_details: From the most recent event.
        ip_address: From the most recent event.
        last_seen: Timestamp of the most recent event.
        top_events: Up to five event types, most frequent first.
    """

    tracking_user_id: str
    total_events: int = 0
    device_details: DeviceDetails = field(default_factory=DeviceDetails)
    ip_address: str | None = None
    last_seen: datetime | None = None
    top_events: tuple[TopEvent, ...] = ()
