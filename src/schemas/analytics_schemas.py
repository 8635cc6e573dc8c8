"""Analytics response schemas.

Field names are camelCase on the wire to match the summary cache payload
(``uniqueUsers``, ``deviceData``).
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.application.dtos.analytics_dtos import (
    CacheInvalidationResult,
    EventSummaryResult,
    UserStatsResult,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeviceDataResponse(_CamelModel):
    mobile: int = Field(0, description="Events from mobile devices")
    desktop: int = Field(0, description="Events from desktop devices")


class EventSummaryResponse(_CamelModel):
    """Summary of one event type.

    Attributes:
        event: Event name.
        count: Matching events.
        unique_users: Distinct tracked end-users.
        device_data: Mobile/desktop split.
        start_date: First day covered.
        end_date: Last day covered.
        cached: Whether the result came from cache.
    """

    event: str
    count: int
    unique_users: int
    device_data: DeviceDataResponse
    start_date: date
    end_date: date
    cached: bool = Field(False, description="Served from the summary cache")

    @classmethod
    def from_dto(cls, dto: EventSummaryResult) -> "EventSummaryResponse":
        summary = dto.summary
        return cls(
            event=summary.event_type,
            count=summary.count,
            unique_users=summary.unique_users,
            device_data=DeviceDataResponse(
                mobile=summary.device_data.mobile,
                desktop=summary.device_data.desktop,
            ),
            start_date=dto.start_date,
            end_date=dto.end_date,
            cached=dto.cached,
        )


class DeviceDetailsResponse(_CamelModel):
    device: str | None = None
    browser: str | None = None
    os: str | None = None
    screen_size: str | None = None


class TopEventResponse(_CamelModel):
    event: str
    count: int


class UserStatsResponse(_CamelModel):
    """Activity of one tracked end-user."""

    user_id: str = Field(..., description="Tracking user id")
    total_events: int
    device_details: DeviceDetailsResponse
    ip_address: str | None = None
    last_seen: datetime | None = None
    top_events: list[TopEventResponse] = Field(default_factory=list)

    @classmethod
    def from_dto(cls, dto: UserStatsResult) -> "UserStatsResponse":
        stats = dto.stats
        details = stats.device_details
        return cls(
            user_id=stats.tracking_user_id,
            total_events=stats.total_events,
            device_details=DeviceDetailsResponse(
                device=details.device,
                browser=details.browser,
                os=details.os,
                screen_size=details.screen_size,
            ),
            ip_address=stats.ip_address,
            last_seen=stats.last_seen,
            top_events=[
                TopEventResponse(event=top.event_type, count=top.count)
                for top in stats.top_events
            ],
        )


class CacheInvalidationResponse(_CamelModel):
    deleted: int = Field(..., description="Cache entries removed")

    @classmethod
    def from_dto(cls, dto: CacheInvalidationResult) -> "CacheInvalidationResponse":
        return cls(deleted=dto.deleted)
