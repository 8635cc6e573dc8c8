"""Domain value objects.

Usage:
    from src.domain.value_objects import DateRange, RateLimitRule
"""

from src.domain.value_objects.analytics import (
    DeviceBreakdown,
    DeviceDetails,
    EventSummary,
    TopEvent,
    UserStats,
)
from src.domain.value_objects.date_range import DateRange
from src.domain.value_objects.event_metadata import EventMetadata
from src.domain.value_objects.ip_restriction import IpRestriction
from src.domain.value_objects.rate_limit_rule import RateLimitResult, RateLimitRule

__all__ = [
    "DateRange",
    "DeviceBreakdown",
    "DeviceDetails",
    "EventMetadata",
    "EventSummary",
    "IpRestriction",
    "RateLimitResult",
    "RateLimitRule",
    "TopEvent",
    "UserStats",
]
