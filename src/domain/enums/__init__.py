"""Domain enums package.

Usage:
    from src.domain.enums import DeviceClass, IngestionState, RateLimitTier
"""

from src.domain.enums.device_class import DeviceClass
from src.domain.enums.ingestion_state import IngestionState
from src.domain.enums.rate_limit_tier import RateLimitTier

__all__ = [
    "DeviceClass",
    "IngestionState",
    "RateLimitTier",
]
