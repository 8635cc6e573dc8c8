"""Rate limit tiers.

Each tier is an independent fixed-window quota. Endpoints pick the tier that
matches their cost: ingestion is generous, analytics queries are strict.

Usage:
    from src.domain.enums import RateLimitTier

    Depends(rate_limit(RateLimitTier.COLLECTION))
"""

from enum import Enum


class RateLimitTier(str, Enum):
    """Named quota tiers."""

    DEFAULT = "default"
    COLLECTION = "collection"
    ANALYTICS = "analytics"
