"""Rate limit tier configuration.

Maps each RateLimitTier to its RateLimitRule. Limits come from Settings so
they can be tuned per environment without code changes.

Usage:
    from src.infrastructure.rate_limit.config import build_rate_limit_rules

    rules = build_rate_limit_rules(settings)
    rules[RateLimitTier.ANALYTICS].max_requests  # 30
"""

from src.core.config import Settings
from src.domain.enums import RateLimitTier
from src.domain.value_objects.rate_limit_rule import RateLimitRule

TIER_MESSAGES: dict[RateLimitTier, str] = {
    RateLimitTier.DEFAULT: "Too many requests, please try again later.",
    RateLimitTier.COLLECTION: "Too many data collection requests, please try again later.",
    RateLimitTier.ANALYTICS: "Too many analytics requests, please try again later.",
}


def build_rate_limit_rules(settings: Settings) -> dict[RateLimitTier, RateLimitRule]:
    """Build one rule per tier from settings."""
    limits = {
        RateLimitTier.DEFAULT: settings.rate_limit_default_max,
        RateLimitTier.COLLECTION: settings.rate_limit_collection_max,
        RateLimitTier.ANALYTICS: settings.rate_limit_analytics_max,
    }
    return {
        tier: RateLimitRule(
            max_requests=max_requests,
            window_ms=settings.rate_limit_window_ms,
            message=TIER_MESSAGES[tier],
            enabled=settings.rate_limit_enabled,
            expiry_buffer_seconds=settings.rate_limit_expiry_buffer_seconds,
        )
        for tier, max_requests in limits.items()
    }
