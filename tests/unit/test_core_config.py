"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Default values (tiers, TTLs, key lifetime)
- Loading from environment variables
- Validation of positive limits and key prefix normalization
- Environment detection
- Rate-limit rule construction from settings
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import Environment, Settings, get_settings
from src.domain.enums import RateLimitTier
from src.infrastructure.rate_limit.config import build_rate_limit_rules


def _settings(**env: str) -> Settings:
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


@pytest.mark.unit
class TestDefaults:
    def test_rate_limit_tiers(self):
        settings = _settings()

        assert settings.rate_limit_window_ms == 60_000
        assert settings.rate_limit_default_max == 100
        assert settings.rate_limit_collection_max == 300
        assert settings.rate_limit_analytics_max == 30

    def test_store_defaults(self):
        settings = _settings()

        assert settings.cache_summary_ttl == 3600
        assert settings.counter_ttl_days == 7
        assert settings.api_key_expiration_days == 30
        assert settings.environment == Environment.DEVELOPMENT
        assert settings.is_development


@pytest.mark.unit
class TestEnvironmentLoading:
    def test_values_come_from_environment(self):
        settings = _settings(
            ENVIRONMENT="production",
            REDIS_URL="redis://cache:6379/2",
            RATE_LIMIT_ANALYTICS_MAX="5",
        )

        assert settings.is_production
        assert settings.redis_url == "redis://cache:6379/2"
        assert settings.rate_limit_analytics_max == 5

    @pytest.mark.parametrize(
        "name", ["RATE_LIMIT_DEFAULT_MAX", "CACHE_SUMMARY_TTL", "API_KEY_EXPIRATION_DAYS"]
    )
    def test_non_positive_limits_are_rejected(self, name):
        with pytest.raises(ValidationError):
            _settings(**{name: "0"})

    def test_key_prefix_drops_trailing_colons(self):
        assert _settings(REDIS_KEY_PREFIX="beacon::").redis_key_prefix == "beacon"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


@pytest.mark.unit
class TestRateLimitRules:
    def test_one_rule_per_tier(self):
        rules = build_rate_limit_rules(_settings(RATE_LIMIT_COLLECTION_MAX="10"))

        assert set(rules) == set(RateLimitTier)
        assert rules[RateLimitTier.COLLECTION].max_requests == 10
        assert rules[RateLimitTier.ANALYTICS].window_ms == 60_000

    def test_disabled_flag_reaches_every_rule(self):
        rules = build_rate_limit_rules(_settings(RATE_LIMIT_ENABLED="false"))

        assert not any(rule.enabled for rule in rules.values())
