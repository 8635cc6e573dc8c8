"""Fixed-window adapter implementing RateLimitProtocol.

Coordinates:
- Key construction: {prefix}:ratelimit:{tier}:{identifier}
- Rule lookup per tier
- Header arithmetic (remaining, reset, retry-after)
- Fail-open on store errors and timeouts, with a warning log

Architecture:
    Domain Protocol <- FixedWindowAdapter -> RedisStorage -> Redis

Usage:
    from src.core.container import get_rate_limit

    rate_limit = get_rate_limit()
    result = await rate_limit.is_allowed(
        tier=RateLimitTier.COLLECTION,
        identifier=str(api_key.id),
    )
"""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums import RateLimitTier
from src.domain.errors import RateLimitError
from src.domain.value_objects.rate_limit_rule import RateLimitResult, RateLimitRule

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.infrastructure.rate_limit.redis_storage import RedisStorage


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class FixedWindowAdapter:
    """Fixed-window rate limiter implementing RateLimitProtocol.

    Args:
        storage: RedisStorage running the atomic window script.
        rules: Tier to rule mapping.
        logger: Structured logger.
        key_prefix: Namespace for window keys.
        timeout: Seconds to wait for the store before failing open.
        clock: Returns the current epoch time in milliseconds.
    """

    def __init__(
        self,
        *,
        storage: RedisStorage,
        rules: dict[RateLimitTier, RateLimitRule],
        logger: LoggerProtocol,
        key_prefix: str = "beacon",
        timeout: float = 2.0,
        clock: Callable[[], int] = _epoch_ms,
    ) -> None:
        self._storage = storage
        self._rules = rules
        self._logger = logger
        self._key_prefix = key_prefix
        self._timeout = timeout
        self._clock = clock

    def rule_for(self, tier: RateLimitTier) -> RateLimitRule | None:
        return self._rules.get(tier)

    async def is_allowed(
        self,
        *,
        tier: RateLimitTier,
        identifier: str,
    ) -> Result[RateLimitResult, RateLimitError]:
        """Count this request and decide admission.

        Fail-Open:
            Store errors and timeouts yield allowed=True with a full quota.
        """
        rule = self._rules.get(tier)
        if rule is None:
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_CHECK_FAILED,
                    message=f"No rate limit rule configured for tier '{tier.value}'",
                    details={"tier": tier.value},
                )
            )

        if not rule.enabled:
            return Success(value=RateLimitResult.fail_open(rule.max_requests))

        key = self.build_key(tier=tier, identifier=identifier)
        now_ms = self._clock()

        try:
            async with asyncio.timeout(self._timeout):
                result = await self._storage.hit(key=key, rule=rule, now_ms=now_ms)
        except TimeoutError:
            self._logger.warning(
                "rate_limit_timeout_fail_open",
                tier=tier.value,
                identifier=identifier,
                timeout_seconds=self._timeout,
            )
            return Success(value=RateLimitResult.fail_open(rule.max_requests))

        match result:
            case Success(value=state):
                window_end_ms = state.window_start_ms + rule.window_ms
                reset_seconds = max(0, math.ceil((window_end_ms - now_ms) / 1000))
                if state.allowed:
                    return Success(
                        value=RateLimitResult(
                            allowed=True,
                            limit=rule.max_requests,
                            remaining=max(0, rule.max_requests - state.request_count),
                            reset_seconds=reset_seconds,
                        )
                    )
                self._logger.info(
                    "rate_limit_denied",
                    tier=tier.value,
                    identifier=identifier,
                    request_count=state.request_count,
                )
                return Success(
                    value=RateLimitResult(
                        allowed=False,
                        limit=rule.max_requests,
                        remaining=0,
                        reset_seconds=reset_seconds,
                        retry_after=max(1, reset_seconds),
                    )
                )
            case Failure(error=err):
                self._logger.warning(
                    "rate_limit_store_error_fail_open",
                    tier=tier.value,
                    identifier=identifier,
                    error_message=err.message,
                    details=err.details,
                )
                return Success(value=RateLimitResult.fail_open(rule.max_requests))

    async def reset(
        self,
        *,
        tier: RateLimitTier,
        identifier: str,
    ) -> Result[None, RateLimitError]:
        """Clear the window for ``identifier``. Does NOT fail open."""
        key = self.build_key(tier=tier, identifier=identifier)
        match await self._storage.clear(key=key):
            case Success():
                self._logger.info("rate_limit_reset", tier=tier.value, identifier=identifier)
                return Success(value=None)
            case Failure(error=err):
                self._logger.error(
                    "rate_limit_reset_failed",
                    tier=tier.value,
                    identifier=identifier,
                    error_message=err.message,
                )
                return Failure(
                    error=RateLimitError(
                        code=ErrorCode.RATE_LIMIT_CHECK_FAILED,
                        message=err.message,
                        details={"tier": tier.value},
                    )
                )

    def build_key(self, *, tier: RateLimitTier, identifier: str) -> str:
        """Key format: {prefix}:ratelimit:{tier}:{identifier}."""
        return f"{self._key_prefix}:ratelimit:{tier.value}:{identifier}"
