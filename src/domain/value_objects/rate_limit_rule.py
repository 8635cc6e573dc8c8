"""Fixed-window rate limit rule and check result.

Usage:
    from src.domain.value_objects import RateLimitRule

    rule = RateLimitRule(max_requests=30, window_ms=60_000)
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitRule:
    """Fixed-window quota (value object).

    Fixed Window Algorithm:
        - A window opens at the first request and lasts ``window_ms``
        - The first ``max_requests`` requests inside it are admitted
        - Later requests are denied until the window has elapsed
        - The next request after that opens a fresh window

    Attributes:
        max_requests: Requests admitted per window.
        window_ms: Window length in milliseconds.
        message: Human-readable text returned with a 429.
        enabled: Disabled rules admit everything.
        expiry_buffer_seconds: How long a window entry outlives its window.

    Raises:
        ValueError: If max_requests, window_ms or the buffer is invalid.
    """

    max_requests: int
    window_ms: int
    message: str = "Too many requests, please try again later."
    enabled: bool = True
    expiry_buffer_seconds: int = 10

    def __post_init__(self) -> None:
        if self.max_requests <= 0:
            raise ValueError(f"max_requests must be positive, got {self.max_requests}")
        if self.window_ms <= 0:
            raise ValueError(f"window_ms must be positive, got {self.window_ms}")
        if self.expiry_buffer_seconds < 0:
            raise ValueError(
                f"expiry_buffer_seconds must not be negative, got {self.expiry_buffer_seconds}"
            )

    @property
    def ttl_seconds(self) -> int:
        """Redis key TTL: window length plus buffer, whole seconds."""
        return math.ceil(self.window_ms / 1000) + self.expiry_buffer_seconds


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitResult:
    """Outcome of one admission check.

    Attributes:
        allowed: Whether the request is admitted.
        limit: Requests allowed per window (X-RateLimit-Limit).
        remaining: Requests left in the current window (X-RateLimit-Remaining).
        reset_seconds: Seconds until the current window ends (X-RateLimit-Reset).
        retry_after: Seconds to wait before retrying; 0 when allowed.
    """

    allowed: bool
    limit: int = 0
    remaining: int = 0
    reset_seconds: int = 0
    retry_after: int = 0

    @classmethod
    def fail_open(cls, limit: int) -> "RateLimitResult":
        """Result used when the store cannot be consulted."""
        return cls(allowed=True, limit=limit, remaining=limit, reset_seconds=0)
