"""Rate limit infrastructure adapters.

Exports:
    RedisStorage: Atomic fixed-window storage (Lua).
    FixedWindowAdapter: RateLimitProtocol implementation.
    build_rate_limit_rules: Tier rules from settings.
"""

from src.infrastructure.rate_limit.config import build_rate_limit_rules
from src.infrastructure.rate_limit.fixed_window_adapter import FixedWindowAdapter
from src.infrastructure.rate_limit.redis_storage import RedisStorage, WindowState

__all__ = [
    "FixedWindowAdapter",
    "RedisStorage",
    "WindowState",
    "build_rate_limit_rules",
]
