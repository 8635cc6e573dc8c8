"""Cache infrastructure package.

Architecture:
- RedisAdapter: Redis implementation of CacheProtocol and CounterStoreProtocol
- SummaryCache: read-through cache for analytics summaries
- RedisRollingCounters: per-day event counters and visitor sets
- CacheKeys: every key layout in one place
- Use src.core.container for dependency injection
"""

from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter
from src.infrastructure.cache.rolling_counters import RedisRollingCounters
from src.infrastructure.cache.summary_cache import SummaryCache

__all__ = [
    "CacheKeys",
    "RedisAdapter",
    "RedisRollingCounters",
    "SummaryCache",
]
