"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import CacheProtocol, EventRepository
"""

from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.api_key_service_protocol import ApiKeyServiceProtocol
from src.domain.protocols.app_repository import AppRepository
from src.domain.protocols.background_task_protocol import BackgroundTaskProtocol
from src.domain.protocols.cache_protocol import CacheProtocol
from src.domain.protocols.counter_store_protocol import CounterStoreProtocol
from src.domain.protocols.event_repository import EventRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.rate_limit_protocol import RateLimitProtocol
from src.domain.protocols.rolling_counter_protocol import RollingCounterProtocol
from src.domain.protocols.summary_cache_protocol import SummaryCacheProtocol
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    "ApiKeyRepository",
    "ApiKeyServiceProtocol",
    "AppRepository",
    "BackgroundTaskProtocol",
    "CacheProtocol",
    "CounterStoreProtocol",
    "EventRepository",
    "LoggerProtocol",
    "RateLimitProtocol",
    "RollingCounterProtocol",
    "SummaryCacheProtocol",
    "UserRepository",
]
