"""Redis rolling counters.

Key Patterns:
    - {prefix}:count:{app_id}:{event_type}:{YYYY-MM-DD} -> integer (INCRBY)
    - {prefix}:unique:{app_id}:{YYYY-MM-DD} -> set of tracking user ids

Both carry a TTL of a few days. Increments are atomic; the paired EXPIRE is
sent in the same MULTI block, so a counter never outlives its window.
"""

from uuid import UUID

from src.core.result import Failure, Success
from src.domain.entities.event import Event
from src.domain.enums import IngestionState
from src.domain.protocols.counter_store_protocol import CounterStoreProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.cache.cache_keys import CacheKeys

SECONDS_PER_DAY = 86400


class RedisRollingCounters:
    """Per-day event counters and unique-visitor sets.

    Implements RollingCounterProtocol.
    """

    def __init__(
        self,
        *,
        store: CounterStoreProtocol,
        keys: CacheKeys,
        logger: LoggerProtocol,
        ttl_days: int = 7,
    ) -> None:
        self._store = store
        self._keys = keys
        self._logger = logger
        self._ttl = ttl_days * SECONDS_PER_DAY

    async def record(self, event: Event, *, app_id: UUID) -> IngestionState:
        day = event.day
        state = IngestionState.COUNTERS_UPDATED

        count_key = self._keys.event_count(
            app_id=app_id, event_type=event.event_type, day=day
        )
        match await self._store.increment(count_key, 1, ttl=self._ttl):
            case Failure(error=err):
                state = IngestionState.COUNTERS_FAILED
                self._logger.warning(
                    "rolling_counter_increment_failed",
                    key=count_key,
                    error_message=err.message,
                )
            case Success():
                pass

        if event.tracking_user_id:
            visitors_key = self._keys.unique_visitors(app_id=app_id, day=day)
            match await self._store.add_to_set(
                visitors_key, event.tracking_user_id, ttl=self._ttl
            ):
                case Failure(error=err):
                    state = IngestionState.COUNTERS_FAILED
                    self._logger.warning(
                        "rolling_counter_visitor_add_failed",
                        key=visitors_key,
                        error_message=err.message,
                    )
                case Success():
                    pass

        self._logger.debug(
            "ingestion_state",
            event_id=str(event.id),
            state=state.value,
        )
        return state

    async def daily_count(self, *, app_id: UUID, event_type: str, day: str) -> int:
        """Counter value; 0 when missing or unreadable."""
        key = self._keys.event_count(app_id=app_id, event_type=event_type, day=day)
        match await self._store.get(key):
            case Success(value=value):
                return int(value) if value is not None else 0
            case Failure():
                return 0

    async def daily_unique_visitors(self, *, app_id: UUID, day: str) -> int:
        match await self._store.set_size(self._keys.unique_visitors(app_id=app_id, day=day)):
            case Success(value=value):
                return value
            case Failure():
                return 0
