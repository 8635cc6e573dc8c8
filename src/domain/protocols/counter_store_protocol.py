"""Counter store protocol.

Atomic counters and sets with expiry, used for the rolling per-day
aggregates maintained alongside the event log.
"""

from typing import Protocol

from src.core.errors import DomainError
from src.core.result import Result


class CounterStoreProtocol(Protocol):
    """Shared store for best-effort counters."""

    async def get(self, key: str) -> Result[str | None, DomainError]:
        """Raw value, None when missing."""
        ...

    async def increment(
        self,
        key: str,
        amount: int = 1,
        ttl: int | None = None,
    ) -> Result[int, DomainError]:
        """Atomically add ``amount``; returns the new value."""
        ...

    async def add_to_set(
        self,
        key: str,
        *members: str,
        ttl: int | None = None,
    ) -> Result[int, DomainError]:
        """Add members; returns how many were new."""
        ...

    async def set_size(self, key: str) -> Result[int, DomainError]:
        """Number of members in a set (0 when missing)."""
        ...
