"""Summary cache protocol.

Read-through cache for computed analytics summaries. Implementations
degrade silently: store failures read as misses and writes as no-ops.
"""

from datetime import date
from typing import Any, Protocol
from uuid import UUID


class SummaryCacheProtocol(Protocol):
    """Cache of summary payloads keyed by a query fingerprint."""

    def fingerprint(
        self,
        *,
        user_id: UUID,
        event_type: str,
        start_date: date,
        end_date: date,
        app_id: UUID | None,
    ) -> str:
        """Deterministic key for one logical summary query."""
        ...

    async def get(self, fingerprint: str) -> dict[str, Any] | None: ...

    async def put(
        self,
        fingerprint: str,
        value: dict[str, Any],
        ttl_seconds: int | None = None,
    ) -> bool: ...

    async def delete(self, fingerprint: str) -> bool: ...

    async def invalidate_user(
        self,
        user_id: UUID,
        *,
        event_type: str | None = None,
        app_id: UUID | None = None,
    ) -> int:
        """Drop a user's cached summaries; returns how many were removed."""
        ...
