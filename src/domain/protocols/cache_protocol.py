"""Cache protocol for the domain layer.

The summary cache needs JSON values with TTL, single-key deletion and
wildcard invalidation. All operations return Result so callers choose how to
degrade (a failed read is a miss).
"""

from typing import Any, Protocol

from src.core.errors import DomainError
from src.core.result import Result


class CacheProtocol(Protocol):
    """What the domain needs from a cache."""

    async def get_json(self, key: str) -> Result[dict[str, Any] | None, DomainError]:
        """Get a JSON object, Success(None) on miss."""
        ...

    async def set_json(
        self,
        key: str,
        value: dict[str, Any],
        ttl: int | None = None,
    ) -> Result[None, DomainError]:
        """Store a JSON object with an optional TTL in seconds."""
        ...

    async def delete(self, key: str) -> Result[bool, DomainError]:
        """Delete one key; Success(True) when it existed."""
        ...

    async def delete_pattern(self, pattern: str) -> Result[int, DomainError]:
        """Delete every key matching a glob pattern; returns the count."""
        ...

    async def ping(self) -> Result[bool, DomainError]:
        """Check connectivity (health check)."""
        ...
