"""Background task protocol.

Runs work after the response path has moved on. Failures of spawned work are
reported to the log and never reach the caller that spawned it.
"""

from collections.abc import Coroutine
from typing import Any, Protocol


class BackgroundTaskProtocol(Protocol):
    """Fire-and-forget task runner."""

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> None:
        """Schedule ``coro`` without waiting for it."""
        ...

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for outstanding tasks (shutdown, tests)."""
        ...
