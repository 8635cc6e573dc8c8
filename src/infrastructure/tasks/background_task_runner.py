"""In-process fire-and-forget task runner.

Implements BackgroundTaskProtocol with detached asyncio tasks. Used for work
that must not delay a response, such as rolling-counter updates after an
event has been persisted.

Architecture:
    - Detached tasks tracked in a set (keeps strong references until done)
    - Concurrency bounded by a semaphore; excess work waits, never fails
    - Fail-open: exceptions are logged at warning level, never re-raised
    - ``drain`` awaits outstanding work on shutdown and in tests

Usage:
    >>> runner = BackgroundTaskRunner(logger=get_logger(), max_concurrency=100)
    >>> runner.spawn(counters.record(event, app_id), name="rolling_counters")
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

from src.domain.protocols.logger_protocol import LoggerProtocol


class BackgroundTaskRunner:
    """Detached task runner with bounded concurrency.

    Attributes:
        _tasks: Tasks not yet finished.
        _semaphore: Limits simultaneously running tasks.
    """

    def __init__(self, *, logger: LoggerProtocol, max_concurrency: int = 100) -> None:
        self._logger = logger
        self._tasks: set[asyncio.Task[Any]] = set()
        self._semaphore = asyncio.Semaphore(max_concurrency)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> None:
        """Schedule ``coro`` on the running loop and return immediately.

        Must be called from within a running event loop.
        """
        task = asyncio.get_running_loop().create_task(self._guarded(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for outstanding tasks; cancel whatever is left after ``timeout``."""
        if not self._tasks:
            return
        pending = set(self._tasks)
        done, still_running = await asyncio.wait(pending, timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            self._logger.warning(
                "background_tasks_cancelled",
                cancelled=len(still_running),
                completed=len(done),
            )
            await asyncio.gather(*still_running, return_exceptions=True)

    async def _guarded(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        async with self._semaphore:
            try:
                await coro
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                self._logger.warning(
                    "background_task_failed",
                    task_name=name,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
