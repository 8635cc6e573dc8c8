"""Integration tests for BackgroundTaskRunner (detached asyncio tasks)."""

import asyncio

import pytest

from src.infrastructure.tasks.background_task_runner import BackgroundTaskRunner


@pytest.fixture
def runner(mock_logger) -> BackgroundTaskRunner:
    return BackgroundTaskRunner(logger=mock_logger, max_concurrency=2)


@pytest.mark.integration
class TestBackgroundTaskRunner:
    async def test_spawn_returns_before_work_finishes(self, runner):
        finished = asyncio.Event()

        async def work():
            await asyncio.sleep(0.05)
            finished.set()

        runner.spawn(work(), name="slow")

        assert not finished.is_set()
        assert runner.pending == 1
        await runner.drain()
        assert finished.is_set()
        assert runner.pending == 0

    async def test_failures_are_logged_not_raised(self, runner, mock_logger):
        async def explode():
            raise RuntimeError("counter store down")

        runner.spawn(explode(), name="explode")
        await runner.drain()

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["task_name"] == "explode"

    async def test_concurrency_is_bounded(self, runner):
        running = 0
        peak = 0

        async def work():
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1

        for i in range(6):
            runner.spawn(work(), name=f"w{i}")
        await runner.drain()

        assert peak == 2

    async def test_drain_cancels_leftovers_after_timeout(self, runner, mock_logger):
        runner.spawn(asyncio.sleep(10), name="stuck")

        await runner.drain(timeout=0.05)

        assert runner.pending == 0
        assert mock_logger.warning.call_args.args[0] == "background_tasks_cancelled"
