"""Background task infrastructure."""

from src.infrastructure.tasks.background_task_runner import BackgroundTaskRunner

__all__ = ["BackgroundTaskRunner"]
