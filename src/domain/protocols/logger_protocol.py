"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging. Implementations log a message plus
key-value context and must never receive secrets: API key plaintext is
never passed to a logger, only key ids and display prefixes.

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("event_recorded", event_id=str(event.id), app_id=str(app_id))

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.warning("cache_get_failed", key=key)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Degraded operation (store unavailable, request failing open)."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Operation failed; the system continues.

        Args:
            message: Event name or short description.
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return a new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
