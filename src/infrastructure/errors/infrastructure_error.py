"""Infrastructure layer error types.

Redis failures are caught at the adapter boundary and returned as these
errors inside Failure results. Database failures propagate as exceptions to
the handlers, which map them to ``PERSISTENCE_FAILED``.
"""

from dataclasses import dataclass
from typing import Any

from src.core.errors import DomainError
from src.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        infrastructure_code: Store-specific error code for logs.
        details: Additional context (key, operation, original error).
    """

    infrastructure_code: InfrastructureErrorCode | None = None
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Counter/cache store (Redis) failure."""

    pass
