"""Base domain error for Result-based error flow.

DomainError instances are returned inside Failure, never raised. Every
layer (core, domain, infrastructure) derives its errors from this class so
the presentation layer can map any of them to an HTTP problem response.

Usage:
    from src.core.errors import DomainError
    from src.core.enums import ErrorCode

    @dataclass(frozen=True, slots=True, kw_only=True)
    class ApiKeyError(DomainError):
        pass
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code.
        message: Human-readable message, safe to show to API callers.
        details: Optional context for logs.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
