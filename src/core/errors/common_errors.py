"""Common error classes shared by all layers.

Error Types:
- ValidationError: malformed input
- NotFoundError: resource missing (or hidden because it belongs to another user)
- ConflictError: state conflict (second active key for an app)
- AuthenticationError: missing, unknown, revoked or expired API key
- AuthorizationError: credential valid but not allowed (IP restriction, ownership)
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (App, ApiKey, User).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict.

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that conflicts.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Credential could not be authenticated."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authenticated caller is not allowed to perform the operation.

    Attributes:
        required_permission: What was required, when applicable.
    """

    required_permission: str | None = None
