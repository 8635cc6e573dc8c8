"""App and API key commands (CQRS write operations).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types
"""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RegisterApp:
    """Register an app and issue its first API key.

    Attributes:
        user_id: Owner.
        name: App display name.
        description: Optional free text.
        url: Optional app URL.
        ip_restrictions: Allowed sources for the first key.
    """

    user_id: UUID
    name: str
    description: str | None = None
    url: str | None = None
    ip_restrictions: list[str] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class CreateApiKey:
    """Issue a key for an app that has no active key."""

    user_id: UUID
    app_id: UUID
    ip_restrictions: list[str] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class RevokeApiKey:
    """Deactivate a key. Its events remain."""

    user_id: UUID
    key_id: UUID


@dataclass(frozen=True, kw_only=True)
class RegenerateApiKey:
    """Replace a key's secret and expiry, reactivating it if revoked."""

    user_id: UUID
    key_id: UUID


@dataclass(frozen=True, kw_only=True)
class RevokeAppApiKey:
    """Revoke whichever key is currently active on an app."""

    user_id: UUID
    app_id: UUID
