"""API key management DTOs.

``IssuedApiKey`` is the only DTO that carries a plaintext secret; it is
produced by create, register and regenerate and never stored.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class IssuedApiKey:
    """Freshly generated key, shown to the caller once.

    Attributes:
        key_id: Key identifier.
        app_id: App the key belongs to.
        api_key: Plaintext secret.
        key_prefix: Display prefix.
        expires_at: Expiry timestamp.
        ip_restrictions: Allowed sources (empty means any).
    """

    key_id: UUID
    app_id: UUID
    api_key: str
    key_prefix: str
    expires_at: datetime
    ip_restrictions: list[str]


@dataclass(frozen=True, kw_only=True)
class RegisteredApp:
    """Result of app registration: the app plus its first key."""

    app_id: UUID
    name: str
    description: str | None
    url: str | None
    api_key: IssuedApiKey


@dataclass(frozen=True, kw_only=True)
class ApiKeyListItem:
    """Key as listed to its owner (no secret)."""

    key_id: UUID
    app_id: UUID
    app_name: str | None
    key_prefix: str
    is_active: bool
    is_expired: bool
    expires_at: datetime
    ip_restrictions: list[str]
    last_used_at: datetime | None
    created_at: datetime


@dataclass(frozen=True, kw_only=True)
class ApiKeyListResult:
    keys: list[ApiKeyListItem]
    total_count: int
    active_count: int


@dataclass(frozen=True, kw_only=True)
class AuthenticatedApiKey:
    """Credential resolved from an X-API-Key header.

    Attributes:
        key_id: Credential id (rate-limit identifier, event owner).
        user_id: Owning user.
        app_id: Owning app.
    """

    key_id: UUID
    user_id: UUID
    app_id: UUID
