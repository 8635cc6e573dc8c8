"""API key (tenant credential) domain entity.

Identifies the app submitting or querying events. Only a SHA-256 digest of
the secret is held; the plaintext exists once, in the create/regenerate
response.

State Machine:
    ACTIVE --revoke--> REVOKED --regenerate--> ACTIVE
    ACTIVE --(time passes)--> EXPIRED --auto-revoke on use--> REVOKED

Keys are never hard-deleted because events reference them.

Usage:
    key = ApiKey(
        id=uuid7(),
        user_id=user.id,
        app_id=app.id,
        key_hash=key_hash,
        key_prefix=prefix,
        expires_at=now + timedelta(days=30),
    )
    if key.is_usable(now) and key.allows_ip(client_ip):
        key.mark_used(now)
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.value_objects.ip_restriction import IpRestriction


@dataclass
class ApiKey:
    """Tenant credential.

    Attributes:
        id: Unique key identifier (also the rate-limit identifier).
        user_id: Owning user.
        app_id: Owning app.
        key_hash: SHA-256 hex digest of the secret.
        key_prefix: First characters of the secret, for display.
        expires_at: Moment after which the key is rejected.
        is_active: False once revoked.
        ip_restrictions: Allowed sources (exact IPs or CIDR blocks); empty
            means unrestricted.
        last_used_at: Last successful authentication.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: UUID
    user_id: UUID
    app_id: UUID
    key_hash: str
    key_prefix: str
    expires_at: datetime
    is_active: bool = True
    ip_restrictions: list[str] = field(default_factory=list)
    last_used_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate restrictions eagerly.

        Raises:
            ValueError: If an IP restriction entry cannot be parsed.
        """
        IpRestriction.parse(self.ip_restrictions)

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_usable(self, now: datetime | None = None) -> bool:
        """Active and not expired."""
        return self.is_active and not self.is_expired(now)

    def allows_ip(self, address: str | None) -> bool:
        return IpRestriction.parse(self.ip_restrictions).allows(address)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id

    # -------------------------------------------------------------------------
    # State Transitions
    # -------------------------------------------------------------------------

    def revoke(self, now: datetime | None = None) -> None:
        self.is_active = False
        self.updated_at = now or datetime.now(UTC)

    def rotate(
        self,
        *,
        key_hash: str,
        key_prefix: str,
        expires_at: datetime,
        now: datetime | None = None,
    ) -> None:
        """Replace the secret and expiry; reactivates a revoked key."""
        self.key_hash = key_hash
        self.key_prefix = key_prefix
        self.expires_at = expires_at
        self.is_active = True
        self.updated_at = now or datetime.now(UTC)

    def mark_used(self, now: datetime | None = None) -> None:
        self.last_used_at = now or datetime.now(UTC)
