"""User domain entity.

Users are created by the external login collaborator (OAuth). This service
only reads them to attribute apps and API keys to an owner.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class User:
    """Account owning apps and API keys.

    Attributes:
        id: Unique user identifier.
        email: Contact address.
        first_name: Optional given name.
        last_name: Optional family name.
        oauth_id: Identifier at the OAuth provider.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    oauth_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or self.email
