"""ApiKeyRepository protocol (port).

Keys are looked up by the digest of the presented secret, never by the
secret itself.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.api_key import ApiKey


class ApiKeyRepository(Protocol):
    """API key persistence operations."""

    async def find_by_id(self, key_id: UUID) -> ApiKey | None: ...

    async def find_by_hash(self, key_hash: str) -> ApiKey | None:
        """Key whose secret digest equals ``key_hash`` (active or not)."""
        ...

    async def find_by_user_id(self, user_id: UUID) -> list[ApiKey]:
        """All keys of a user, newest first."""
        ...

    async def find_ids_by_user(
        self,
        user_id: UUID,
        app_id: UUID | None = None,
    ) -> list[UUID]:
        """Ids of every key (active or revoked) of a user, optionally one app."""
        ...

    async def find_active_by_app(self, app_id: UUID) -> ApiKey | None: ...

    async def find_expired(self, now: datetime) -> list[ApiKey]:
        """Active keys whose expiry has passed."""
        ...

    async def count_active_by_user(self, user_id: UUID) -> int: ...

    async def save(self, api_key: ApiKey) -> None:
        """Insert a key.

        Raises:
            ActiveApiKeyConflictError: If the app already has an active key.
        """
        ...

    async def update(self, api_key: ApiKey) -> None:
        """Write a key back.

        Raises:
            ActiveApiKeyConflictError: If reactivating would leave two active
                keys on the app.
        """
        ...
