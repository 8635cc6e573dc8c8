"""UserRepository protocol (port)."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User


class UserRepository(Protocol):
    """Read access to users provisioned by the login collaborator."""

    async def find_by_id(self, user_id: UUID) -> User | None: ...

    async def find_by_email(self, email: str) -> User | None:
        """Case-insensitive email lookup."""
        ...

    async def save(self, user: User) -> None: ...
