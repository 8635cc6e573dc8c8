"""AppRepository protocol (port)."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.app import App


class AppRepository(Protocol):
    """App persistence operations."""

    async def find_by_id(self, app_id: UUID) -> App | None: ...

    async def find_by_user_id(self, user_id: UUID) -> list[App]:
        """Apps owned by a user, newest first."""
        ...

    async def save(self, app: App) -> None: ...
