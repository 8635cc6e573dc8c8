"""Repository dependency factories.

Request-scoped repository instances for domain entity persistence.
Each request gets fresh repository instances with a shared session
(FastAPI caches ``get_db_session`` per request).
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from src.infrastructure.persistence.repositories import (
        ApiKeyRepository,
        AppRepository,
        EventRepository,
        UserRepository,
    )


# ============================================================================
# Repository Factories (Request-Scoped)
# ============================================================================


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "UserRepository":
    """Get user repository (request-scoped).

    Args:
        session: Database session for request duration.
            Injected via Depends(get_db_session).

    Usage:
        @router.post("/apps")
        async def register_app(
            user_repo: UserRepository = Depends(get_user_repository),
        ):
            ...
    """
    from src.infrastructure.persistence.repositories import UserRepository

    return UserRepository(session=session)


async def get_app_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "AppRepository":
    from src.infrastructure.persistence.repositories import AppRepository

    return AppRepository(session=session)


async def get_api_key_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "ApiKeyRepository":
    """Get API key repository (request-scoped)."""
    from src.infrastructure.persistence.repositories import ApiKeyRepository

    return ApiKeyRepository(session=session)


async def get_event_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "EventRepository":
    """Get event repository (request-scoped)."""
    from src.infrastructure.persistence.repositories import EventRepository

    return EventRepository(session=session)
