"""App and API key handler dependency factories.

Request-scoped handler instances for app registration and key management.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import (
    get_api_key_service,
    get_db_session,
    get_logger,
    get_summary_cache,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.create_api_key_handler import (
        CreateApiKeyHandler,
    )
    from src.application.commands.handlers.regenerate_api_key_handler import (
        RegenerateApiKeyHandler,
    )
    from src.application.commands.handlers.register_app_handler import (
        RegisterAppHandler,
    )
    from src.application.commands.handlers.revoke_api_key_handler import (
        RevokeApiKeyHandler,
    )
    from src.application.commands.handlers.revoke_app_api_key_handler import (
        RevokeAppApiKeyHandler,
    )
    from src.application.queries.handlers.get_app_api_key_handler import (
        GetAppApiKeyHandler,
    )
    from src.application.queries.handlers.list_api_keys_handler import (
        ListApiKeysHandler,
    )


async def get_register_app_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RegisterAppHandler":
    """Get RegisterApp command handler (request-scoped).

    Creates handler with:
    - UserRepository, AppRepository, ApiKeyRepository (same session, so the
      app and its first key commit together)
    - ApiKeyService (app-scoped)
    """
    from src.application.commands.handlers.register_app_handler import (
        RegisterAppHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ApiKeyRepository,
        AppRepository,
        UserRepository,
    )

    return RegisterAppHandler(
        user_repo=UserRepository(session=session),
        app_repo=AppRepository(session=session),
        api_key_repo=ApiKeyRepository(session=session),
        api_key_service=get_api_key_service(),
        logger=get_logger(),
    )


async def get_create_api_key_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CreateApiKeyHandler":
    from src.application.commands.handlers.create_api_key_handler import (
        CreateApiKeyHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ApiKeyRepository,
        AppRepository,
    )

    return CreateApiKeyHandler(
        app_repo=AppRepository(session=session),
        api_key_repo=ApiKeyRepository(session=session),
        api_key_service=get_api_key_service(),
        logger=get_logger(),
    )


async def get_revoke_api_key_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeApiKeyHandler":
    from src.application.commands.handlers.revoke_api_key_handler import (
        RevokeApiKeyHandler,
    )
    from src.infrastructure.persistence.repositories import ApiKeyRepository

    return RevokeApiKeyHandler(
        api_key_repo=ApiKeyRepository(session=session),
        summary_cache=get_summary_cache(),
        logger=get_logger(),
    )


async def get_regenerate_api_key_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RegenerateApiKeyHandler":
    from src.application.commands.handlers.regenerate_api_key_handler import (
        RegenerateApiKeyHandler,
    )
    from src.infrastructure.persistence.repositories import ApiKeyRepository

    return RegenerateApiKeyHandler(
        api_key_repo=ApiKeyRepository(session=session),
        api_key_service=get_api_key_service(),
        summary_cache=get_summary_cache(),
        logger=get_logger(),
    )


async def get_list_api_keys_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListApiKeysHandler":
    """Get ListApiKeys query handler (request-scoped)."""
    from src.application.queries.handlers.list_api_keys_handler import (
        ListApiKeysHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ApiKeyRepository,
        AppRepository,
    )

    return ListApiKeysHandler(
        api_key_repo=ApiKeyRepository(session=session),
        app_repo=AppRepository(session=session),
    )


async def get_app_api_key_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetAppApiKeyHandler":
    """Get GetAppApiKey query handler (request-scoped)."""
    from src.application.queries.handlers.get_app_api_key_handler import (
        GetAppApiKeyHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ApiKeyRepository,
        AppRepository,
    )

    return GetAppApiKeyHandler(
        app_repo=AppRepository(session=session),
        api_key_repo=ApiKeyRepository(session=session),
    )


async def get_revoke_app_api_key_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeAppApiKeyHandler":
    from src.application.commands.handlers.revoke_app_api_key_handler import (
        RevokeAppApiKeyHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ApiKeyRepository,
        AppRepository,
    )

    return RevokeAppApiKeyHandler(
        app_repo=AppRepository(session=session),
        api_key_repo=ApiKeyRepository(session=session),
        summary_cache=get_summary_cache(),
        logger=get_logger(),
    )
