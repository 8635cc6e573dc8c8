"""List API keys query handler.

Fetches from database (no cache for list operations). Secrets are never
returned, only display prefixes.
"""

from datetime import UTC, datetime

from src.application.dtos.api_key_dtos import ApiKeyListItem, ApiKeyListResult
from src.application.queries.api_key_queries import ListApiKeys
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.app_repository import AppRepository


class ListApiKeysHandler:
    """Handler for listing a user's API keys."""

    def __init__(
        self,
        api_key_repo: ApiKeyRepository,
        app_repo: AppRepository,
    ) -> None:
        self._api_key_repo = api_key_repo
        self._app_repo = app_repo

    async def handle(self, query: ListApiKeys) -> Result[ApiKeyListResult, DomainError]:
        keys = await self._api_key_repo.find_by_user_id(query.user_id)
        app_names = {
            app.id: app.name for app in await self._app_repo.find_by_user_id(query.user_id)
        }

        now = datetime.now(UTC)
        items = [
            ApiKeyListItem(
                key_id=key.id,
                app_id=key.app_id,
                app_name=app_names.get(key.app_id),
                key_prefix=key.key_prefix,
                is_active=key.is_active,
                is_expired=key.is_expired(now),
                expires_at=key.expires_at,
                ip_restrictions=list(key.ip_restrictions),
                last_used_at=key.last_used_at,
                created_at=key.created_at,
            )
            for key in keys
            if key.is_active or not query.active_only
        ]

        return Success(
            value=ApiKeyListResult(
                keys=items,
                total_count=len(items),
                active_count=sum(1 for item in items if item.is_active),
            )
        )
