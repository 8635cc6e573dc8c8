"""Get app API key query handler.

Returns metadata of the app's active key. Only the hash of a secret is
stored, so the plaintext cannot be shown again; callers that lost it
regenerate the key.
"""

from datetime import UTC, datetime

from src.application.dtos.api_key_dtos import ApiKeyListItem
from src.application.queries.api_key_queries import GetAppApiKey
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.errors.api_key_error import ApiKeyError
from src.domain.errors.app_error import AppError
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.app_repository import AppRepository


class GetAppApiKeyHandler:
    """Handler for GetAppApiKey query."""

    def __init__(
        self,
        app_repo: AppRepository,
        api_key_repo: ApiKeyRepository,
    ) -> None:
        self._app_repo = app_repo
        self._api_key_repo = api_key_repo

    async def handle(self, query: GetAppApiKey) -> Result[ApiKeyListItem, DomainError]:
        """Handle query.

        Returns:
            Success(ApiKeyListItem) for the active key.
            Failure(NotFoundError) if the app is missing, belongs to another
                user, or has no active key.
        """
        app = await self._app_repo.find_by_id(query.app_id)
        if app is None or not app.is_owned_by(query.user_id):
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.APP_NOT_FOUND,
                    message=AppError.NOT_FOUND,
                    resource_type="App",
                    resource_id=str(query.app_id),
                )
            )

        key = await self._api_key_repo.find_active_by_app(query.app_id)
        if key is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.API_KEY_NOT_FOUND,
                    message=ApiKeyError.NO_ACTIVE_KEY,
                    resource_type="ApiKey",
                    resource_id=str(query.app_id),
                )
            )

        return Success(
            value=ApiKeyListItem(
                key_id=key.id,
                app_id=key.app_id,
                app_name=app.name,
                key_prefix=key.key_prefix,
                is_active=key.is_active,
                is_expired=key.is_expired(datetime.now(UTC)),
                expires_at=key.expires_at,
                ip_restrictions=list(key.ip_restrictions),
                last_used_at=key.last_used_at,
                created_at=key.created_at,
            )
        )
