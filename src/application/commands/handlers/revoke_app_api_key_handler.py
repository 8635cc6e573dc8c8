"""Revoke app API key handler.

Flow:
1. Verify the app exists and belongs to the user
2. Find the app's active key
3. Mark it inactive and persist
4. Invalidate the user's cached summaries
"""

from datetime import UTC, datetime
from uuid import UUID

from src.application.commands.api_key_commands import RevokeAppApiKey
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.errors.api_key_error import ApiKeyError
from src.domain.errors.app_error import AppError
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.app_repository import AppRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.summary_cache_protocol import SummaryCacheProtocol


class RevokeAppApiKeyHandler:
    """Handler for RevokeAppApiKey command."""

    def __init__(
        self,
        app_repo: AppRepository,
        api_key_repo: ApiKeyRepository,
        summary_cache: SummaryCacheProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._app_repo = app_repo
        self._api_key_repo = api_key_repo
        self._summary_cache = summary_cache
        self._logger = logger

    async def handle(self, cmd: RevokeAppApiKey) -> Result[UUID, DomainError]:
        app = await self._app_repo.find_by_id(cmd.app_id)
        if app is None or not app.is_owned_by(cmd.user_id):
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.APP_NOT_FOUND,
                    message=AppError.NOT_FOUND,
                    resource_type="App",
                    resource_id=str(cmd.app_id),
                )
            )

        api_key = await self._api_key_repo.find_active_by_app(cmd.app_id)
        if api_key is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.API_KEY_NOT_FOUND,
                    message=ApiKeyError.NO_ACTIVE_KEY,
                    resource_type="ApiKey",
                    resource_id=str(cmd.app_id),
                )
            )

        api_key.revoke(datetime.now(UTC))
        await self._api_key_repo.update(api_key)

        await self._summary_cache.invalidate_user(cmd.user_id)
        self._logger.info(
            "api_key_revoked",
            user_id=str(cmd.user_id),
            app_id=str(cmd.app_id),
            api_key_id=str(api_key.id),
        )
        return Success(value=api_key.id)
