"""Revoke API key handler.

Flow:
1. Find key by ID
2. Verify ownership (user_id matches)
3. Mark key inactive and persist
4. Invalidate the user's cached summaries
5. Return the key id

Revoking an already revoked key succeeds (idempotent).
"""

from datetime import UTC, datetime
from uuid import UUID

from src.application.commands.api_key_commands import RevokeApiKey
from src.core.enums import ErrorCode
from src.core.errors import AuthorizationError, DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.errors.api_key_error import ApiKeyError
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.summary_cache_protocol import SummaryCacheProtocol


class RevokeApiKeyHandler:
    """Handler for RevokeApiKey command."""

    def __init__(
        self,
        api_key_repo: ApiKeyRepository,
        summary_cache: SummaryCacheProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._api_key_repo = api_key_repo
        self._summary_cache = summary_cache
        self._logger = logger

    async def handle(self, cmd: RevokeApiKey) -> Result[UUID, DomainError]:
        """Handle revoke command.

        Returns:
            Success(key_id) on revocation.
            Failure(NotFoundError) if the key does not exist.
            Failure(AuthorizationError) if another user owns it.
        """
        api_key = await self._api_key_repo.find_by_id(cmd.key_id)
        if api_key is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.API_KEY_NOT_FOUND,
                    message=ApiKeyError.NOT_FOUND,
                    resource_type="ApiKey",
                    resource_id=str(cmd.key_id),
                )
            )

        if not api_key.is_owned_by(cmd.user_id):
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.RESOURCE_NOT_OWNED,
                    message=ApiKeyError.NOT_OWNED,
                )
            )

        if api_key.is_active:
            api_key.revoke(datetime.now(UTC))
            await self._api_key_repo.update(api_key)

        await self._summary_cache.invalidate_user(cmd.user_id)
        self._logger.info(
            "api_key_revoked",
            user_id=str(cmd.user_id),
            api_key_id=str(cmd.key_id),
        )
        return Success(value=cmd.key_id)
