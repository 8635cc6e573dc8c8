"""Regenerate API key handler.

Flow:
1. Find key by ID and verify ownership
2. Refuse to reactivate if the app has a different active key
3. Rotate secret and expiry (reactivates a revoked key)
4. Invalidate the user's cached summaries
5. Return the new plaintext key (shown once)
"""

from datetime import UTC, datetime

from src.application.commands.api_key_commands import RegenerateApiKey
from src.application.dtos.api_key_dtos import IssuedApiKey
from src.core.enums import ErrorCode
from src.core.errors import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
)
from src.core.result import Failure, Result, Success
from src.domain.errors.api_key_error import ActiveApiKeyConflictError, ApiKeyError
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.api_key_service_protocol import ApiKeyServiceProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.summary_cache_protocol import SummaryCacheProtocol


def _already_active() -> Failure[ConflictError]:
    return Failure(
        error=ConflictError(
            code=ErrorCode.API_KEY_ALREADY_ACTIVE,
            message=ApiKeyError.ALREADY_ACTIVE,
            resource_type="ApiKey",
            conflicting_field="app_id",
        )
    )


class RegenerateApiKeyHandler:
    """Handler for RegenerateApiKey command."""

    def __init__(
        self,
        api_key_repo: ApiKeyRepository,
        api_key_service: ApiKeyServiceProtocol,
        summary_cache: SummaryCacheProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._api_key_repo = api_key_repo
        self._api_key_service = api_key_service
        self._summary_cache = summary_cache
        self._logger = logger

    async def handle(self, cmd: RegenerateApiKey) -> Result[IssuedApiKey, DomainError]:
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

        if not api_key.is_active:
            active = await self._api_key_repo.find_active_by_app(api_key.app_id)
            if active is not None and active.id != api_key.id:
                return _already_active()

        now = datetime.now(UTC)
        plaintext, key_hash, key_prefix = self._api_key_service.generate_key()
        api_key.rotate(
            key_hash=key_hash,
            key_prefix=key_prefix,
            expires_at=self._api_key_service.expires_at(now),
            now=now,
        )
        try:
            await self._api_key_repo.update(api_key)
        except ActiveApiKeyConflictError:
            return _already_active()

        await self._summary_cache.invalidate_user(cmd.user_id)
        self._logger.info(
            "api_key_regenerated",
            user_id=str(cmd.user_id),
            api_key_id=str(api_key.id),
        )

        return Success(
            value=IssuedApiKey(
                key_id=api_key.id,
                app_id=api_key.app_id,
                api_key=plaintext,
                key_prefix=api_key.key_prefix,
                expires_at=api_key.expires_at,
                ip_restrictions=list(api_key.ip_restrictions),
            )
        )
