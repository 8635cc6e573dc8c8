"""Create API key handler.

Flow:
1. Verify the app exists and belongs to the user
2. Refuse if the app already has an active key (checked, then enforced
   by the database on insert)
3. Generate and persist the key
4. Return the plaintext key (shown once)
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.application.commands.api_key_commands import CreateApiKey
from src.application.dtos.api_key_dtos import IssuedApiKey
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError, NotFoundError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.api_key import ApiKey
from src.domain.errors.api_key_error import ActiveApiKeyConflictError, ApiKeyError
from src.domain.errors.app_error import AppError
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.api_key_service_protocol import ApiKeyServiceProtocol
from src.domain.protocols.app_repository import AppRepository
from src.domain.protocols.logger_protocol import LoggerProtocol


def _already_active() -> Failure[ConflictError]:
    return Failure(
        error=ConflictError(
            code=ErrorCode.API_KEY_ALREADY_ACTIVE,
            message=ApiKeyError.ALREADY_ACTIVE,
            resource_type="ApiKey",
            conflicting_field="app_id",
        )
    )


class CreateApiKeyHandler:
    """Handler for CreateApiKey command."""

    def __init__(
        self,
        app_repo: AppRepository,
        api_key_repo: ApiKeyRepository,
        api_key_service: ApiKeyServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._app_repo = app_repo
        self._api_key_repo = api_key_repo
        self._api_key_service = api_key_service
        self._logger = logger

    async def handle(self, cmd: CreateApiKey) -> Result[IssuedApiKey, DomainError]:
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

        if await self._api_key_repo.find_active_by_app(cmd.app_id) is not None:
            return _already_active()

        now = datetime.now(UTC)
        plaintext, key_hash, key_prefix = self._api_key_service.generate_key()
        try:
            api_key = ApiKey(
                id=uuid7(),
                user_id=cmd.user_id,
                app_id=cmd.app_id,
                key_hash=key_hash,
                key_prefix=key_prefix,
                expires_at=self._api_key_service.expires_at(now),
                ip_restrictions=list(cmd.ip_restrictions),
                created_at=now,
                updated_at=now,
            )
        except ValueError as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_IP_RESTRICTION,
                    message=f"{ApiKeyError.INVALID_IP_RESTRICTION}: {e}",
                    field="ipRestrictions",
                )
            )

        try:
            await self._api_key_repo.save(api_key)
        except ActiveApiKeyConflictError:
            # Another request activated a key between the check and the insert
            return _already_active()

        self._logger.info(
            "api_key_created",
            user_id=str(cmd.user_id),
            app_id=str(cmd.app_id),
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
