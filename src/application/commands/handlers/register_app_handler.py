"""Register app handler.

Flow:
1. Verify the user exists
2. Build App and its first ApiKey (validation before any write)
3. Persist both in one transaction
4. Return the app with the plaintext key (shown once)
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.application.commands.api_key_commands import RegisterApp
from src.application.dtos.api_key_dtos import IssuedApiKey, RegisteredApp
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.api_key import ApiKey
from src.domain.entities.app import App
from src.domain.errors.api_key_error import ApiKeyError
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.api_key_service_protocol import ApiKeyServiceProtocol
from src.domain.protocols.app_repository import AppRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.user_repository import UserRepository


class RegisterAppHandler:
    """Handler for RegisterApp command."""

    def __init__(
        self,
        user_repo: UserRepository,
        app_repo: AppRepository,
        api_key_repo: ApiKeyRepository,
        api_key_service: ApiKeyServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._app_repo = app_repo
        self._api_key_repo = api_key_repo
        self._api_key_service = api_key_service
        self._logger = logger

    async def handle(self, cmd: RegisterApp) -> Result[RegisteredApp, DomainError]:
        """Handle RegisterApp command.

        Returns:
            Success(RegisteredApp) with the plaintext key.
            Failure(NotFoundError) if the user does not exist.
            Failure(ValidationError) for a bad name or IP restriction.
        """
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )

        now = datetime.now(UTC)
        try:
            app = App(
                id=uuid7(),
                user_id=cmd.user_id,
                name=cmd.name,
                description=cmd.description,
                url=cmd.url,
                created_at=now,
                updated_at=now,
            )
        except ValueError as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=str(e),
                    field="name",
                )
            )

        plaintext, key_hash, key_prefix = self._api_key_service.generate_key()
        try:
            api_key = ApiKey(
                id=uuid7(),
                user_id=cmd.user_id,
                app_id=app.id,
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

        await self._app_repo.save(app)
        await self._api_key_repo.save(api_key)

        self._logger.info(
            "app_registered",
            user_id=str(cmd.user_id),
            app_id=str(app.id),
            api_key_id=str(api_key.id),
        )

        return Success(
            value=RegisteredApp(
                app_id=app.id,
                name=app.name,
                description=app.description,
                url=app.url,
                api_key=IssuedApiKey(
                    key_id=api_key.id,
                    app_id=app.id,
                    api_key=plaintext,
                    key_prefix=api_key.key_prefix,
                    expires_at=api_key.expires_at,
                    ip_restrictions=list(api_key.ip_restrictions),
                ),
            )
        )
