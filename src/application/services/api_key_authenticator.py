"""API key authentication.

Resolves an X-API-Key header value into an active credential.

Flow:
1. Hash the presented key and look it up
2. Reject unknown or revoked keys (401)
3. Reject expired keys (401), revoking them on the way
4. Reject callers outside the key's IP restrictions (403)
5. Record last use (best effort)
"""

from datetime import UTC, datetime

from src.application.dtos.api_key_dtos import AuthenticatedApiKey
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, AuthorizationError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.errors.api_key_error import ApiKeyError
from src.domain.protocols.api_key_repository import ApiKeyRepository
from src.domain.protocols.api_key_service_protocol import ApiKeyServiceProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol


class ApiKeyAuthenticator:
    """Validates presented API keys."""

    def __init__(
        self,
        *,
        api_key_repo: ApiKeyRepository,
        api_key_service: ApiKeyServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._api_key_repo = api_key_repo
        self._api_key_service = api_key_service
        self._logger = logger

    async def authenticate(
        self,
        presented_key: str | None,
        *,
        client_ip: str | None,
    ) -> Result[AuthenticatedApiKey, DomainError]:
        """Authenticate a key for a request from ``client_ip``.

        Returns:
            Success(AuthenticatedApiKey), or Failure with
            AuthenticationError (missing, unknown, revoked, expired) or
            AuthorizationError (IP not allowed).
        """
        if not presented_key:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.API_KEY_MISSING,
                    message=ApiKeyError.MISSING,
                )
            )

        api_key = await self._api_key_repo.find_by_hash(
            self._api_key_service.hash_key(presented_key)
        )
        if api_key is None:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.API_KEY_INVALID,
                    message=ApiKeyError.INVALID,
                )
            )

        if not api_key.is_active:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.API_KEY_REVOKED,
                    message=ApiKeyError.REVOKED,
                )
            )

        now = datetime.now(UTC)
        if api_key.is_expired(now):
            api_key.revoke(now)
            try:
                await self._api_key_repo.update(api_key)
            except Exception as e:
                self._logger.warning(
                    "api_key_auto_revoke_failed",
                    api_key_id=str(api_key.id),
                    error_message=str(e),
                )
            else:
                self._logger.info("api_key_auto_revoked", api_key_id=str(api_key.id))
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.API_KEY_EXPIRED,
                    message=ApiKeyError.EXPIRED,
                )
            )

        if not api_key.allows_ip(client_ip):
            self._logger.info(
                "api_key_ip_rejected",
                api_key_id=str(api_key.id),
                client_ip=client_ip,
            )
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.IP_NOT_ALLOWED,
                    message=ApiKeyError.IP_NOT_ALLOWED,
                )
            )

        api_key.mark_used(now)
        try:
            await self._api_key_repo.update(api_key)
        except Exception as e:
            self._logger.warning(
                "api_key_last_used_update_failed",
                api_key_id=str(api_key.id),
                error_message=str(e),
            )

        return Success(
            value=AuthenticatedApiKey(
                key_id=api_key.id,
                user_id=api_key.user_id,
                app_id=api_key.app_id,
            )
        )
