"""Unit tests for ApiKeyAuthenticator.

Reference:
    - src/application/services/api_key_authenticator.py
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import UUID

import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from src.application.services.api_key_authenticator import ApiKeyAuthenticator
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, AuthorizationError
from src.core.result import Failure, Success
from src.infrastructure.security.api_key_service import ApiKeyService
from tests.conftest import make_api_key

PLAINTEXT = "bk_test-secret-value"


@pytest.fixture
def user_id() -> UUID:
    return uuid7()


@pytest.fixture
def mock_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.find_by_hash.return_value = None
    return repo


@pytest.fixture
def authenticator(mock_repo, mock_logger) -> ApiKeyAuthenticator:
    return ApiKeyAuthenticator(
        api_key_repo=mock_repo,
        api_key_service=ApiKeyService(),
        logger=mock_logger,
    )


@pytest.mark.unit
class TestAuthenticateSuccess:
    async def test_active_key_resolves_to_owner(self, authenticator, mock_repo, user_id):
        # Arrange
        key = make_api_key(user_id=user_id, app_id=uuid7(), plaintext=PLAINTEXT)
        mock_repo.find_by_hash.return_value = key

        # Act
        result = await authenticator.authenticate(PLAINTEXT, client_ip="198.51.100.1")

        # Assert
        assert isinstance(result, Success)
        assert result.value.key_id == key.id
        assert result.value.user_id == user_id
        assert result.value.app_id == key.app_id
        mock_repo.find_by_hash.assert_awaited_once_with(ApiKeyService.hash_key(PLAINTEXT))

    async def test_records_last_use(self, authenticator, mock_repo, user_id):
        key = make_api_key(user_id=user_id, app_id=uuid7(), plaintext=PLAINTEXT)
        mock_repo.find_by_hash.return_value = key

        await authenticator.authenticate(PLAINTEXT, client_ip=None)

        assert key.last_used_at is not None
        mock_repo.update.assert_awaited_once_with(key)

    async def test_last_use_failure_does_not_reject(
        self, authenticator, mock_repo, mock_logger, user_id
    ):
        mock_repo.find_by_hash.return_value = make_api_key(
            user_id=user_id, app_id=uuid7(), plaintext=PLAINTEXT
        )
        mock_repo.update.side_effect = RuntimeError("db down")

        result = await authenticator.authenticate(PLAINTEXT, client_ip=None)

        assert isinstance(result, Success)
        mock_logger.warning.assert_called_once()

    async def test_caller_inside_cidr_is_allowed(self, authenticator, mock_repo, user_id):
        mock_repo.find_by_hash.return_value = make_api_key(
            user_id=user_id,
            app_id=uuid7(),
            plaintext=PLAINTEXT,
            ip_restrictions=["10.0.0.0/8"],
        )

        result = await authenticator.authenticate(PLAINTEXT, client_ip="10.20.30.40")

        assert isinstance(result, Success)


@pytest.mark.unit
class TestAuthenticateFailure:
    async def test_missing_key(self, authenticator, mock_repo):
        result = await authenticator.authenticate(None, client_ip=None)

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthenticationError)
        assert result.error.code == ErrorCode.API_KEY_MISSING
        mock_repo.find_by_hash.assert_not_awaited()

    async def test_unknown_key(self, authenticator):
        result = await authenticator.authenticate("bk_nope", client_ip=None)

        assert result.error.code == ErrorCode.API_KEY_INVALID

    async def test_revoked_key(self, authenticator, mock_repo, user_id):
        mock_repo.find_by_hash.return_value = make_api_key(
            user_id=user_id, app_id=uuid7(), plaintext=PLAINTEXT, is_active=False
        )

        result = await authenticator.authenticate(PLAINTEXT, client_ip=None)

        assert isinstance(result.error, AuthenticationError)
        assert result.error.code == ErrorCode.API_KEY_REVOKED
        mock_repo.update.assert_not_awaited()

    async def test_expired_key_is_rejected_and_revoked(self, authenticator, mock_repo, user_id):
        key = make_api_key(
            user_id=user_id,
            app_id=uuid7(),
            plaintext=PLAINTEXT,
            expires_at=datetime.now(UTC) - timedelta(minutes=1),
        )
        mock_repo.find_by_hash.return_value = key

        result = await authenticator.authenticate(PLAINTEXT, client_ip=None)

        assert result.error.code == ErrorCode.API_KEY_EXPIRED
        assert key.is_active is False
        mock_repo.update.assert_awaited_once_with(key)

    async def test_caller_outside_restrictions_is_forbidden(
        self, authenticator, mock_repo, user_id
    ):
        mock_repo.find_by_hash.return_value = make_api_key(
            user_id=user_id,
            app_id=uuid7(),
            plaintext=PLAINTEXT,
            ip_restrictions=["10.0.0.1"],
        )

        result = await authenticator.authenticate(PLAINTEXT, client_ip="10.0.0.10")

        assert isinstance(result.error, AuthorizationError)
        assert result.error.code == ErrorCode.IP_NOT_ALLOWED

    async def test_unknown_caller_with_restrictions_is_forbidden(
        self, authenticator, mock_repo, user_id
    ):
        mock_repo.find_by_hash.return_value = make_api_key(
            user_id=user_id,
            app_id=uuid7(),
            plaintext=PLAINTEXT,
            ip_restrictions=["10.0.0.0/8"],
        )

        result = await authenticator.authenticate(PLAINTEXT, client_ip=None)

        assert result.error.code == ErrorCode.IP_NOT_ALLOWED


@pytest.mark.unit
class TestAuthenticateExpiryBoundary:
    async def test_key_expires_at_its_expiry_instant(self, authenticator, mock_repo, user_id):
        key = make_api_key(
            user_id=user_id,
            app_id=uuid7(),
            plaintext=PLAINTEXT,
            expires_at=datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
        )
        mock_repo.find_by_hash.return_value = key

        with freeze_time("2024-03-01 12:00:00"):
            result = await authenticator.authenticate(PLAINTEXT, client_ip=None)

        assert result.error.code == ErrorCode.API_KEY_EXPIRED
        assert key.updated_at == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)

    async def test_key_is_valid_until_expiry(self, authenticator, mock_repo, user_id):
        key = make_api_key(
            user_id=user_id,
            app_id=uuid7(),
            plaintext=PLAINTEXT,
            expires_at=datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
        )
        mock_repo.find_by_hash.return_value = key

        with freeze_time("2024-03-01 11:59:59"):
            result = await authenticator.authenticate(PLAINTEXT, client_ip=None)

        assert isinstance(result, Success)
        assert key.last_used_at == datetime(2024, 3, 1, 11, 59, 59, tzinfo=UTC)
