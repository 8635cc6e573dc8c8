"""API tests for app registration and API key management.

Tests:
- POST /api/v1/apps (201, plaintext key returned once)
- GET /api/v1/api-keys
- POST /api/v1/api-keys (201, 409 while a key is active)
- DELETE /api/v1/api-keys/{key_id}
- POST /api/v1/api-keys/{key_id}/regenerate
- Dashboard authentication (X-User-Id)
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from uuid_extensions import uuid7

from src.application.dtos.api_key_dtos import (
    ApiKeyListItem,
    ApiKeyListResult,
    IssuedApiKey,
    RegisteredApp,
)
from src.core.container import (
    get_app_api_key_handler,
    get_create_api_key_handler,
    get_list_api_keys_handler,
    get_regenerate_api_key_handler,
    get_register_app_handler,
    get_revoke_api_key_handler,
    get_revoke_app_api_key_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, NotFoundError
from src.core.result import Failure, Success
from src.main import app

EXPIRES = datetime(2030, 1, 1, tzinfo=UTC)


def _issued(app_id=None, key_id=None) -> IssuedApiKey:
    return IssuedApiKey(
        key_id=key_id or uuid7(),
        app_id=app_id or uuid7(),
        api_key="bk_plaintext-secret",
        key_prefix="bk_plaint",
        expires_at=EXPIRES,
        ip_restrictions=[],
    )


def _override(factory, result=None):
    handler = MagicMock()
    handler.handle = AsyncMock(return_value=result)
    app.dependency_overrides[factory] = lambda: handler
    return handler


@pytest.fixture(autouse=True)
def _pop_handler_overrides():
    yield
    for factory in (
        get_register_app_handler,
        get_create_api_key_handler,
        get_list_api_keys_handler,
        get_revoke_api_key_handler,
        get_regenerate_api_key_handler,
        get_app_api_key_handler,
        get_revoke_app_api_key_handler,
    ):
        app.dependency_overrides.pop(factory, None)


# =============================================================================
# Apps
# =============================================================================


@pytest.mark.api
class TestRegisterApp:
    def test_returns_app_with_plaintext_key(self, client, user_headers, dashboard_user):
        app_id = uuid7()
        handler = _override(
            get_register_app_handler,
            Success(
                value=RegisteredApp(
                    app_id=app_id,
                    name="Marketing site",
                    description=None,
                    url="https://example.com",
                    api_key=_issued(app_id=app_id),
                )
            ),
        )

        response = client.post(
            "/api/v1/apps",
            json={"name": "Marketing site", "url": "https://example.com"},
            headers=user_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == str(app_id)
        assert body["api_key"]["api_key"] == "bk_plaintext-secret"
        assert body["api_key"]["app_id"] == str(app_id)
        command = handler.handle.await_args.args[0]
        assert command.user_id == dashboard_user.id
        assert command.ip_restrictions == []

    def test_blank_name_is_422(self, client, user_headers):
        handler = _override(get_register_app_handler)

        response = client.post("/api/v1/apps", json={"name": ""}, headers=user_headers)

        assert response.status_code == 422
        handler.handle.assert_not_awaited()

    def test_requires_user(self, client):
        handler = _override(get_register_app_handler)

        response = client.post("/api/v1/apps", json={"name": "Marketing site"})

        assert response.status_code == 401
        handler.handle.assert_not_awaited()


# =============================================================================
# Keys
# =============================================================================


@pytest.mark.api
class TestListApiKeys:
    def test_lists_keys(self, client, user_headers):
        now = datetime.now(UTC)
        item = ApiKeyListItem(
            key_id=uuid7(),
            app_id=uuid7(),
            app_name="Marketing site",
            key_prefix="bk_AbC12xY",
            is_active=True,
            is_expired=False,
            expires_at=now + timedelta(days=30),
            ip_restrictions=["10.0.0.0/8"],
            last_used_at=None,
            created_at=now,
        )
        handler = _override(
            get_list_api_keys_handler,
            Success(value=ApiKeyListResult(keys=[item], total_count=1, active_count=1)),
        )

        response = client.get(
            "/api/v1/api-keys", params={"active_only": "true"}, headers=user_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total_count"] == 1
        assert body["active_count"] == 1
        assert body["api_keys"][0]["app_name"] == "Marketing site"
        assert "api_key" not in body["api_keys"][0]
        assert handler.handle.await_args.args[0].active_only is True


@pytest.mark.api
class TestCreateApiKey:
    def test_returns_201(self, client, user_headers):
        app_id = uuid7()
        handler = _override(get_create_api_key_handler, Success(value=_issued(app_id=app_id)))

        response = client.post(
            "/api/v1/api-keys",
            json={"app_id": str(app_id), "ip_restrictions": ["203.0.113.0/24"]},
            headers=user_headers,
        )

        assert response.status_code == 201
        assert response.json()["key_prefix"] == "bk_plaint"
        command = handler.handle.await_args.args[0]
        assert command.app_id == app_id
        assert command.ip_restrictions == ["203.0.113.0/24"]

    def test_active_key_is_409(self, client, user_headers):
        _override(
            get_create_api_key_handler,
            Failure(
                error=ConflictError(
                    code=ErrorCode.API_KEY_ALREADY_ACTIVE,
                    message="App already has an active API key",
                    resource_type="ApiKey",
                    conflicting_field="app_id",
                )
            ),
        )

        response = client.post(
            "/api/v1/api-keys", json={"app_id": str(uuid7())}, headers=user_headers
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "App already has an active API key"

    def test_malformed_app_id_is_422(self, client, user_headers):
        _override(get_create_api_key_handler)

        response = client.post(
            "/api/v1/api-keys", json={"app_id": "nope"}, headers=user_headers
        )

        assert response.status_code == 422


@pytest.mark.api
class TestRevokeApiKey:
    def test_revokes(self, client, user_headers):
        key_id = uuid7()
        handler = _override(get_revoke_api_key_handler, Success(value=key_id))

        response = client.delete(f"/api/v1/api-keys/{key_id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"id": str(key_id), "message": "API key revoked"}
        assert handler.handle.await_args.args[0].key_id == key_id

    def test_unknown_key_is_404(self, client, user_headers):
        _override(
            get_revoke_api_key_handler,
            Failure(
                error=NotFoundError(
                    code=ErrorCode.API_KEY_NOT_FOUND,
                    message="API key not found",
                    resource_type="ApiKey",
                    resource_id="x",
                )
            ),
        )

        response = client.delete(f"/api/v1/api-keys/{uuid7()}", headers=user_headers)

        assert response.status_code == 404


@pytest.mark.api
class TestRegenerateApiKey:
    def test_returns_new_secret(self, client, user_headers):
        key_id = uuid7()
        handler = _override(get_regenerate_api_key_handler, Success(value=_issued(key_id=key_id)))

        response = client.post(f"/api/v1/api-keys/{key_id}/regenerate", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["id"] == str(key_id)
        assert response.json()["api_key"] == "bk_plaintext-secret"
        assert handler.handle.await_args.args[0].key_id == key_id

    def test_requires_user(self, client):
        handler = _override(get_regenerate_api_key_handler)

        response = client.post(f"/api/v1/api-keys/{uuid7()}/regenerate")

        assert response.status_code == 401
        handler.handle.assert_not_awaited()


# =============================================================================
# App-scoped key
# =============================================================================


def _not_found(code: ErrorCode, message: str) -> Failure:
    return Failure(
        error=NotFoundError(code=code, message=message, resource_type="App", resource_id="x")
    )


@pytest.mark.api
class TestAppApiKey:
    def test_returns_active_key_without_secret(self, client, user_headers, dashboard_user):
        app_id, key_id = uuid7(), uuid7()
        handler = _override(
            get_app_api_key_handler,
            Success(
                value=ApiKeyListItem(
                    key_id=key_id,
                    app_id=app_id,
                    app_name="Marketing site",
                    key_prefix="bk_AbC12xY",
                    is_active=True,
                    is_expired=False,
                    expires_at=EXPIRES,
                    ip_restrictions=["10.0.0.0/8"],
                    last_used_at=None,
                    created_at=datetime(2024, 3, 1, tzinfo=UTC),
                )
            ),
        )

        response = client.get(f"/api/v1/apps/{app_id}/api-key", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(key_id)
        assert body["key_prefix"] == "bk_AbC12xY"
        assert "api_key" not in body
        query = handler.handle.await_args.args[0]
        assert query.app_id == app_id
        assert query.user_id == dashboard_user.id

    def test_foreign_app_is_404(self, client, user_headers):
        _override(
            get_app_api_key_handler,
            _not_found(ErrorCode.APP_NOT_FOUND, "App not found for user"),
        )

        response = client.get(f"/api/v1/apps/{uuid7()}/api-key", headers=user_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "App not found for user"

    def test_malformed_app_id_is_422(self, client, user_headers):
        response = client.get("/api/v1/apps/not-a-uuid/api-key", headers=user_headers)

        assert response.status_code == 422

    def test_revokes_active_key(self, client, user_headers):
        app_id, key_id = uuid7(), uuid7()
        handler = _override(get_revoke_app_api_key_handler, Success(value=key_id))

        response = client.post(f"/api/v1/apps/{app_id}/revoke-key", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == {"id": str(key_id), "message": "API key revoked"}
        assert handler.handle.await_args.args[0].app_id == app_id

    def test_revoke_without_active_key_is_404(self, client, user_headers):
        _override(
            get_revoke_app_api_key_handler,
            _not_found(ErrorCode.API_KEY_NOT_FOUND, "App has no active API key"),
        )

        response = client.post(f"/api/v1/apps/{uuid7()}/revoke-key", headers=user_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "App has no active API key"

    def test_revoke_requires_user(self, client):
        handler = _override(get_revoke_app_api_key_handler)

        response = client.post(f"/api/v1/apps/{uuid7()}/revoke-key")

        assert response.status_code == 401
        handler.handle.assert_not_awaited()
