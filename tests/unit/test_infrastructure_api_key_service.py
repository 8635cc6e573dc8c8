"""Unit tests for ApiKeyService (generation, hashing, expiry)."""

from datetime import UTC, datetime, timedelta

import pytest

from src.infrastructure.security.api_key_service import (
    DISPLAY_PREFIX_LENGTH,
    KEY_PREFIX,
    ApiKeyService,
)


@pytest.mark.unit
class TestApiKeyService:
    def test_generated_key_shape(self):
        plaintext, key_hash, key_prefix = ApiKeyService().generate_key()

        assert plaintext.startswith(KEY_PREFIX)
        assert len(key_hash) == 64
        assert key_prefix == plaintext[:DISPLAY_PREFIX_LENGTH]

    def test_keys_are_unique(self):
        service = ApiKeyService()

        assert len({service.generate_key()[0] for _ in range(50)}) == 50

    def test_hash_is_deterministic(self):
        assert ApiKeyService.hash_key("bk_abc") == ApiKeyService.hash_key("bk_abc")
        assert ApiKeyService.hash_key("bk_abc") != ApiKeyService.hash_key("bk_abd")

    def test_verify_key(self):
        service = ApiKeyService()
        plaintext, key_hash, _ = service.generate_key()

        assert service.verify_key(plaintext, key_hash)
        assert not service.verify_key(plaintext + "x", key_hash)

    def test_expiry_uses_configured_lifetime(self):
        issued = datetime(2024, 3, 1, tzinfo=UTC)

        assert ApiKeyService(expiration_days=7).expires_at(issued) == issued + timedelta(days=7)
