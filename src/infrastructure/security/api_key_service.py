"""API key service.

Generation and hashing of opaque API keys.

Key Strategy:
    - Opaque keys with a "bk_" prefix
    - 32-byte random secret (urlsafe base64)
    - Stored as SHA-256 hex digest so the hash doubles as a lookup index
    - Plaintext returned to the caller exactly once
    - Expiration tracked in the database, not in the key itself
"""

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta

KEY_PREFIX = "bk_"
DISPLAY_PREFIX_LENGTH = 10


class ApiKeyService:
    """API key generation and verification service.

    Usage:
        service = ApiKeyService(expiration_days=30)

        plaintext, key_hash, key_prefix = service.generate_key()
        # Store key_hash/key_prefix, show plaintext once

        service.verify_key(provided, stored_hash)
    """

    def __init__(self, expiration_days: int = 30) -> None:
        self._expiration_days = expiration_days

    @property
    def expiration_days(self) -> int:
        return self._expiration_days

    def generate_key(self) -> tuple[str, str, str]:
        """Generate an API key.

        Returns:
            Tuple of (plaintext, key_hash, key_prefix):
                - plaintext: Key to return to the caller once
                - key_hash: SHA-256 hex digest to store
                - key_prefix: Leading characters kept for display

        Example:
            >>> plaintext, key_hash, key_prefix = ApiKeyService().generate_key()
            >>> plaintext.startswith("bk_")
            True
            >>> len(key_hash)
            64
        """
        plaintext = f"{KEY_PREFIX}{secrets.token_urlsafe(32)}"
        return plaintext, self.hash_key(plaintext), plaintext[:DISPLAY_PREFIX_LENGTH]

    @staticmethod
    def hash_key(plaintext: str) -> str:
        """Deterministic SHA-256 digest used for storage and lookup."""
        return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()

    def verify_key(self, plaintext: str, key_hash: str) -> bool:
        """Constant-time comparison of a presented key against a stored hash."""
        return hmac.compare_digest(self.hash_key(plaintext), key_hash)

    def expires_at(self, now: datetime | None = None) -> datetime:
        """Expiry timestamp for a key issued at ``now``."""
        issued = now or datetime.now(UTC)
        return issued + timedelta(days=self._expiration_days)
