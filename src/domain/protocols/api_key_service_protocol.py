"""API key service protocol.

Generation and hashing of opaque API keys, implemented by
``src.infrastructure.security.api_key_service.ApiKeyService``.
"""

from datetime import datetime
from typing import Protocol


class ApiKeyServiceProtocol(Protocol):
    """Key material operations."""

    def generate_key(self) -> tuple[str, str, str]:
        """Return (plaintext, key_hash, key_prefix)."""
        ...

    def hash_key(self, plaintext: str) -> str:
        """Deterministic digest used for lookup."""
        ...

    def expires_at(self, now: datetime | None = None) -> datetime:
        """Expiry for a key issued at ``now``."""
        ...
