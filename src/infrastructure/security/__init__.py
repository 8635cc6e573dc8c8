"""Security infrastructure services."""

from src.infrastructure.security.api_key_service import ApiKeyService

__all__ = ["ApiKeyService"]
