"""Repository implementations (SQLAlchemy adapters).

Usage:
    from src.infrastructure.persistence.repositories import EventRepository
"""

from src.infrastructure.persistence.repositories.api_key_repository import (
    ApiKeyRepository,
)
from src.infrastructure.persistence.repositories.app_repository import AppRepository
from src.infrastructure.persistence.repositories.event_repository import (
    EventRepository,
)
from src.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "ApiKeyRepository",
    "AppRepository",
    "EventRepository",
    "UserRepository",
]
