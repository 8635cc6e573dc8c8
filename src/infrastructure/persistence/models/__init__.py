"""Database models for the persistence layer.

Models Organization:
    - user.py: User (written by the login collaborator)
    - app.py: Registered client application
    - api_key.py: Tenant credential
    - event.py: Append-only event log

Domain entities (dataclasses) live in src/domain/entities/ and are mapped to
these models by the repositories.
"""

from src.infrastructure.persistence.models.api_key import ApiKey
from src.infrastructure.persistence.models.app import App
from src.infrastructure.persistence.models.event import Event
from src.infrastructure.persistence.models.user import User

__all__ = [
    "ApiKey",
    "App",
    "Event",
    "User",
]
