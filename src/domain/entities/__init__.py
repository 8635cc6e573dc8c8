"""Domain entities.

Usage:
    from src.domain.entities import ApiKey, App, Event, User
"""

from src.domain.entities.api_key import ApiKey
from src.domain.entities.app import App
from src.domain.entities.event import Event
from src.domain.entities.user import User

__all__ = [
    "ApiKey",
    "App",
    "Event",
    "User",
]
