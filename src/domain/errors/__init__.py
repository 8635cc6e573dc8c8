"""Domain errors package.

Usage:
    from src.domain.errors import ApiKeyError, RateLimitError
    from src.domain.errors import ActiveApiKeyConflictError
"""

from src.domain.errors.api_key_error import ActiveApiKeyConflictError, ApiKeyError
from src.domain.errors.app_error import AppError
from src.domain.errors.event_error import EventError
from src.domain.errors.rate_limit_error import RateLimitError

__all__ = [
    "ActiveApiKeyConflictError",
    "ApiKeyError",
    "AppError",
    "EventError",
    "RateLimitError",
]
