"""Data Transfer Objects (DTOs) for application layer.

DTOs are response/result dataclasses returned by command and query handlers.
They transfer data from the application layer to the presentation layer.

Categories:
    - event_dtos: Ingestion results
    - api_key_dtos: App registration and key management results
    - analytics_dtos: Summary, user stats and cache invalidation results

Note:
    DTOs are NOT API schemas (Pydantic models in presentation layer).
"""

from src.application.dtos.analytics_dtos import (
    CacheInvalidationResult,
    EventSummaryResult,
    UserStatsResult,
)
from src.application.dtos.api_key_dtos import (
    ApiKeyListItem,
    ApiKeyListResult,
    AuthenticatedApiKey,
    IssuedApiKey,
    RegisteredApp,
)
from src.application.dtos.event_dtos import RecordedEvent

__all__ = [
    # Analytics DTOs
    "CacheInvalidationResult",
    "EventSummaryResult",
    "UserStatsResult",
    # API key DTOs
    "ApiKeyListItem",
    "ApiKeyListResult",
    "AuthenticatedApiKey",
    "IssuedApiKey",
    "RegisteredApp",
    # Event DTOs
    "RecordedEvent",
]
