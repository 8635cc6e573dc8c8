"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import EventCreateRequest, EventSummaryResponse
"""

from src.schemas.analytics_schemas import (
    CacheInvalidationResponse,
    EventSummaryResponse,
    UserStatsResponse,
)
from src.schemas.api_key_schemas import (
    ApiKeyCreateRequest,
    ApiKeyCreateResponse,
    ApiKeyListResponse,
    ApiKeyResponse,
    ApiKeyRevokeResponse,
    AppCreateRequest,
    AppCreateResponse,
)
from src.schemas.common_schemas import HealthResponse
from src.schemas.event_schemas import EventCreateRequest, EventCreateResponse

__all__ = [
    # Events
    "EventCreateRequest",
    "EventCreateResponse",
    # Analytics
    "CacheInvalidationResponse",
    "EventSummaryResponse",
    "UserStatsResponse",
    # Apps and API keys
    "ApiKeyCreateRequest",
    "ApiKeyCreateResponse",
    "ApiKeyListResponse",
    "ApiKeyResponse",
    "ApiKeyRevokeResponse",
    "AppCreateRequest",
    "AppCreateResponse",
    # Common
    "HealthResponse",
]
