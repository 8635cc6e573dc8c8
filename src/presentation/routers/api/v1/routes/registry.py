"""API Route Registry - Single Source of Truth for all routes.

ROUTE_REGISTRY is the authoritative list of all API endpoints. It is used to
generate FastAPI routes, auth dependencies, rate limit tiers and OpenAPI
metadata at application startup.

Registry structure:
    - Each entry is a RouteMetadata instance with complete specification
    - Handlers reference actual functions from router modules
    - Auth policies explicitly declared (PUBLIC, API_KEY, USER)
    - Rate limit tiers assigned per endpoint (collection, analytics, default)

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    router = APIRouter()
    register_routes_from_registry(router, ROUTE_REGISTRY)
"""

from src.domain.enums import RateLimitTier
from src.presentation.routers.api.v1.analytics import (
    get_event_summary,
    get_user_stats,
    invalidate_summary_cache,
)
from src.presentation.routers.api.v1.api_keys import (
    create_api_key,
    list_api_keys,
    regenerate_api_key,
    revoke_api_key,
)
from src.presentation.routers.api.v1.apps import (
    get_app_api_key,
    register_app,
    revoke_app_api_key,
)
from src.presentation.routers.api.v1.events import record_event
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    HTTPMethod,
    IdempotencyLevel,
    RouteMetadata,
)
from src.presentation.routers.api.v1.system import health
from src.schemas.analytics_schemas import (
    CacheInvalidationResponse,
    EventSummaryResponse,
    UserStatsResponse,
)
from src.schemas.api_key_schemas import (
    ApiKeyCreateResponse,
    ApiKeyListResponse,
    ApiKeyResponse,
    ApiKeyRevokeResponse,
    AppCreateResponse,
)
from src.schemas.common_schemas import HealthResponse
from src.schemas.event_schemas import EventCreateResponse

_API_KEY_ERRORS = [
    ErrorSpec(status=401, description="Missing, invalid, revoked or expired API key"),
    ErrorSpec(status=403, description="Caller IP not allowed for this API key"),
    ErrorSpec(status=429, description="Rate limit exceeded"),
]

_USER_ERRORS = [
    ErrorSpec(status=401, description="Missing or unknown user"),
    ErrorSpec(status=429, description="Rate limit exceeded"),
]


ROUTE_REGISTRY: list[RouteMetadata] = [
    # =========================================================================
    # Events
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/events",
        handler=record_event,
        resource="events",
        tags=["Events"],
        summary="Record event",
        description="Record one behavioral event for the calling API key.",
        operation_id="record_event",
        response_model=EventCreateResponse,
        status_code=201,
        errors=[
            *_API_KEY_ERRORS,
            ErrorSpec(status=400, description="Invalid event"),
            ErrorSpec(status=422, description="Request validation failed"),
            ErrorSpec(status=500, description="Failed to record event"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.API_KEY),
        rate_limit_tier=RateLimitTier.COLLECTION,
    ),
    # =========================================================================
    # Analytics
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/analytics/event-summary",
        handler=get_event_summary,
        resource="analytics",
        tags=["Analytics"],
        summary="Event summary",
        description="Count, unique users and device split for one event type.",
        operation_id="get_event_summary",
        response_model=EventSummaryResponse,
        errors=[
            *_USER_ERRORS,
            ErrorSpec(status=400, description="Invalid date range"),
            ErrorSpec(status=404, description="App not found for user"),
        ],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.ANALYTICS,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/analytics/user-stats",
        handler=get_user_stats,
        resource="analytics",
        tags=["Analytics"],
        summary="User statistics",
        description="Activity of one tracked end-user across the account's keys.",
        operation_id="get_user_stats",
        response_model=UserStatsResponse,
        errors=[
            *_API_KEY_ERRORS,
            ErrorSpec(status=404, description="No API keys found for this account"),
        ],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=AuthPolicy(level=AuthLevel.API_KEY),
        rate_limit_tier=RateLimitTier.ANALYTICS,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/analytics/cache",
        handler=invalidate_summary_cache,
        resource="analytics",
        tags=["Analytics"],
        summary="Invalidate summary cache",
        operation_id="invalidate_summary_cache",
        response_model=CacheInvalidationResponse,
        errors=_USER_ERRORS,
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.DEFAULT,
    ),
    # =========================================================================
    # Apps
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/apps",
        handler=register_app,
        resource="apps",
        tags=["Apps"],
        summary="Register app",
        description="Register an app and issue its first API key.",
        operation_id="register_app",
        response_model=AppCreateResponse,
        status_code=201,
        errors=[
            *_USER_ERRORS,
            ErrorSpec(status=400, description="Invalid app or IP restriction"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.DEFAULT,
    ),
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/apps/{app_id}/api-key",
        handler=get_app_api_key,
        resource="apps",
        tags=["Apps"],
        summary="Get app API key",
        description="Metadata of the app's active API key (never the secret).",
        operation_id="get_app_api_key",
        response_model=ApiKeyResponse,
        errors=[
            *_USER_ERRORS,
            ErrorSpec(status=404, description="App not found for user or no active key"),
        ],
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.DEFAULT,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/apps/{app_id}/revoke-key",
        handler=revoke_app_api_key,
        resource="apps",
        tags=["Apps"],
        summary="Revoke app API key",
        description="Revoke the app's active API key.",
        operation_id="revoke_app_api_key",
        response_model=ApiKeyRevokeResponse,
        errors=[
            *_USER_ERRORS,
            ErrorSpec(status=404, description="App not found for user or no active key"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.DEFAULT,
    ),
    # =========================================================================
    # API keys
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/api-keys",
        handler=list_api_keys,
        resource="api_keys",
        tags=["API Keys"],
        summary="List API keys",
        operation_id="list_api_keys",
        response_model=ApiKeyListResponse,
        errors=_USER_ERRORS,
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.DEFAULT,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/api-keys",
        handler=create_api_key,
        resource="api_keys",
        tags=["API Keys"],
        summary="Create API key",
        operation_id="create_api_key",
        response_model=ApiKeyCreateResponse,
        status_code=201,
        errors=[
            *_USER_ERRORS,
            ErrorSpec(status=404, description="App not found for user"),
            ErrorSpec(status=409, description="App already has an active API key"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.DEFAULT,
    ),
    RouteMetadata(
        method=HTTPMethod.DELETE,
        path="/api-keys/{key_id}",
        handler=revoke_api_key,
        resource="api_keys",
        tags=["API Keys"],
        summary="Revoke API key",
        operation_id="revoke_api_key",
        response_model=ApiKeyRevokeResponse,
        errors=[
            *_USER_ERRORS,
            ErrorSpec(status=403, description="API key belongs to another user"),
            ErrorSpec(status=404, description="API key not found"),
        ],
        idempotency=IdempotencyLevel.IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.DEFAULT,
    ),
    RouteMetadata(
        method=HTTPMethod.POST,
        path="/api-keys/{key_id}/regenerate",
        handler=regenerate_api_key,
        resource="api_keys",
        tags=["API Keys"],
        summary="Regenerate API key",
        operation_id="regenerate_api_key",
        response_model=ApiKeyCreateResponse,
        errors=[
            *_USER_ERRORS,
            ErrorSpec(status=403, description="API key belongs to another user"),
            ErrorSpec(status=404, description="API key not found"),
            ErrorSpec(status=409, description="App already has an active API key"),
        ],
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.USER),
        rate_limit_tier=RateLimitTier.DEFAULT,
    ),
    # =========================================================================
    # System
    # =========================================================================
    RouteMetadata(
        method=HTTPMethod.GET,
        path="/health",
        handler=health,
        resource="system",
        tags=["System"],
        summary="Health check",
        operation_id="health",
        response_model=HealthResponse,
        idempotency=IdempotencyLevel.SAFE,
        auth_policy=AuthPolicy(
            level=AuthLevel.PUBLIC,
            rationale="Probed by load balancers without credentials",
        ),
        rate_limit_tier=None,
    ),
]
