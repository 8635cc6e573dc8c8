"""Route metadata types for the API Route Registry.

The registry is the single source of truth for all API routes: it drives
FastAPI route generation, auth dependencies, rate limit tiers and OpenAPI
metadata.

Core types:
    RouteMetadata: Complete route specification (method, path, handler, auth, tier)
    HTTPMethod: HTTP method enum (GET, POST, PATCH, PUT, DELETE)
    AuthPolicy: Authentication policy (PUBLIC, API_KEY, USER)
    ErrorSpec: Error response specification for OpenAPI
    IdempotencyLevel: HTTP idempotency classification

Usage:
    from src.presentation.routers.api.v1.routes.metadata import RouteMetadata, HTTPMethod

    metadata = RouteMetadata(
        method=HTTPMethod.POST,
        path="/events",
        handler=record_event,
        resource="events",
        tags=["Events"],
        summary="Record event",
        idempotency=IdempotencyLevel.NON_IDEMPOTENT,
        auth_policy=AuthPolicy(level=AuthLevel.API_KEY),
        rate_limit_tier=RateLimitTier.COLLECTION,
    )
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from src.domain.enums import RateLimitTier


# =============================================================================
# HTTP Method Enum
# =============================================================================


class HTTPMethod(str, Enum):
    """HTTP methods for API routes."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# =============================================================================
# Authentication Policy
# =============================================================================


class AuthLevel(str, Enum):
    """Authentication levels for routes.

    Attributes:
        PUBLIC: No authentication required (health)
        API_KEY: Requires a valid X-API-Key (event collection, user stats)
        USER: Requires X-User-Id of an existing user (dashboard endpoints)
    """

    PUBLIC = "public"
    API_KEY = "api_key"
    USER = "user"


@dataclass(frozen=True, kw_only=True)
class AuthPolicy:
    """Authentication policy for a route.

    Attributes:
        level: Authentication level.
        rationale: Optional explanation, required for PUBLIC routes by the
            registry tests.
    """

    level: AuthLevel
    rationale: str | None = None


# =============================================================================
# Idempotency Level
# =============================================================================


class IdempotencyLevel(str, Enum):
    """HTTP idempotency classification.

    Attributes:
        SAFE: No side effects (GET)
        IDEMPOTENT: Side effects, but repeatable (PUT, DELETE)
        NON_IDEMPOTENT: Side effects, not repeatable (POST, PATCH)
    """

    SAFE = "safe"
    IDEMPOTENT = "idempotent"
    NON_IDEMPOTENT = "non_idempotent"


# =============================================================================
# Error Specification
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class ErrorSpec:
    """Error response specification for OpenAPI documentation.

    Examples:
        >>> ErrorSpec(status=401, description="Invalid API key")
        >>> ErrorSpec(status=404, description="App not found for user")
    """

    status: int
    description: str
    model: type[BaseModel] | None = None


# =============================================================================
# Route Metadata (SSOT)
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class RouteMetadata:
    """Complete specification for an API route (Single Source of Truth).

    Identity fields:
        method: HTTP method (GET, POST, etc.)
        path: URL path relative to the versioned prefix (e.g., "/api-keys/{key_id}")
        handler: Async function that implements the endpoint

    Grouping fields:
        resource: Resource category (e.g., "analytics")
        tags: OpenAPI tags

    Request/Response:
        response_model: Pydantic model for success response
        status_code: Expected success status
        errors: Possible error responses for OpenAPI

    Behavior:
        idempotency: HTTP idempotency level
        auth_policy: Who may call the route
        rate_limit_tier: Fixed-window tier, None for unlimited routes
    """

    # Identity
    method: HTTPMethod
    path: str
    handler: Callable[..., Awaitable[Any]]

    # Grouping
    resource: str
    tags: Sequence[str]

    # OpenAPI documentation
    summary: str
    description: str | None = None
    operation_id: str | None = None

    # Request/Response
    response_model: type[BaseModel] | None = None
    status_code: int = 200
    errors: list[ErrorSpec] | None = None

    # Behavior
    idempotency: IdempotencyLevel
    auth_policy: AuthPolicy
    rate_limit_tier: RateLimitTier | None = RateLimitTier.DEFAULT

    # Deprecation
    deprecated: bool = False
