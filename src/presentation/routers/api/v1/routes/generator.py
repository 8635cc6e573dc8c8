"""Route generator for the API Route Registry.

Converts RouteMetadata entries into FastAPI routes at application startup.

Functions:
    register_routes_from_registry: Generate all routes from registry
    _build_dependencies: Build FastAPI dependencies from auth policy and tier
    _build_responses: Build OpenAPI responses dict from error specs

Usage:
    v1_router = APIRouter()
    register_routes_from_registry(v1_router, ROUTE_REGISTRY)
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.domain.enums import RateLimitTier
from src.presentation.routers.api.middleware.auth_dependencies import (
    require_api_key,
    require_user_id,
)
from src.presentation.routers.api.middleware.rate_limit_dependencies import (
    rate_limit,
)
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    RouteMetadata,
)


def register_routes_from_registry(
    router: APIRouter,
    registry: list[RouteMetadata],
) -> None:
    """Generate FastAPI routes from registry metadata.

    Args:
        router: FastAPI APIRouter to register routes on
        registry: List of RouteMetadata entries to convert into routes
    """
    for metadata in registry:
        dependencies = _build_dependencies(
            metadata.auth_policy, metadata.rate_limit_tier
        )
        responses = _build_responses(metadata.errors) if metadata.errors else None

        router.add_api_route(
            path=metadata.path,
            endpoint=metadata.handler,
            methods=[metadata.method.value],
            response_model=metadata.response_model,
            status_code=metadata.status_code,
            tags=list(metadata.tags),
            summary=metadata.summary,
            description=metadata.description,
            operation_id=metadata.operation_id,
            responses=responses,
            dependencies=dependencies,
            deprecated=metadata.deprecated,
        )


def _build_dependencies(
    auth_policy: AuthPolicy,
    tier: RateLimitTier | None,
) -> list[Any]:
    """Build route dependencies: authentication first, then rate limiting.

    Route dependencies resolve in list order, so the rate limiter sees the
    identity stored on ``request.state`` by the auth dependency. Handlers
    that also declare the auth dependency receive the cached result.

    Examples:
        >>> _build_dependencies(AuthPolicy(level=AuthLevel.PUBLIC), None)
        []
        >>> _build_dependencies(
        ...     AuthPolicy(level=AuthLevel.API_KEY), RateLimitTier.COLLECTION
        ... )
        [Depends(require_api_key), Depends(check_rate_limit)]
    """
    match auth_policy.level:
        case AuthLevel.PUBLIC:
            dependencies: list[Any] = []
        case AuthLevel.API_KEY:
            dependencies = [Depends(require_api_key)]
        case AuthLevel.USER:
            dependencies = [Depends(require_user_id)]
        case _:
            # Unknown auth level - fail closed
            msg = f"Unknown auth level: {auth_policy.level}"
            raise ValueError(msg)

    if tier is not None:
        dependencies.append(Depends(rate_limit(tier)))
    return dependencies


def _build_responses(errors: list[ErrorSpec]) -> dict[int | str, dict[str, Any]]:
    """Build OpenAPI responses dict from error specifications."""
    return {error.status: {"description": error.description} for error in errors}
