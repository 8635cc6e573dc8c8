"""API Route Registry package.

Modules:
    metadata: Core types (RouteMetadata, AuthPolicy, ErrorSpec, etc.)
    registry: ROUTE_REGISTRY - List of all route specifications
    generator: register_routes_from_registry() - Generate FastAPI routes

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    router = APIRouter()
    register_routes_from_registry(router, ROUTE_REGISTRY)
"""

from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    HTTPMethod,
    IdempotencyLevel,
    RouteMetadata,
)

__all__ = [
    "RouteMetadata",
    "HTTPMethod",
    "AuthPolicy",
    "AuthLevel",
    "ErrorSpec",
    "IdempotencyLevel",
]
