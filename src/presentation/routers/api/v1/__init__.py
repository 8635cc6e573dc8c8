"""API v1 routers.

All routes are generated from the Route Metadata Registry at startup.
The registry (ROUTE_REGISTRY) is the single source of truth for all endpoints.
See src/presentation/routers/api/v1/routes/registry.py for the complete route catalog.

Resources:
    /api/v1/events                   - Event collection (API key)
    /api/v1/analytics/event-summary  - Event summaries (user)
    /api/v1/analytics/user-stats     - Tracked end-user statistics (API key)
    /api/v1/analytics/cache          - Summary cache invalidation (user)
    /api/v1/apps                     - App registration (user)
    /api/v1/api-keys                 - API key management (user)
    /api/v1/health                   - Health check
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.routers.api.v1.routes.generator import (
    register_routes_from_registry,
)
from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY

# Create v1 router and generate all routes from registry
v1_router = APIRouter(prefix=settings.api_v1_prefix)
register_routes_from_registry(v1_router, ROUTE_REGISTRY)

__all__ = [
    "v1_router",
]
