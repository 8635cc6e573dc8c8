"""HTTP routers.

Versioned API endpoints live under ``routers.api.v1`` and are generated
from the route registry.
"""
