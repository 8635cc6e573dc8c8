"""
Main FastAPI application entry point.

Wires the application together:
- Lifespan: creates tables outside production-like environments, releases
  Redis, database and background tasks on shutdown
- TraceMiddleware: request correlation (X-Trace-Id)
- RateLimitHeadersMiddleware: X-RateLimit-* on error responses too
- Global exception handlers (RFC 9457 error responses)
- API v1 router generated from the route registry
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.core.container import close_infrastructure, get_database, get_logger
from src.core.enums import Environment
from src.presentation.routers.api.middleware.rate_limit_headers_middleware import (
    RateLimitHeadersMiddleware,
)
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Create tables outside production (no migrations)
    - Shutdown: Drain background tasks, close Redis and database pools

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    if settings.environment != Environment.PRODUCTION:
        await get_database().create_all()
    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await close_infrastructure()
    logger.info("application_stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Multi-tenant event collection and analytics",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire middleware (last added runs outermost)
app.add_middleware(RateLimitHeadersMiddleware)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 9457 error responses)
register_exception_handlers(app)

# Include API v1 routers (generated from the route registry)
app.include_router(v1_router)
