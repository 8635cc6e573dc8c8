"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_cache, get_record_event_handler, ...

The container is organized into modules:
- infrastructure: Core services (Redis, db, logging, rate limiting, tasks)
- repositories: Repository factories
- analytics_handlers: Ingestion and analytics handler factories
- api_key_handlers: App and API key handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    close_infrastructure,
    get_api_key_service,
    get_background_tasks,
    get_cache,
    get_cache_keys,
    get_database,
    get_db_session,
    get_logger,
    get_rate_limit,
    get_redis_client,
    get_rolling_counters,
    get_summary_cache,
)

# Repositories
from src.core.container.repositories import (
    get_api_key_repository,
    get_app_repository,
    get_event_repository,
    get_user_repository,
)

# Analytics handlers
from src.core.container.analytics_handlers import (
    get_aggregation_engine,
    get_api_key_authenticator,
    get_event_summary_handler,
    get_invalidate_analytics_cache_handler,
    get_record_event_handler,
    get_user_stats_handler,
)

# API key handlers
from src.core.container.api_key_handlers import (
    get_app_api_key_handler,
    get_create_api_key_handler,
    get_list_api_keys_handler,
    get_regenerate_api_key_handler,
    get_register_app_handler,
    get_revoke_api_key_handler,
    get_revoke_app_api_key_handler,
)

__all__ = [
    # Infrastructure
    "close_infrastructure",
    "get_api_key_service",
    "get_background_tasks",
    "get_cache",
    "get_cache_keys",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_rate_limit",
    "get_redis_client",
    "get_rolling_counters",
    "get_summary_cache",
    # Repositories
    "get_api_key_repository",
    "get_app_repository",
    "get_event_repository",
    "get_user_repository",
    # Analytics handlers
    "get_aggregation_engine",
    "get_api_key_authenticator",
    "get_event_summary_handler",
    "get_invalidate_analytics_cache_handler",
    "get_record_event_handler",
    "get_user_stats_handler",
    # API key handlers
    "get_app_api_key_handler",
    "get_create_api_key_handler",
    "get_list_api_keys_handler",
    "get_regenerate_api_key_handler",
    "get_register_app_handler",
    "get_revoke_api_key_handler",
    "get_revoke_app_api_key_handler",
]
