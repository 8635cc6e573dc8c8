"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- PostgreSQL repositories (events, apps, API keys, users)
- Redis adapters (summary cache, rolling counters, rate limit windows)
- Structured logging and background task execution

Structure:
- persistence/: Database models and repositories (SQLAlchemy async)
- cache/: Redis cache, summary cache and rolling counters
- rate_limit/: Fixed-window rate limiter (Redis + Lua)
- security/: API key generation and hashing
- logging/: structlog console adapter
- tasks/: Fire-and-forget background work

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
