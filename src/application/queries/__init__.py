"""Queries - Read operations that fetch data.

Queries represent a request for information. They are immutable dataclasses
with question-like names (GetEventSummary, ListApiKeys).

Each query has a corresponding handler that fetches and returns the requested
data. Queries NEVER change durable state.
"""

from src.application.queries.analytics_queries import GetEventSummary, GetUserStats
from src.application.queries.api_key_queries import GetAppApiKey, ListApiKeys

__all__ = [
    "GetAppApiKey",
    "GetEventSummary",
    "GetUserStats",
    "ListApiKeys",
]
