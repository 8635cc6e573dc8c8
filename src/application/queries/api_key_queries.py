"""API key queries."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ListApiKeys:
    """All keys owned by a user, newest first."""

    user_id: UUID
    active_only: bool = False


@dataclass(frozen=True, kw_only=True)
class GetAppApiKey:
    """The active key of one of the user's apps."""

    user_id: UUID
    app_id: UUID
