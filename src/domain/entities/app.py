"""App domain entity.

An app is a client application registered by a user. Every API key belongs
to exactly one app, and summaries can be narrowed to a single app.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.errors.app_error import AppError

MAX_NAME_LENGTH = 255


@dataclass
class App:
    """Registered client application.

    Attributes:
        id: Unique app identifier.
        user_id: Owning user.
        name: Display name.
        description: Optional free text.
        url: Optional site URL.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: UUID
    user_id: UUID
    name: str
    description: str | None = None
    url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Raises ValueError for a blank or oversized name."""
        if not self.name or not self.name.strip():
            raise ValueError(AppError.NAME_REQUIRED)
        if len(self.name) > MAX_NAME_LENGTH:
            raise ValueError(AppError.NAME_TOO_LONG)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id
