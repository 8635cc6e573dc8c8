"""User database model.

Rows are written by the external login collaborator; this service reads
them to attribute apps and keys.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class User(BaseMutableModel):
    """User account.

    Fields:
        id, created_at, updated_at: from BaseMutableModel
        email: Unique address
        first_name, last_name: Optional profile fields
        oauth_id: Identifier at the OAuth provider
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (unique)",
    )
    first_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Given name",
    )
    last_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Family name",
    )
    oauth_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        comment="Subject identifier at the OAuth provider",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
