"""App database model."""

from uuid import UUID

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class App(BaseMutableModel):
    """Client application registered by a user.

    Indexes:
        - ix_apps_user_id: apps of a user
    """

    __tablename__ = "apps"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Free-text description",
    )
    url: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        comment="Application site URL",
    )
