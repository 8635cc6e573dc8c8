"""API key database model.

Security:
    - key_hash: SHA-256 digest of the secret; the plaintext is never stored
    - key_prefix: first characters of the secret, for display only

Constraints:
    - uq_api_keys_active_per_app: at most one active key per app
      (partial unique index on PostgreSQL and SQLite)
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, JSONType

ACTIVE_PER_APP_INDEX = "uq_api_keys_active_per_app"


class ApiKey(BaseMutableModel):
    """Tenant credential.

    Keys are deactivated, never deleted, because events reference them.
    """

    __tablename__ = "api_keys"
    __table_args__ = (
        Index(
            ACTIVE_PER_APP_INDEX,
            "app_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Owning user",
    )
    app_id: Mapped[UUID] = mapped_column(
        ForeignKey("apps.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Owning app",
    )
    key_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="SHA-256 hex digest of the secret",
    )
    key_prefix: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="Leading characters of the secret for display",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="False once revoked",
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Key is rejected from this moment",
    )
    ip_restrictions: Mapped[list[str]] = mapped_column(
        JSONType,
        nullable=False,
        default=list,
        comment="Allowed source IPs or CIDR blocks (empty = any)",
    )
    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Last successful authentication",
    )
