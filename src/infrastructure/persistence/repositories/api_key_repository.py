"""ApiKeyRepository - SQLAlchemy implementation of ApiKeyRepository protocol.

Maps between domain ApiKey entities and the api_keys table.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.api_key import ApiKey
from src.domain.errors.api_key_error import ActiveApiKeyConflictError
from src.infrastructure.persistence.base import as_utc
from src.infrastructure.persistence.models.api_key import (
    ACTIVE_PER_APP_INDEX,
    ApiKey as ApiKeyModel,
)


def _is_active_per_app_violation(error: IntegrityError) -> bool:
    # PostgreSQL names the index; SQLite names the indexed column
    message = str(error.orig)
    return ACTIVE_PER_APP_INDEX in message or "api_keys.app_id" in message


class ApiKeyRepository:
    """SQLAlchemy implementation of ApiKeyRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, key_id: UUID) -> ApiKey | None:
        stmt = select(ApiKeyModel).where(ApiKeyModel.id == key_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_hash(self, key_hash: str) -> ApiKey | None:
        stmt = select(ApiKeyModel).where(ApiKeyModel.key_hash == key_hash)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_user_id(self, user_id: UUID) -> list[ApiKey]:
        stmt = (
            select(ApiKeyModel)
            .where(ApiKeyModel.user_id == user_id)
            .order_by(ApiKeyModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(m) for m in result.scalars().all()]

    async def find_ids_by_user(
        self,
        user_id: UUID,
        app_id: UUID | None = None,
    ) -> list[UUID]:
        """Every key id of the user, revoked ones included.

        Revoked keys keep their event history, so aggregates still count it.
        """
        stmt = select(ApiKeyModel.id).where(ApiKeyModel.user_id == user_id)
        if app_id is not None:
            stmt = stmt.where(ApiKeyModel.app_id == app_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_active_by_app(self, app_id: UUID) -> ApiKey | None:
        stmt = select(ApiKeyModel).where(
            ApiKeyModel.app_id == app_id,
            ApiKeyModel.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_expired(self, now: datetime) -> list[ApiKey]:
        stmt = select(ApiKeyModel).where(
            ApiKeyModel.is_active.is_(True),
            ApiKeyModel.expires_at <= now,
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(m) for m in result.scalars().all()]

    async def count_active_by_user(self, user_id: UUID) -> int:
        stmt = select(func.count(ApiKeyModel.id)).where(
            ApiKeyModel.user_id == user_id,
            ApiKeyModel.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def save(self, api_key: ApiKey) -> None:
        """Insert a key and commit.

        Raises:
            ActiveApiKeyConflictError: If the app already has an active key.
        """
        self.session.add(self._to_model(api_key))
        await self._commit(api_key)

    async def update(self, api_key: ApiKey) -> None:
        """Write mutable fields back and commit.

        Raises:
            ValueError: If the key row does not exist.
            ActiveApiKeyConflictError: If reactivating would leave two active
                keys on the app.
        """
        stmt = select(ApiKeyModel).where(ApiKeyModel.id == api_key.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise ValueError(f"API key {api_key.id} not found")

        model.key_hash = api_key.key_hash
        model.key_prefix = api_key.key_prefix
        model.is_active = api_key.is_active
        model.expires_at = api_key.expires_at
        model.ip_restrictions = list(api_key.ip_restrictions)
        model.last_used_at = api_key.last_used_at
        await self._commit(api_key)

    async def _commit(self, api_key: ApiKey) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if _is_active_per_app_violation(e):
                raise ActiveApiKeyConflictError(api_key.app_id) from e
            raise
        except Exception:
            await self.session.rollback()
            raise

    def _to_domain(self, model: ApiKeyModel) -> ApiKey:
        return ApiKey(
            id=model.id,
            user_id=model.user_id,
            app_id=model.app_id,
            key_hash=model.key_hash,
            key_prefix=model.key_prefix,
            expires_at=as_utc(model.expires_at),
            is_active=model.is_active,
            ip_restrictions=list(model.ip_restrictions or []),
            last_used_at=as_utc(model.last_used_at),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, api_key: ApiKey) -> ApiKeyModel:
        return ApiKeyModel(
            id=api_key.id,
            user_id=api_key.user_id,
            app_id=api_key.app_id,
            key_hash=api_key.key_hash,
            key_prefix=api_key.key_prefix,
            is_active=api_key.is_active,
            expires_at=api_key.expires_at,
            ip_restrictions=list(api_key.ip_restrictions),
            last_used_at=api_key.last_used_at,
            created_at=api_key.created_at,
            updated_at=api_key.updated_at,
        )
