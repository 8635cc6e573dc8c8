"""AppRepository - SQLAlchemy implementation of AppRepository protocol."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.app import App
from src.infrastructure.persistence.models.app import App as AppModel


class AppRepository:
    """SQLAlchemy implementation of AppRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, app_id: UUID) -> App | None:
        stmt = select(AppModel).where(AppModel.id == app_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_user_id(self, user_id: UUID) -> list[App]:
        stmt = (
            select(AppModel)
            .where(AppModel.user_id == user_id)
            .order_by(AppModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(m) for m in result.scalars().all()]

    async def save(self, app: App) -> None:
        """Insert an app without committing.

        Registration writes the app and its first key in one transaction;
        the key save commits both.
        """
        self.session.add(self._to_model(app))
        await self.session.flush()

    def _to_domain(self, model: AppModel) -> App:
        return App(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            description=model.description,
            url=model.url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, app: App) -> AppModel:
        return AppModel(
            id=app.id,
            user_id=app.user_id,
            name=app.name,
            description=app.description,
            url=app.url,
            created_at=app.created_at,
            updated_at=app.updated_at,
        )
