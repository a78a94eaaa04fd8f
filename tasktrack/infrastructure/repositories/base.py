"""Shared plumbing for the SQLAlchemy repositories."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.infrastructure.database.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType")


class BaseRepository(Generic[ModelType, EntityType]):
    """Primary-key CRUD over one model, returning domain entities.

    Subclasses set `model_class`; the model supplies to_entity/from_entity.
    Writes are flushed, never committed: the request's session owns the
    transaction.
    """

    model_class: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _entities(self, stmt: Select[Any]) -> list[EntityType]:
        result = await self.session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]

    async def get_by_id(self, id: UUID) -> EntityType | None:
        model = await self.session.get(self.model_class, id)
        return model.to_entity() if model is not None else None

    async def create(self, entity: EntityType) -> EntityType:
        model = self.model_class.from_entity(entity)
        self.session.add(model)
        await self.session.flush()
        return model.to_entity()

    async def update(self, entity: EntityType) -> EntityType:
        """Write every field of `entity` over the stored row."""
        model = await self.session.merge(self.model_class.from_entity(entity))
        await self.session.flush()
        return model.to_entity()

    async def delete(self, id: UUID) -> bool:
        """Delete by primary key. Returns False when nothing was stored."""
        model = await self.session.get(self.model_class, id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True
