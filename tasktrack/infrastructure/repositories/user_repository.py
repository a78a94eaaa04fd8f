"""User repository implementation."""

from uuid import UUID

from sqlalchemy import select

from tasktrack.domain.entities.user import User
from tasktrack.infrastructure.database.models.user import UserModel
from tasktrack.infrastructure.repositories.base import BaseRepository


class UserRepositoryImpl(BaseRepository[UserModel, User]):
    """SQLAlchemy implementation of UserRepository."""

    model_class = UserModel

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return model.to_entity()

    async def list_individuals(self, counselor_id: UUID) -> list[User]:
        """List individuals assigned to a counselor."""
        stmt = (
            select(UserModel)
            .where(
                UserModel.counselor_id == counselor_id,
                UserModel.role == "individual",
            )
            .order_by(UserModel.name)
        )
        return await self._entities(stmt)

    async def get_individual(self, counselor_id: UUID, individual_id: UUID) -> User | None:
        """Get an individual only when they are assigned to `counselor_id`."""
        stmt = select(UserModel).where(
            UserModel.id == individual_id,
            UserModel.counselor_id == counselor_id,
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return model.to_entity() if model is not None else None

    async def list_counselors(self) -> list[User]:
        stmt = select(UserModel).where(UserModel.role == "counselor").order_by(UserModel.name)
        return await self._entities(stmt)

    async def set_counselor(self, user_id: UUID, counselor_id: UUID | None) -> User | None:
        """Assign `user_id` to a counselor, or clear the assignment with None."""
        model = await self.session.get(UserModel, user_id)
        if model is None:
            return None
        model.counselor_id = counselor_id
        await self.session.flush()
        return model.to_entity()
