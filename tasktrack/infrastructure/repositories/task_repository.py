"""Task repository implementation."""

from collections.abc import Sequence
from datetime import UTC, date, datetime, time, timedelta
from uuid import UUID

from sqlalchemy import func, or_, select

from tasktrack.domain.entities.task import Task, TaskStatus
from tasktrack.infrastructure.database.models.task import TaskModel
from tasktrack.infrastructure.repositories.base import BaseRepository


class TaskRepositoryImpl(BaseRepository[TaskModel, Task]):
    """SQLAlchemy implementation of TaskRepository."""

    model_class = TaskModel

    async def list_by_user(self, user_id: UUID, day: date | None = None) -> list[Task]:
        """List a user's tasks in creation order, optionally for one UTC day."""
        stmt = select(TaskModel).where(TaskModel.user_id == user_id)

        if day is not None:
            start = datetime.combine(day, time.min, tzinfo=UTC)
            stmt = stmt.where(TaskModel.date >= start, TaskModel.date < start + timedelta(days=1))

        return await self._entities(stmt.order_by(TaskModel.created_at.asc()))

    async def list_recent(self, user_id: UUID, limit: int | None = 100) -> list[Task]:
        """Most recent tasks for a user, ordered by date descending. None means all."""
        stmt = (
            select(TaskModel)
            .where(TaskModel.user_id == user_id)
            .order_by(TaskModel.date.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._entities(stmt)

    async def list_recent_for_users(
        self, user_ids: Sequence[UUID], limit_per_user: int = 50
    ) -> dict[UUID, list[Task]]:
        """Most recent tasks for each user in one round trip."""
        grouped: dict[UUID, list[Task]] = {user_id: [] for user_id in user_ids}
        if not user_ids:
            return grouped

        position = (
            func.row_number()
            .over(partition_by=TaskModel.user_id, order_by=TaskModel.date.desc())
            .label("position")
        )
        ranked = (
            select(TaskModel.id.label("task_id"), position)
            .where(TaskModel.user_id.in_(user_ids))
            .subquery()
        )
        stmt = (
            select(TaskModel)
            .join(ranked, ranked.c.task_id == TaskModel.id)
            .where(ranked.c.position <= limit_per_user)
            .order_by(TaskModel.user_id, TaskModel.date.desc())
        )
        result = await self.session.execute(stmt)
        for model in result.scalars().all():
            grouped[model.user_id].append(model.to_entity())
        return grouped

    async def list_for_users(self, user_ids: Sequence[UUID]) -> dict[UUID, list[Task]]:
        """All tasks for each user."""
        grouped: dict[UUID, list[Task]] = {user_id: [] for user_id in user_ids}
        if not user_ids:
            return grouped

        stmt = select(TaskModel).where(TaskModel.user_id.in_(user_ids))
        result = await self.session.execute(stmt)
        for model in result.scalars().all():
            grouped[model.user_id].append(model.to_entity())
        return grouped

    async def count_pending(self, user_id: UUID) -> int:
        """Count tasks that are neither DONE nor flagged completed."""
        stmt = select(func.count(TaskModel.id)).where(
            TaskModel.user_id == user_id,
            TaskModel.status != TaskStatus.DONE.value,
            TaskModel.completed.is_(False),
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_completed_since(self, user_id: UUID, since: datetime) -> int:
        """Count tasks completed at or after `since`."""
        stmt = select(func.count(TaskModel.id)).where(
            TaskModel.user_id == user_id,
            TaskModel.completed_at.is_not(None),
            TaskModel.completed_at >= since,
            or_(TaskModel.completed.is_(True), TaskModel.status == TaskStatus.DONE.value),
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
