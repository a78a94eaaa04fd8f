"""Feedback and task comment repository implementations."""

from uuid import UUID

from sqlalchemy import select

from tasktrack.domain.entities.feedback import Feedback, TaskComment
from tasktrack.infrastructure.database.models.feedback import FeedbackModel
from tasktrack.infrastructure.database.models.task_comment import TaskCommentModel
from tasktrack.infrastructure.database.models.user import UserModel
from tasktrack.infrastructure.repositories.base import BaseRepository


class FeedbackRepositoryImpl(BaseRepository[FeedbackModel, Feedback]):
    """SQLAlchemy implementation of FeedbackRepository."""

    model_class = FeedbackModel

    async def list_for_individual(self, individual_id: UUID) -> list[Feedback]:
        """Feedback received by an individual, newest first, with counselor names."""
        stmt = (
            select(FeedbackModel, UserModel.name)
            .join(UserModel, UserModel.id == FeedbackModel.counselor_id)
            .where(FeedbackModel.individual_id == individual_id)
            .order_by(FeedbackModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [model.to_entity(counselor_name=name) for model, name in result.all()]


class TaskCommentRepositoryImpl(BaseRepository[TaskCommentModel, TaskComment]):
    """SQLAlchemy implementation of TaskCommentRepository."""

    model_class = TaskCommentModel

    async def list_for_task(self, task_id: UUID) -> list[TaskComment]:
        """Comments on a task, newest first, with author name and role."""
        stmt = (
            select(TaskCommentModel, UserModel.name, UserModel.role)
            .join(UserModel, UserModel.id == TaskCommentModel.author_id)
            .where(TaskCommentModel.task_id == task_id)
            .order_by(TaskCommentModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [
            model.to_entity(author_name=name, author_role=role)
            for model, name, role in result.all()
        ]
