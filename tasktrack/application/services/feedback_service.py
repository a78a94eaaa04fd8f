"""Feedback service - counselor feedback and task comments."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.domain.entities import Feedback, Task, TaskComment
from tasktrack.domain.errors import (
    InsufficientPermissionsError,
    TaskNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from tasktrack.infrastructure.repositories import (
    FeedbackRepositoryImpl,
    TaskCommentRepositoryImpl,
    TaskRepositoryImpl,
    UserRepositoryImpl,
)
from tasktrack.infrastructure.telemetry import get_logger

logger = get_logger(__name__)


class FeedbackService:
    """Feedback flows from a counselor to the individuals on their roster.

    Task comments are readable by the task owner and the owner's counselor;
    only that counselor may write them.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepositoryImpl(db)
        self.task_repo = TaskRepositoryImpl(db)
        self.feedback_repo = FeedbackRepositoryImpl(db)
        self.comment_repo = TaskCommentRepositoryImpl(db)

    async def give_feedback(
        self,
        counselor_id: UUID,
        individual_id: UUID,
        message: str,
        now: datetime | None = None,
    ) -> Feedback:
        """Send feedback to an individual assigned to `counselor_id`.

        Raises:
            ValidationError: Blank message
            UserNotFoundError: Individual missing or on another roster
        """
        if not message.strip():
            raise ValidationError(message="Feedback message is required")

        individual = await self.user_repo.get_individual(counselor_id, individual_id)
        if individual is None:
            raise UserNotFoundError(
                message="Individual not found",
                details={"user_id": str(individual_id)},
            )

        feedback = await self.feedback_repo.create(
            Feedback(
                id=uuid4(),
                counselor_id=counselor_id,
                individual_id=individual_id,
                message=message,
                created_at=now or datetime.now(UTC),
            )
        )

        logger.info(
            "Feedback sent",
            extra={"counselor_id": str(counselor_id), "user_id": str(individual_id)},
        )
        return feedback

    async def list_feedback(self, individual_id: UUID) -> list[Feedback]:
        return await self.feedback_repo.list_for_individual(individual_id)

    async def list_comments(self, user_id: UUID, task_id: UUID) -> list[TaskComment]:
        task = await self._task(task_id)
        if task.user_id != user_id and not await self._counsels(user_id, task):
            raise InsufficientPermissionsError(
                message="Not allowed to view comments on this task",
                details={"task_id": str(task_id)},
            )
        return await self.comment_repo.list_for_task(task_id)

    async def add_comment(
        self,
        counselor_id: UUID,
        task_id: UUID,
        message: str,
        now: datetime | None = None,
    ) -> TaskComment:
        """Comment on a task owned by one of the counselor's individuals."""
        if not message.strip():
            raise ValidationError(message="Comment message is required")

        task = await self._task(task_id)
        if not await self._counsels(counselor_id, task):
            raise InsufficientPermissionsError(
                message="You can only comment on your individuals' tasks",
                details={"task_id": str(task_id)},
            )

        comment = await self.comment_repo.create(
            TaskComment(
                id=uuid4(),
                task_id=task_id,
                author_id=counselor_id,
                message=message,
                created_at=now or datetime.now(UTC),
            )
        )

        logger.info(
            "Task comment added",
            extra={"task_id": str(task_id), "counselor_id": str(counselor_id)},
        )
        return comment

    async def _task(self, task_id: UUID) -> Task:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(
                message=f"Task {task_id} not found",
                details={"task_id": str(task_id)},
            )
        return task

    async def _counsels(self, counselor_id: UUID, task: Task) -> bool:
        owner = await self.user_repo.get_by_id(task.user_id)
        return owner is not None and owner.counselor_id == counselor_id
