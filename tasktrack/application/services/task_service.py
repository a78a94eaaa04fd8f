"""Task service - owner-scoped task CRUD and lifecycle transitions."""

import random
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.application.services.motivation_service import completion_reward
from tasktrack.domain.entities import Task, TaskStatus
from tasktrack.domain.errors import TaskNotFoundError, ValidationError
from tasktrack.infrastructure.repositories import TaskRepositoryImpl
from tasktrack.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

_UNSET = object()


class TaskService:
    """Service for managing an individual's tasks.

    Every operation is scoped to the owner; a task belonging to someone else
    is reported as not found.
    """

    def __init__(self, db: AsyncSession, rng: random.Random | None = None):
        self.db = db
        self.task_repo = TaskRepositoryImpl(db)
        self.rng = rng or random.Random()

    async def list_tasks(self, user_id: UUID, day: date | None = None) -> list[Task]:
        return await self.task_repo.list_by_user(user_id, day=day)

    async def create_task(
        self,
        user_id: UUID,
        title: str,
        day: date,
        description: str | None = None,
        estimated_minutes: int | None = None,
    ) -> Task:
        """Create a task scheduled at noon UTC on `day`.

        Args:
            user_id: Owner ID
            title: Task title
            day: Scheduled calendar day
            description: Optional description
            estimated_minutes: Optional time estimate

        Returns:
            Created task
        """
        try:
            task = Task(
                id=uuid4(),
                user_id=user_id,
                title=title,
                date=datetime(day.year, day.month, day.day, 12, tzinfo=UTC),
                description=description,
                estimated_minutes=estimated_minutes,
            )
        except ValueError as e:
            raise ValidationError(message=str(e)) from e

        created = await self.task_repo.create(task)

        logger.info(
            "Task created",
            extra={"task_id": str(created.id), "user_id": str(user_id)},
        )

        return created

    async def get_task(self, user_id: UUID, task_id: UUID) -> Task:
        task = await self.task_repo.get_by_id(task_id)
        if task is None or task.user_id != user_id:
            raise TaskNotFoundError(
                message=f"Task {task_id} not found",
                details={"task_id": str(task_id)},
            )
        return task

    async def update_task(
        self,
        user_id: UUID,
        task_id: UUID,
        *,
        status: TaskStatus | None = None,
        completed: bool | None = None,
        title: str | None = None,
        description: str | None | object = _UNSET,
        estimated_minutes: int | None | object = _UNSET,
        actual_minutes: int | None = None,
        started_at: datetime | None | object = _UNSET,
        now: datetime | None = None,
    ) -> Task:
        """Apply a partial update.

        A status change or completion toggle keeps `status`, `completed` and
        `completed_at` consistent and stores a reward message when the task
        becomes done. When both are given, `completed` wins.
        """
        task = await self.get_task(user_id, task_id)
        now = now or datetime.now(UTC)
        was_done = task.is_done

        if title is not None:
            if not title.strip():
                raise ValidationError(message="Task title is required")
            task.title = title
        if description is not _UNSET:
            task.description = description
        if estimated_minutes is not _UNSET:
            task.estimated_minutes = estimated_minutes
        if actual_minutes is not None:
            task.actual_minutes = actual_minutes
        if started_at is not _UNSET:
            task.started_at = started_at

        if status is not None:
            task.set_status(status, now, reward=self._reward_for(task, status == TaskStatus.DONE))
        if completed is not None:
            task.set_completed(completed, now, reward=self._reward_for(task, completed))

        task.updated_at = now
        updated = await self.task_repo.update(task)

        if updated.is_done and not was_done:
            logger.info(
                "Task completed",
                extra={"task_id": str(task_id), "user_id": str(user_id)},
            )

        return updated

    async def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        await self.get_task(user_id, task_id)
        await self.task_repo.delete(task_id)

        logger.info(
            "Task deleted",
            extra={"task_id": str(task_id), "user_id": str(user_id)},
        )

    def _reward_for(self, task: Task, becomes_done: bool) -> str | None:
        return completion_reward(task.title, self.rng) if becomes_done else None
