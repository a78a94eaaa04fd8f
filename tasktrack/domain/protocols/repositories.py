"""Repository protocols - abstract interfaces for data access."""

from collections.abc import Sequence
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from tasktrack.domain.entities import Feedback, Task, TaskComment, User


class UserRepository(Protocol):
    """Abstract interface for user data access."""

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        ...

    async def list_individuals(self, counselor_id: UUID) -> list[User]:
        """List individuals assigned to a counselor, ordered by name."""
        ...

    async def get_individual(self, counselor_id: UUID, individual_id: UUID) -> User | None:
        """Get an individual only when they are assigned to the counselor."""
        ...

    async def list_counselors(self) -> list[User]:
        """List all counselors, ordered by name."""
        ...

    async def set_counselor(self, user_id: UUID, counselor_id: UUID | None) -> User | None:
        """Assign or clear a user's counselor."""
        ...


class TaskRepository(Protocol):
    """Abstract interface for task data access."""

    async def get_by_id(self, task_id: UUID) -> Task | None:
        """Get task by ID."""
        ...

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        ...

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        ...

    async def delete(self, task_id: UUID) -> bool:
        """Delete a task by ID."""
        ...

    async def list_by_user(self, user_id: UUID, day: date | None = None) -> list[Task]:
        """List a user's tasks in creation order, optionally for one day."""
        ...

    async def list_recent(self, user_id: UUID, limit: int | None = 100) -> list[Task]:
        """Most recent tasks for a user, ordered by date descending."""
        ...

    async def list_recent_for_users(
        self, user_ids: Sequence[UUID], limit_per_user: int = 50
    ) -> dict[UUID, list[Task]]:
        """Most recent tasks for each user, ordered by date descending."""
        ...

    async def list_for_users(self, user_ids: Sequence[UUID]) -> dict[UUID, list[Task]]:
        """All tasks for each user."""
        ...

    async def count_pending(self, user_id: UUID) -> int:
        """Count tasks that are not done."""
        ...

    async def count_completed_since(self, user_id: UUID, since: datetime) -> int:
        """Count tasks completed at or after a moment."""
        ...


class FeedbackRepository(Protocol):
    """Abstract interface for counselor feedback."""

    async def create(self, feedback: Feedback) -> Feedback:
        ...

    async def list_for_individual(self, individual_id: UUID) -> list[Feedback]:
        """Feedback received by an individual, newest first."""
        ...


class TaskCommentRepository(Protocol):
    """Abstract interface for task comments."""

    async def create(self, comment: TaskComment) -> TaskComment:
        ...

    async def list_for_task(self, task_id: UUID) -> list[TaskComment]:
        """Comments on a task, newest first."""
        ...
