"""Test data builders."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from tasktrack.domain.entities import Task, TaskStatus, User

# Wednesday; the Sunday-start week runs 2026-10-18 .. 2026-10-24
NOW = datetime(2026, 10, 21, 15, 0, tzinfo=UTC)


def make_task(
    user_id: UUID | None = None,
    title: str = "Read chapter 5",
    days_ago: int = 0,
    status: TaskStatus = TaskStatus.TODO,
    completed_days_ago: int | None = None,
    estimated_minutes: int | None = None,
    actual_minutes: int | None = None,
) -> Task:
    """Build a task scheduled `days_ago` days before NOW.

    A DONE task is completed on its scheduled day unless `completed_days_ago`
    says otherwise.
    """
    scheduled = NOW - timedelta(days=days_ago)
    done = status == TaskStatus.DONE
    if done and completed_days_ago is None:
        completed_days_ago = days_ago
    return Task(
        id=uuid4(),
        user_id=user_id or uuid4(),
        title=title,
        date=scheduled,
        status=status,
        completed=done,
        completed_at=NOW - timedelta(days=completed_days_ago) if done else None,
        estimated_minutes=estimated_minutes,
        actual_minutes=actual_minutes,
    )


def make_user(
    name: str = "Asha",
    role: str = "individual",
    counselor_id: UUID | None = None,
) -> User:
    return User(
        id=uuid4(),
        email=f"{name.lower().replace(' ', '.')}@example.com",
        name=name,
        role=role,
        counselor_id=counselor_id,
    )
