"""Task entity and its lifecycle."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID


class TaskStatus(str, Enum):
    """Lifecycle status, in board order."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@dataclass
class Task:
    """A task scheduled by an individual for a given day."""

    id: UUID
    user_id: UUID
    title: str
    date: datetime  # Scheduled day (timezone-aware)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    completed: bool = False
    completed_at: datetime | None = None
    started_at: datetime | None = None
    estimated_minutes: int | None = None
    actual_minutes: int | None = None
    reward: str | None = None  # Celebration message set on completion
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Task title is required")
        if self.date.tzinfo is None:
            raise ValueError("Task date must be timezone-aware")
        self.status = TaskStatus(self.status)

    @property
    def is_done(self) -> bool:
        """Done by either marker; the two are kept in sync by transitions."""
        return self.completed or self.status == TaskStatus.DONE

    def set_status(self, status: TaskStatus, now: datetime, reward: str | None = None) -> None:
        """Move to a new status, keeping the completion fields in sync."""
        status = TaskStatus(status)
        self.status = status

        if status == TaskStatus.DONE:
            self.completed = True
            self.completed_at = now
            if reward is not None:
                self.reward = reward
        else:
            self.completed = False
            self.completed_at = None
            if status == TaskStatus.IN_PROGRESS and self.started_at is None:
                self.started_at = now

        self.updated_at = now

    def set_completed(self, completed: bool, now: datetime, reward: str | None = None) -> None:
        """Toggle the completion flag; status follows (DONE / TODO)."""
        if completed:
            self.set_status(TaskStatus.DONE, now, reward=reward)
        else:
            self.status = TaskStatus.TODO
            self.completed = False
            self.completed_at = None
            self.updated_at = now
