"""Counselor feedback and task comments."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from tasktrack.domain.entities.user import UserRole


@dataclass
class Feedback:
    """A note a counselor sends to one of their individuals."""

    id: UUID
    counselor_id: UUID
    individual_id: UUID
    message: str
    counselor_name: str | None = None  # Filled in on reads
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValueError("Feedback message is required")


@dataclass
class TaskComment:
    """A counselor's comment on an individual's task."""

    id: UUID
    task_id: UUID
    author_id: UUID
    message: str
    author_name: str | None = None
    author_role: UserRole | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValueError("Comment message is required")
