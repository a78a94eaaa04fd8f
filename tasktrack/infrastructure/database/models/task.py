"""Task database model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasktrack.domain.entities.task import Task, TaskStatus
from tasktrack.infrastructure.database.models.base import Base, TimestampMixin, UTCDateTime


class TaskModel(Base, TimestampMixin):
    """SQLAlchemy model for tasks table."""

    __tablename__ = "tasks"

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    # Lifecycle
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=TaskStatus.TODO.value)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    # Time tracking
    estimated_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    actual_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    reward: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    user = relationship("UserModel", back_populates="tasks")

    __table_args__ = (Index("ix_tasks_user_date", "user_id", "date"),)

    def to_entity(self) -> Task:
        """Convert to domain entity."""
        return Task(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            description=self.description,
            date=self.date,
            status=TaskStatus(self.status),
            completed=self.completed,
            completed_at=self.completed_at,
            started_at=self.started_at,
            estimated_minutes=self.estimated_minutes,
            actual_minutes=self.actual_minutes,
            reward=self.reward,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: Task) -> "TaskModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            description=entity.description,
            date=entity.date,
            status=entity.status.value,
            completed=entity.completed,
            completed_at=entity.completed_at,
            started_at=entity.started_at,
            estimated_minutes=entity.estimated_minutes,
            actual_minutes=entity.actual_minutes,
            reward=entity.reward,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
