"""Task comment database model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from tasktrack.domain.entities.feedback import TaskComment
from tasktrack.domain.entities.user import UserRole
from tasktrack.infrastructure.database.models.base import Base, UTCDateTime, utcnow


class TaskCommentModel(Base):
    """SQLAlchemy model for task_comments table."""

    __tablename__ = "task_comments"

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    task_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    def to_entity(
        self, author_name: str | None = None, author_role: UserRole | None = None
    ) -> TaskComment:
        """Convert to domain entity, with the author's name and role when joined."""
        return TaskComment(
            id=self.id,
            task_id=self.task_id,
            author_id=self.author_id,
            message=self.message,
            author_name=author_name,
            author_role=author_role,
            created_at=self.created_at,
        )

    @classmethod
    def from_entity(cls, entity: TaskComment) -> "TaskCommentModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            task_id=entity.task_id,
            author_id=entity.author_id,
            message=entity.message,
            created_at=entity.created_at,
        )
