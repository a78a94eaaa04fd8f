"""Feedback database model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from tasktrack.domain.entities.feedback import Feedback
from tasktrack.infrastructure.database.models.base import Base, UTCDateTime, utcnow


class FeedbackModel(Base):
    """SQLAlchemy model for feedback table."""

    __tablename__ = "feedback"

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    counselor_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    individual_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    def to_entity(self, counselor_name: str | None = None) -> Feedback:
        """Convert to domain entity."""
        return Feedback(
            id=self.id,
            counselor_id=self.counselor_id,
            individual_id=self.individual_id,
            message=self.message,
            counselor_name=counselor_name,
            created_at=self.created_at,
        )

    @classmethod
    def from_entity(cls, entity: Feedback) -> "FeedbackModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            counselor_id=entity.counselor_id,
            individual_id=entity.individual_id,
            message=entity.message,
            created_at=entity.created_at,
        )
