"""SQLAlchemy database models."""

from tasktrack.infrastructure.database.models.base import Base, TimestampMixin, UTCDateTime
from tasktrack.infrastructure.database.models.feedback import FeedbackModel
from tasktrack.infrastructure.database.models.task import TaskModel
from tasktrack.infrastructure.database.models.task_comment import TaskCommentModel
from tasktrack.infrastructure.database.models.user import UserModel

__all__ = [
    "Base",
    "TimestampMixin",
    "UTCDateTime",
    "UserModel",
    "TaskModel",
    "FeedbackModel",
    "TaskCommentModel",
]
