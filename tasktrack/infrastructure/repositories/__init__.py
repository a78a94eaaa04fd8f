"""Repository implementations."""

from tasktrack.infrastructure.repositories.base import BaseRepository
from tasktrack.infrastructure.repositories.feedback_repository import (
    FeedbackRepositoryImpl,
    TaskCommentRepositoryImpl,
)
from tasktrack.infrastructure.repositories.task_repository import TaskRepositoryImpl
from tasktrack.infrastructure.repositories.user_repository import UserRepositoryImpl

__all__ = [
    "BaseRepository",
    "FeedbackRepositoryImpl",
    "TaskCommentRepositoryImpl",
    "TaskRepositoryImpl",
    "UserRepositoryImpl",
]
