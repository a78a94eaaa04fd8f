"""Domain entities - pure Python dataclasses representing business objects."""

from tasktrack.domain.entities.conversation import ConversationTurn, TurnRole
from tasktrack.domain.entities.feedback import Feedback, TaskComment
from tasktrack.domain.entities.task import Task, TaskStatus
from tasktrack.domain.entities.user import USER_ROLES, User, UserRole

__all__ = [
    "User",
    "UserRole",
    "USER_ROLES",
    "Task",
    "TaskStatus",
    "Feedback",
    "TaskComment",
    "ConversationTurn",
    "TurnRole",
]
