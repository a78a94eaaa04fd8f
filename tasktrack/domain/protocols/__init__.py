"""Protocols - abstract interfaces for infrastructure implementations."""

from tasktrack.domain.protocols.providers import (
    GenerationProvider,
    GenerationRequest,
    GenerationRole,
    GenerationTurn,
)
from tasktrack.domain.protocols.repositories import (
    FeedbackRepository,
    TaskCommentRepository,
    TaskRepository,
    UserRepository,
)

__all__ = [
    # Repositories
    "UserRepository",
    "TaskRepository",
    "FeedbackRepository",
    "TaskCommentRepository",
    # Providers
    "GenerationProvider",
    "GenerationRequest",
    "GenerationRole",
    "GenerationTurn",
]
