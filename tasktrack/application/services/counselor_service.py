"""Counselor service - roster management for counselors."""

import math
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.domain.entities import Feedback, Task, User
from tasktrack.domain.errors import UserNotFoundError, ValidationError
from tasktrack.infrastructure.repositories import (
    FeedbackRepositoryImpl,
    TaskRepositoryImpl,
    UserRepositoryImpl,
)
from tasktrack.infrastructure.telemetry import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RosterEntry:
    user_id: UUID
    name: str
    email: str
    total_tasks: int
    completed_tasks: int


@dataclass(frozen=True)
class Roster:
    individuals: list[RosterEntry]
    total_completed: int
    average_completion: int  # Percent of all roster tasks that are done


@dataclass(frozen=True)
class IndividualDetail:
    user: User
    tasks: list[Task] = field(default_factory=list)
    feedback: list[Feedback] = field(default_factory=list)


def summarize_roster(individuals: list[tuple[User, list[Task]]]) -> Roster:
    entries = [
        RosterEntry(
            user_id=user.id,
            name=user.name,
            email=user.email,
            total_tasks=len(tasks),
            completed_tasks=sum(1 for t in tasks if t.completed),
        )
        for user, tasks in individuals
    ]
    total_completed = sum(e.completed_tasks for e in entries)
    total_tasks = sum(e.total_tasks for e in entries)
    average = math.floor(total_completed / total_tasks * 100 + 0.5) if total_tasks else 0
    return Roster(individuals=entries, total_completed=total_completed, average_completion=average)


class CounselorService:
    """Lets a counselor view, grow and shrink their roster of individuals."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepositoryImpl(db)
        self.task_repo = TaskRepositoryImpl(db)
        self.feedback_repo = FeedbackRepositoryImpl(db)

    async def roster(self, counselor_id: UUID) -> Roster:
        individuals = await self.user_repo.list_individuals(counselor_id)
        tasks_by_user = (
            await self.task_repo.list_for_users([u.id for u in individuals]) if individuals else {}
        )
        return summarize_roster([(u, tasks_by_user.get(u.id, [])) for u in individuals])

    async def add_individual(self, counselor_id: UUID, email: str) -> User:
        """Assign an unassigned individual, found by email, to the counselor.

        Raises:
            ValidationError: Email missing, or the individual already has a counselor
            UserNotFoundError: No individual has that email
        """
        email = email.strip()
        if not email:
            raise ValidationError(message="Email is required")

        user = await self.user_repo.get_by_email(email)
        if user is None or user.role != "individual":
            raise UserNotFoundError(
                message="Individual not found with this email",
                details={"email": email},
            )
        if user.counselor_id == counselor_id:
            raise ValidationError(message="This individual is already assigned to you")
        if user.counselor_id is not None:
            raise ValidationError(
                message="This individual is already assigned to another counselor"
            )

        assigned = await self.user_repo.set_counselor(user.id, counselor_id)
        if assigned is None:
            raise UserNotFoundError(message="Individual not found", details={"email": email})

        logger.info(
            "Individual added to roster",
            extra={"counselor_id": str(counselor_id), "user_id": str(user.id)},
        )
        return assigned

    async def remove_individual(self, counselor_id: UUID, individual_id: UUID) -> None:
        await self._individual(counselor_id, individual_id)
        await self.user_repo.set_counselor(individual_id, None)

        logger.info(
            "Individual removed from roster",
            extra={"counselor_id": str(counselor_id), "user_id": str(individual_id)},
        )

    async def individual_detail(self, counselor_id: UUID, individual_id: UUID) -> IndividualDetail:
        """One roster member with all their tasks and the feedback they received."""
        user = await self._individual(counselor_id, individual_id)
        tasks = await self.task_repo.list_recent(individual_id, limit=None)
        feedback = await self.feedback_repo.list_for_individual(individual_id)
        return IndividualDetail(user=user, tasks=tasks, feedback=feedback)

    async def list_counselors(self) -> list[User]:
        return await self.user_repo.list_counselors()

    async def _individual(self, counselor_id: UUID, individual_id: UUID) -> User:
        user = await self.user_repo.get_individual(counselor_id, individual_id)
        if user is None:
            raise UserNotFoundError(
                message="Individual not found",
                details={"user_id": str(individual_id)},
            )
        return user
