"""Leaderboard service - ranks individuals by a composite productivity score."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.domain.entities import Task, User
from tasktrack.domain.errors import UserNotFoundError
from tasktrack.infrastructure.repositories import TaskRepositoryImpl, UserRepositoryImpl
from tasktrack.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

COMPLETION_POINTS = 10
COMPLETION_WEIGHT = 0.40
EFFICIENCY_WEIGHT = 0.35
PENDING_WEIGHT = 0.25
MAX_EFFICIENCY = 200.0


def _round_half_up(value: float, places: int = 0) -> float:
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class LeaderboardEntry:
    user_id: UUID
    name: str
    email: str
    completed_tasks: int
    pending_tasks: int
    total_tasks: int
    actual_minutes: int
    estimated_minutes: int
    efficiency: int
    composite_score: float
    rank: int = 0


def efficiency_score(estimated_minutes: int, actual_minutes: int, completed_tasks: int) -> float:
    """Estimated over actual time as a percentage, capped at 200.

    Completed work with no tracked time counts as neutral (100).
    """
    if actual_minutes > 0 and estimated_minutes > 0:
        return min(estimated_minutes / actual_minutes * 100, MAX_EFFICIENCY)
    if completed_tasks > 0 and actual_minutes == 0:
        return 100.0
    return 0.0


def composite_score(completed_tasks: int, efficiency: float, pending_tasks: int, max_pending: int) -> float:
    pending_score = (max_pending - pending_tasks) / max_pending * 100
    return (
        completed_tasks * COMPLETION_POINTS * COMPLETION_WEIGHT
        + efficiency * EFFICIENCY_WEIGHT
        + pending_score * PENDING_WEIGHT
    )


def compute_leaderboard(
    individuals: Sequence[tuple[User, Sequence[Task]]],
) -> list[LeaderboardEntry]:
    """Score and rank a group of individuals against each other."""
    pending_counts = [sum(1 for t in tasks if not t.is_done) for _, tasks in individuals]
    max_pending = max([*pending_counts, 1])

    entries = []
    for (user, tasks), pending in zip(individuals, pending_counts, strict=True):
        completed = len(tasks) - pending
        actual = sum(t.actual_minutes or 0 for t in tasks)
        estimated = sum(t.estimated_minutes or 0 for t in tasks)
        efficiency = efficiency_score(estimated, actual, completed)

        entries.append(
            LeaderboardEntry(
                user_id=user.id,
                name=user.name,
                email=user.email,
                completed_tasks=completed,
                pending_tasks=pending,
                total_tasks=len(tasks),
                actual_minutes=actual,
                estimated_minutes=estimated,
                efficiency=int(_round_half_up(efficiency)),
                composite_score=_round_half_up(
                    composite_score(completed, efficiency, pending, max_pending), 2
                ),
            )
        )

    ranked = sorted(entries, key=lambda e: e.composite_score, reverse=True)
    return [
        replace(entry, rank=position)
        for position, entry in enumerate(ranked, start=1)
    ]


class LeaderboardService:
    """Builds leaderboards for a counselor's roster or an individual's peers."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepositoryImpl(db)
        self.task_repo = TaskRepositoryImpl(db)

    async def for_counselor(self, counselor_id: UUID) -> list[LeaderboardEntry]:
        individuals = await self.user_repo.list_individuals(counselor_id)
        return await self._rank(individuals)

    async def for_individual(self, user_id: UUID) -> list[LeaderboardEntry]:
        """Rank the caller among individuals sharing their counselor.

        Returns an empty board when no counselor is assigned.
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(
                message=f"User {user_id} not found",
                details={"user_id": str(user_id)},
            )
        if user.counselor_id is None:
            logger.info("No counselor assigned, empty leaderboard", extra={"user_id": str(user_id)})
            return []

        peers = await self.user_repo.list_individuals(user.counselor_id)
        return await self._rank(peers)

    async def _rank(self, individuals: Sequence[User]) -> list[LeaderboardEntry]:
        if not individuals:
            return []
        tasks_by_user = await self.task_repo.list_for_users([u.id for u in individuals])
        return compute_leaderboard([(u, tasks_by_user.get(u.id, [])) for u in individuals])
