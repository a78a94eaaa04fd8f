"""Leaderboard endpoint."""

from datetime import UTC, datetime
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tasktrack.application.services import LeaderboardEntry, LeaderboardService
from tasktrack.infrastructure.auth import AuthContext, get_current_user
from tasktrack.presentation.http.dependencies import get_leaderboard_service

router = APIRouter(tags=["leaderboard"])


class LeaderboardEntryResponse(BaseModel):
    rank: int
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


class LeaderboardResponse(BaseModel):
    leaderboard: list[LeaderboardEntryResponse]
    current_user_id: UUID
    last_updated: datetime


def _entry(entry: LeaderboardEntry) -> LeaderboardEntryResponse:
    return LeaderboardEntryResponse(
        rank=entry.rank,
        user_id=entry.user_id,
        name=entry.name,
        email=entry.email,
        completed_tasks=entry.completed_tasks,
        pending_tasks=entry.pending_tasks,
        total_tasks=entry.total_tasks,
        actual_minutes=entry.actual_minutes,
        estimated_minutes=entry.estimated_minutes,
        efficiency=entry.efficiency,
        composite_score=entry.composite_score,
    )


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    auth: AuthContext = Depends(get_current_user),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardResponse:
    """Counselors see their roster; individuals see their peers."""
    if auth.is_counselor:
        entries = await service.for_counselor(auth.user_id)
    else:
        entries = await service.for_individual(auth.user_id)

    return LeaderboardResponse(
        leaderboard=[_entry(e) for e in entries],
        current_user_id=auth.user_id,
        last_updated=datetime.now(UTC),
    )
