"""FastAPI dependencies wiring services to the request scope."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.application.assistant import (
    AssistantRuntime,
    AssistantService,
    get_assistant_runtime,
)
from tasktrack.application.services import (
    CounselorService,
    FeedbackService,
    LeaderboardService,
    MotivationService,
    TaskService,
)
from tasktrack.config import Settings, get_settings
from tasktrack.infrastructure.database import get_db


def get_assistant_service(
    db: AsyncSession = Depends(get_db),
    runtime: AssistantRuntime = Depends(get_assistant_runtime),
) -> AssistantService:
    return AssistantService(db, runtime)


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


def get_leaderboard_service(db: AsyncSession = Depends(get_db)) -> LeaderboardService:
    return LeaderboardService(db)


def get_motivation_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MotivationService:
    return MotivationService(db, timezone=settings.assistant_timezone)


def get_counselor_service(db: AsyncSession = Depends(get_db)) -> CounselorService:
    return CounselorService(db)


def get_feedback_service(db: AsyncSession = Depends(get_db)) -> FeedbackService:
    return FeedbackService(db)
