"""Daily motivation endpoint."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tasktrack.application.services import MotivationService
from tasktrack.infrastructure.auth import AuthContext, get_current_user
from tasktrack.presentation.http.dependencies import get_motivation_service

router = APIRouter(tags=["motivation"])


class MotivationResponse(BaseModel):
    quote: str
    author: str
    personal_message: str
    pending_tasks: int
    completed_today: int


@router.get("/motivational", response_model=MotivationResponse)
async def get_motivation(
    auth: AuthContext = Depends(get_current_user),
    service: MotivationService = Depends(get_motivation_service),
) -> MotivationResponse:
    daily = await service.daily(auth.user_id)
    return MotivationResponse(
        quote=daily.quote,
        author=daily.author,
        personal_message=daily.personal_message,
        pending_tasks=daily.pending_tasks,
        completed_today=daily.completed_today,
    )
