"""Feedback and task comment endpoints."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from tasktrack.application.services import FeedbackService
from tasktrack.domain.entities import UserRole
from tasktrack.infrastructure.auth import AuthContext, get_current_user
from tasktrack.presentation.http.dependencies import get_feedback_service

router = APIRouter(tags=["feedback"])


class FeedbackRequest(BaseModel):
    individual_id: UUID
    message: str = Field(..., min_length=1, max_length=5000)


class CommentRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    counselor_id: UUID
    individual_id: UUID
    message: str
    counselor_name: str | None
    created_at: datetime


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    task_id: UUID
    author_id: UUID
    message: str
    author_name: str | None
    author_role: UserRole | None
    created_at: datetime


@router.post("/feedback", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def give_feedback(
    request: FeedbackRequest,
    auth: AuthContext = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> FeedbackResponse:
    """Counselors send feedback to an individual on their roster."""
    auth.require_role("counselor")
    feedback = await service.give_feedback(auth.user_id, request.individual_id, request.message)
    return FeedbackResponse.model_validate(feedback)


@router.get("/feedback", response_model=list[FeedbackResponse])
async def list_feedback(
    auth: AuthContext = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> list[FeedbackResponse]:
    """Feedback the caller has received, newest first."""
    feedback = await service.list_feedback(auth.user_id)
    return [FeedbackResponse.model_validate(f) for f in feedback]


@router.get("/tasks/{task_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    task_id: UUID,
    auth: AuthContext = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> list[CommentResponse]:
    comments = await service.list_comments(auth.user_id, task_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post(
    "/tasks/{task_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    task_id: UUID,
    request: CommentRequest,
    auth: AuthContext = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> CommentResponse:
    auth.require_role("counselor")
    comment = await service.add_comment(auth.user_id, task_id, request.message)
    return CommentResponse.model_validate(comment)
