"""Counselor roster endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field

from tasktrack.application.services import CounselorService, Roster
from tasktrack.infrastructure.auth import AuthContext, get_current_user
from tasktrack.presentation.http.dependencies import get_counselor_service
from tasktrack.presentation.http.feedback import FeedbackResponse
from tasktrack.presentation.http.tasks import TaskResponse

router = APIRouter(tags=["counselor"])


class AddIndividualRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)


class UserSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class RosterEntryResponse(BaseModel):
    id: UUID
    name: str
    email: str
    total_tasks: int
    completed_tasks: int


class RosterResponse(BaseModel):
    individuals: list[RosterEntryResponse]
    total_completed: int
    average_completion: int


class IndividualDetailResponse(BaseModel):
    id: UUID
    name: str
    email: str
    tasks: list[TaskResponse]
    feedback: list[FeedbackResponse]


def _roster(roster: Roster) -> RosterResponse:
    return RosterResponse(
        individuals=[
            RosterEntryResponse(
                id=e.user_id,
                name=e.name,
                email=e.email,
                total_tasks=e.total_tasks,
                completed_tasks=e.completed_tasks,
            )
            for e in roster.individuals
        ],
        total_completed=roster.total_completed,
        average_completion=roster.average_completion,
    )


@router.get("/counselor/individuals", response_model=RosterResponse)
async def list_individuals(
    auth: AuthContext = Depends(get_current_user),
    service: CounselorService = Depends(get_counselor_service),
) -> RosterResponse:
    """The caller's roster with per-individual completion counts."""
    auth.require_role("counselor")
    return _roster(await service.roster(auth.user_id))


@router.post("/counselor/individuals", response_model=UserSummaryResponse)
async def add_individual(
    request: AddIndividualRequest,
    auth: AuthContext = Depends(get_current_user),
    service: CounselorService = Depends(get_counselor_service),
) -> UserSummaryResponse:
    """Add an unassigned individual to the caller's roster by email."""
    auth.require_role("counselor")
    user = await service.add_individual(auth.user_id, request.email)
    return UserSummaryResponse.model_validate(user)


@router.get("/counselor/individuals/{individual_id}", response_model=IndividualDetailResponse)
async def get_individual(
    individual_id: UUID,
    auth: AuthContext = Depends(get_current_user),
    service: CounselorService = Depends(get_counselor_service),
) -> IndividualDetailResponse:
    auth.require_role("counselor")
    detail = await service.individual_detail(auth.user_id, individual_id)
    return IndividualDetailResponse(
        id=detail.user.id,
        name=detail.user.name,
        email=detail.user.email,
        tasks=[TaskResponse.model_validate(t) for t in detail.tasks],
        feedback=[FeedbackResponse.model_validate(f) for f in detail.feedback],
    )


@router.delete("/counselor/individuals/{individual_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_individual(
    individual_id: UUID,
    auth: AuthContext = Depends(get_current_user),
    service: CounselorService = Depends(get_counselor_service),
) -> Response:
    """Release an individual from the caller's roster."""
    auth.require_role("counselor")
    await service.remove_individual(auth.user_id, individual_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/counselors", response_model=list[UserSummaryResponse])
async def list_counselors(
    auth: AuthContext = Depends(get_current_user),
    service: CounselorService = Depends(get_counselor_service),
) -> list[UserSummaryResponse]:
    counselors = await service.list_counselors()
    return [UserSummaryResponse.model_validate(c) for c in counselors]
