"""Assistant chat endpoint."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from tasktrack.application.assistant import AssistantService
from tasktrack.domain.entities import ConversationTurn
from tasktrack.infrastructure.auth import AuthContext, get_current_user
from tasktrack.infrastructure.telemetry import get_logger
from tasktrack.presentation.http.dependencies import get_assistant_service

logger = get_logger(__name__)
router = APIRouter(prefix="/ai", tags=["assistant"])


class HistoryTurn(BaseModel):
    """One prior conversation turn."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request to send a chat message."""

    message: str = Field(..., min_length=1, max_length=10000)
    history: list[HistoryTurn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Assistant reply."""

    response: str
    source: Literal["cache", "model", "fallback"]


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    auth: AuthContext = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
) -> ChatResponse:
    """Answer a message using the caller's task data.

    The role context is the caller's role. Generation failures are never
    returned as errors; the reply then comes from the local fallback.
    """
    reply = await service.reply(
        user_id=auth.user_id,
        role=auth.role,
        message=request.message,
        history=[ConversationTurn(role=t.role, content=t.content) for t in request.history],
    )

    logger.info(
        "Assistant reply sent",
        extra={"role": auth.role, "source": reply.source, "history_length": len(request.history)},
    )

    return ChatResponse(response=reply.text, source=reply.source)
