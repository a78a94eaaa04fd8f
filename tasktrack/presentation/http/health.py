"""Liveness, readiness and status endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.application.assistant import AssistantRuntime, get_assistant_runtime
from tasktrack.config import get_settings
from tasktrack.infrastructure.database import get_db
from tasktrack.infrastructure.telemetry import get_logger

logger = get_logger(__name__)
router = APIRouter()


class AssistantStatus(BaseModel):
    generation_configured: bool
    model: str | None
    cached_replies: int
    min_request_interval_ms: int


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    assistant: AssistantStatus


class ReadinessResponse(BaseModel):
    ready: bool
    checks: dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    runtime: AssistantRuntime = Depends(get_assistant_runtime),
) -> HealthResponse:
    """Process status and assistant configuration; touches no dependency.

    An unconfigured generation service is still healthy: chat replies then
    come from the local fallback.
    """
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=settings.version,
        environment=settings.environment,
        assistant=AssistantStatus(
            generation_configured=runtime.generation_enabled,
            model=runtime.provider.model if runtime.provider is not None else None,
            cached_replies=len(runtime.cache),
            min_request_interval_ms=round(runtime.gate.min_interval_seconds * 1000),
        ),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ReadinessResponse:
    """Ready once the task store answers; 503 otherwise."""
    checks: dict[str, bool] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = True
    except SQLAlchemyError as e:
        logger.warning("Database readiness check failed", extra={"error": str(e)})
        checks["database"] = False

    ready = all(checks.values())
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(ready=ready, checks=checks)


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
