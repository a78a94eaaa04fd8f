"""HTTP presentation layer - REST API routes."""

from fastapi import APIRouter

from tasktrack.presentation.http.assistant import router as assistant_router
from tasktrack.presentation.http.counselor import router as counselor_router
from tasktrack.presentation.http.feedback import router as feedback_router
from tasktrack.presentation.http.health import router as health_router
from tasktrack.presentation.http.leaderboard import router as leaderboard_router
from tasktrack.presentation.http.metrics import router as metrics_router
from tasktrack.presentation.http.motivational import router as motivational_router
from tasktrack.presentation.http.tasks import router as tasks_router

# Main API router
api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(metrics_router, tags=["Metrics"])
api_router.include_router(assistant_router, tags=["Assistant"])
api_router.include_router(tasks_router, tags=["Tasks"])
api_router.include_router(leaderboard_router, tags=["Leaderboard"])
api_router.include_router(motivational_router, tags=["Motivation"])
api_router.include_router(counselor_router, tags=["Counselor"])
api_router.include_router(feedback_router, tags=["Feedback"])

__all__ = ["api_router"]
