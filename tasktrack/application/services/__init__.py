"""Application services."""

from tasktrack.application.services.counselor_service import (
    CounselorService,
    IndividualDetail,
    Roster,
    RosterEntry,
    summarize_roster,
)
from tasktrack.application.services.feedback_service import FeedbackService
from tasktrack.application.services.leaderboard_service import (
    LeaderboardEntry,
    LeaderboardService,
    compute_leaderboard,
)
from tasktrack.application.services.motivation_service import (
    DailyMotivation,
    MotivationService,
    completion_reward,
)
from tasktrack.application.services.task_service import TaskService

__all__ = [
    "CounselorService",
    "DailyMotivation",
    "FeedbackService",
    "IndividualDetail",
    "LeaderboardEntry",
    "LeaderboardService",
    "MotivationService",
    "Roster",
    "RosterEntry",
    "TaskService",
    "completion_reward",
    "compute_leaderboard",
    "summarize_roster",
]
