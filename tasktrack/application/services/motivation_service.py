"""Motivation service - quotes, completion rewards and daily nudges."""

import random
from dataclasses import dataclass
from datetime import datetime, time
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.infrastructure.repositories import TaskRepositoryImpl
from tasktrack.infrastructure.telemetry import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Quote:
    text: str
    author: str


QUOTES: tuple[Quote, ...] = (
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote("Believe you can and you're halfway there.", "Theodore Roosevelt"),
    Quote(
        "Success is not final, failure is not fatal: it is the courage to continue that counts.",
        "Winston Churchill",
    ),
    Quote("The future belongs to those who believe in the beauty of their dreams.", "Eleanor Roosevelt"),
    Quote("It does not matter how slowly you go as long as you do not stop.", "Confucius"),
    Quote("Everything you've ever wanted is on the other side of fear.", "George Addair"),
    Quote("The secret of getting ahead is getting started.", "Mark Twain"),
    Quote("Don't watch the clock; do what it does. Keep going.", "Sam Levenson"),
    Quote("You are never too old to set another goal or to dream a new dream.", "C.S. Lewis"),
    Quote("Start where you are. Use what you have. Do what you can.", "Arthur Ashe"),
)

REWARD_TEMPLATES: tuple[str, ...] = (
    '🎉 Amazing! You completed "{title}"! Keep up the fantastic work!',
    '⭐ Brilliant! "{title}" is done! You\'re making incredible progress!',
    '🚀 Awesome! "{title}" checked off! You\'re on fire today!',
    '💪 Great job completing "{title}"! Every task brings you closer to your goals!',
    '🌟 Wonderful! "{title}" complete! You should be proud of yourself!',
    '🏆 Champion! You finished "{title}"! Keep this momentum going!',
    '✨ Excellent! "{title}" is done! You\'re building great habits!',
    '🎯 Perfect! "{title}" completed! Stay focused and keep winning!',
    '💫 Spectacular! You knocked out "{title}"! Nothing can stop you!',
    '🔥 Incredible! "{title}" finished! Your dedication is inspiring!',
)


def completion_reward(title: str, rng: random.Random | None = None) -> str:
    """Celebration message stored on a task when it is completed."""
    return (rng or random).choice(REWARD_TEMPLATES).format(title=title)


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


def personal_message(completed_today: int, pending: int) -> str:
    if completed_today > 0:
        return f"🎉 Amazing! You've completed {completed_today} task{_plural(completed_today)} today!"
    if pending > 0:
        return f"📋 You have {pending} task{_plural(pending)} waiting. You've got this!"
    return ""


@dataclass(frozen=True)
class DailyMotivation:
    quote: str
    author: str
    personal_message: str
    pending_tasks: int
    completed_today: int


class MotivationService:
    """Daily motivational content personalised with the caller's task counts."""

    def __init__(
        self,
        db: AsyncSession,
        timezone: str = "UTC",
        rng: random.Random | None = None,
    ):
        self.db = db
        self.task_repo = TaskRepositoryImpl(db)
        self.tz = ZoneInfo(timezone)
        self.rng = rng or random.Random()

    async def daily(self, user_id: UUID, now: datetime | None = None) -> DailyMotivation:
        now = now or datetime.now(self.tz)
        start_of_day = datetime.combine(now.astimezone(self.tz).date(), time.min, tzinfo=self.tz)

        pending = await self.task_repo.count_pending(user_id)
        completed_today = await self.task_repo.count_completed_since(user_id, start_of_day)
        quote = self.rng.choice(QUOTES)

        logger.debug(
            "Daily motivation computed",
            extra={"user_id": str(user_id), "pending": pending, "completed_today": completed_today},
        )

        return DailyMotivation(
            quote=quote.text,
            author=quote.author,
            personal_message=personal_message(completed_today, pending),
            pending_tasks=pending,
            completed_today=completed_today,
        )
