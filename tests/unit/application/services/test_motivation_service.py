"""Tests for motivation content."""

import random
from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from tasktrack.application.services.motivation_service import (
    QUOTES,
    REWARD_TEMPLATES,
    MotivationService,
    completion_reward,
    personal_message,
)
from tests.factories import NOW


class TestCompletionReward:
    def test_mentions_task_title(self):
        reward = completion_reward("Chemistry notes", random.Random(0))

        assert '"Chemistry notes"' in reward

    def test_ten_templates(self):
        assert len(REWARD_TEMPLATES) == 10
        rng = random.Random(5)
        seen = {completion_reward("x", rng) for _ in range(500)}
        assert len(seen) == 10


class TestPersonalMessage:
    def test_completed_today_takes_precedence(self):
        assert personal_message(completed_today=2, pending=5) == (
            "🎉 Amazing! You've completed 2 tasks today!"
        )

    def test_singular_pending(self):
        assert personal_message(completed_today=0, pending=1) == (
            "📋 You have 1 task waiting. You've got this!"
        )

    def test_nothing_to_report(self):
        assert personal_message(0, 0) == ""


class TestMotivationService:
    """Test MotivationService.daily."""

    @pytest.mark.asyncio
    async def test_daily(self, mock_db_session):
        service = MotivationService(mock_db_session, rng=random.Random(1))
        service.task_repo = AsyncMock()
        service.task_repo.count_pending = AsyncMock(return_value=3)
        service.task_repo.count_completed_since = AsyncMock(return_value=1)
        user_id = uuid4()

        daily = await service.daily(user_id, now=NOW)

        assert daily.pending_tasks == 3
        assert daily.completed_today == 1
        assert daily.personal_message == "🎉 Amazing! You've completed 1 task today!"
        assert (daily.quote, daily.author) in {(q.text, q.author) for q in QUOTES}
        service.task_repo.count_completed_since.assert_awaited_once_with(
            user_id, datetime(2026, 10, 21, tzinfo=UTC)
        )
