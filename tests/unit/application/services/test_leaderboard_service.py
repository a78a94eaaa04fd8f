"""Tests for the leaderboard."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from tasktrack.application.services.leaderboard_service import (
    LeaderboardService,
    composite_score,
    compute_leaderboard,
    efficiency_score,
)
from tasktrack.domain.entities import TaskStatus
from tasktrack.domain.errors import UserNotFoundError
from tests.factories import make_task, make_user


class TestEfficiency:
    def test_capped_at_200(self):
        assert efficiency_score(estimated_minutes=300, actual_minutes=60, completed_tasks=1) == 200

    def test_ratio(self):
        assert efficiency_score(estimated_minutes=60, actual_minutes=80, completed_tasks=1) == 75

    def test_untimed_completion_is_neutral(self):
        assert efficiency_score(estimated_minutes=30, actual_minutes=0, completed_tasks=2) == 100

    def test_nothing_done_is_zero(self):
        assert efficiency_score(estimated_minutes=0, actual_minutes=0, completed_tasks=0) == 0


class TestComputeLeaderboard:
    """Test compute_leaderboard."""

    def test_finisher_beats_procrastinator(self):
        a = make_user("Ada")
        b = make_user("Ben")
        a_tasks = [
            make_task(a.id, status=TaskStatus.DONE, estimated_minutes=30, actual_minutes=30)
            for _ in range(10)
        ]
        b_tasks = [make_task(b.id) for _ in range(10)]

        board = compute_leaderboard([(b, b_tasks), (a, a_tasks)])

        assert [e.name for e in board] == ["Ada", "Ben"]
        assert [e.rank for e in board] == [1, 2]
        # 10*10*0.4 + 100*0.35 + 100*0.25
        assert board[0].composite_score == 100.0
        assert board[0].efficiency == 100
        assert board[1].composite_score == 0.0
        assert board[1].pending_tasks == 10

    def test_empty_group(self):
        assert compute_leaderboard([]) == []

    def test_single_individual_without_tasks(self):
        """max pending floors at 1, so nobody divides by zero."""
        board = compute_leaderboard([(make_user(), [])])

        assert board[0].composite_score == 25.0
        assert board[0].rank == 1

    def test_composite_score_weights(self):
        assert composite_score(2, 50.0, 1, 2) == pytest.approx(8 + 17.5 + 12.5)

    def test_scores_rounded_to_two_places(self):
        user = make_user()
        tasks = [
            make_task(user.id, status=TaskStatus.DONE, estimated_minutes=10, actual_minutes=30),
        ]

        entry = compute_leaderboard([(user, tasks)])[0]

        # 4 + 33.333..*0.35 + 25
        assert entry.composite_score == 40.67
        assert entry.efficiency == 33


class TestLeaderboardService:
    """Test LeaderboardService."""

    @pytest.mark.asyncio
    async def test_individual_without_counselor_gets_empty_board(self, mock_db_session):
        user = make_user()
        service = LeaderboardService(mock_db_session)
        service.user_repo = AsyncMock()
        service.user_repo.get_by_id = AsyncMock(return_value=user)

        assert await service.for_individual(user.id) == []
        service.user_repo.list_individuals.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_individual_ranked_among_peers(self, mock_db_session):
        counselor_id = uuid4()
        me = make_user("Ada", counselor_id=counselor_id)
        peer = make_user("Ben", counselor_id=counselor_id)
        service = LeaderboardService(mock_db_session)
        service.user_repo = AsyncMock()
        service.user_repo.get_by_id = AsyncMock(return_value=me)
        service.user_repo.list_individuals = AsyncMock(return_value=[me, peer])
        service.task_repo = AsyncMock()
        service.task_repo.list_for_users = AsyncMock(
            return_value={me.id: [make_task(me.id, status=TaskStatus.DONE)], peer.id: []}
        )

        board = await service.for_individual(me.id)

        service.user_repo.list_individuals.assert_awaited_once_with(counselor_id)
        assert [e.user_id for e in board] == [me.id, peer.id]

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_db_session):
        service = LeaderboardService(mock_db_session)
        service.user_repo = AsyncMock()
        service.user_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(UserNotFoundError):
            await service.for_individual(uuid4())

    @pytest.mark.asyncio
    async def test_counselor_with_no_roster(self, mock_db_session):
        service = LeaderboardService(mock_db_session)
        service.user_repo = AsyncMock()
        service.user_repo.list_individuals = AsyncMock(return_value=[])
        service.task_repo = AsyncMock()

        assert await service.for_counselor(uuid4()) == []
        service.task_repo.list_for_users.assert_not_awaited()
