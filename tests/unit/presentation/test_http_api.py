"""Tests for the HTTP API."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from tasktrack.application.assistant import AssistantReply, AssistantRuntime
from tasktrack.application.assistant.service import get_assistant_runtime
from tasktrack.application.services import (
    DailyMotivation,
    IndividualDetail,
    LeaderboardEntry,
    Roster,
    RosterEntry,
)
from tasktrack.domain.entities import Feedback, TaskComment, TaskStatus
from tasktrack.domain.errors import InsufficientPermissionsError, TaskNotFoundError, ValidationError
from tasktrack.infrastructure.auth import AuthContext, TokenVerifier, get_current_user
from tasktrack.infrastructure.auth.tokens import get_token_verifier
from tasktrack.infrastructure.database import get_db
from tasktrack.main import create_app
from tasktrack.presentation.http.dependencies import (
    get_assistant_service,
    get_counselor_service,
    get_feedback_service,
    get_leaderboard_service,
    get_motivation_service,
    get_task_service,
)
from tests.factories import NOW, make_task, make_user

USER_ID = uuid4()


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.dependency_overrides[get_current_user] = lambda: AuthContext(
        user_id=USER_ID, email="asha@example.com", role="individual"
    )
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealth:
    """Test health endpoints."""

    @pytest.mark.asyncio
    async def test_live(self, client):
        response = await client.get("/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    @pytest.mark.asyncio
    async def test_health_reports_generation(self, app, client, settings):
        app.dependency_overrides[get_assistant_runtime] = lambda: AssistantRuntime.from_settings(
            settings
        )

        response = await client.get("/health")

        assert response.status_code == 200
        assistant = response.json()["assistant"]
        assert assistant["generation_configured"] is True
        assert assistant["model"] == "gemma-3-27b-it"
        assert assistant["min_request_interval_ms"] == 500
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_ready(self, app, client, mock_db_session):
        app.dependency_overrides[get_db] = lambda: mock_db_session

        response = await client.get("/ready")

        assert response.json() == {"ready": True, "checks": {"database": True}}

    @pytest.mark.asyncio
    async def test_not_ready_when_database_down(self, app, client, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        app.dependency_overrides[get_db] = lambda: mock_db_session

        response = await client.get("/ready")

        assert response.status_code == 503
        assert response.json()["checks"] == {"database": False}

    @pytest.mark.asyncio
    async def test_metrics(self, client):
        await client.get("/live")
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text


class TestAuth:
    @pytest.mark.asyncio
    async def test_missing_token(self, app, client):
        app.dependency_overrides.pop(get_current_user)

        response = await client.get("/motivational")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_INVALID"

    @pytest.mark.asyncio
    async def test_valid_token(self, app, client, settings):
        app.dependency_overrides.pop(get_current_user)
        verifier = TokenVerifier(settings)
        app.dependency_overrides[get_token_verifier] = lambda: verifier
        service = AsyncMock()
        service.daily = AsyncMock(
            return_value=DailyMotivation(
                quote="Little things make big days.",
                author="Unknown",
                personal_message="",
                pending_tasks=0,
                completed_today=0,
            )
        )
        app.dependency_overrides[get_motivation_service] = lambda: service
        token = verifier.issue_token(USER_ID, "asha@example.com", "individual")

        response = await client.get(
            "/motivational", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json()["quote"] == "Little things make big days."
        service.daily.assert_awaited_once_with(USER_ID)


class TestAssistantChat:
    """Test POST /ai/chat."""

    @pytest.mark.asyncio
    async def test_chat(self, app, client):
        service = AsyncMock()
        service.reply = AsyncMock(return_value=AssistantReply(text="Keep going!", source="model"))
        app.dependency_overrides[get_assistant_service] = lambda: service

        response = await client.post(
            "/ai/chat",
            json={
                "message": "How am I doing?",
                "history": [{"role": "assistant", "content": "Hi!"}],
            },
        )

        assert response.status_code == 200
        assert response.json() == {"response": "Keep going!", "source": "model"}
        kwargs = service.reply.await_args.kwargs
        assert kwargs["role"] == "individual"
        assert kwargs["history"][0].role == "assistant"

    @pytest.mark.asyncio
    async def test_empty_message_rejected(self, app, client):
        app.dependency_overrides[get_assistant_service] = lambda: AsyncMock()

        response = await client.post("/ai/chat", json={"message": ""})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestTasks:
    """Test task endpoints."""

    @pytest.mark.asyncio
    async def test_list_tasks(self, app, client):
        service = AsyncMock()
        service.list_tasks = AsyncMock(return_value=[make_task(USER_ID, title="Essay")])
        app.dependency_overrides[get_task_service] = lambda: service

        response = await client.get("/tasks", params={"day": "2026-10-21"})

        assert response.status_code == 200
        assert response.json()[0]["title"] == "Essay"
        assert service.list_tasks.await_args.kwargs["day"].isoformat() == "2026-10-21"

    @pytest.mark.asyncio
    async def test_create_task(self, app, client):
        task = make_task(USER_ID, title="Essay")
        service = AsyncMock()
        service.create_task = AsyncMock(return_value=task)
        app.dependency_overrides[get_task_service] = lambda: service

        response = await client.post("/tasks", json={"title": "Essay", "date": "2026-10-21"})

        assert response.status_code == 201
        assert response.json()["id"] == str(task.id)

    @pytest.mark.asyncio
    async def test_complete_task(self, app, client):
        task = make_task(USER_ID)
        task.set_status(TaskStatus.DONE, datetime.now(UTC), reward="Nice!")
        service = AsyncMock()
        service.update_task = AsyncMock(return_value=task)
        app.dependency_overrides[get_task_service] = lambda: service

        response = await client.patch(f"/tasks/{task.id}", json={"status": "DONE"})

        assert response.status_code == 200
        assert response.json()["completed"] is True
        assert service.update_task.await_args.kwargs == {"status": TaskStatus.DONE}

    @pytest.mark.asyncio
    async def test_unknown_task_is_404(self, app, client):
        service = AsyncMock()
        service.delete_task = AsyncMock(side_effect=TaskNotFoundError(message="Task not found"))
        app.dependency_overrides[get_task_service] = lambda: service

        response = await client.delete(f"/tasks/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TASK_NOT_FOUND"


class TestLeaderboard:
    @pytest.mark.asyncio
    async def test_individual_sees_peers(self, app, client):
        entry = LeaderboardEntry(
            user_id=USER_ID,
            name="Asha",
            email="asha@example.com",
            completed_tasks=3,
            pending_tasks=1,
            total_tasks=4,
            actual_minutes=0,
            estimated_minutes=0,
            efficiency=100,
            composite_score=72.5,
            rank=1,
        )
        service = AsyncMock()
        service.for_individual = AsyncMock(return_value=[entry])
        app.dependency_overrides[get_leaderboard_service] = lambda: service

        response = await client.get("/leaderboard")

        assert response.status_code == 200
        body = response.json()
        assert body["leaderboard"][0]["composite_score"] == 72.5
        assert body["current_user_id"] == str(USER_ID)
        service.for_counselor.assert_not_awaited()


def _as_counselor(app) -> None:
    app.dependency_overrides[get_current_user] = lambda: AuthContext(
        user_id=USER_ID, email="bea@example.com", role="counselor"
    )


class TestCounselorRoster:
    """Roster endpoints are counselor-only."""

    @pytest.mark.asyncio
    async def test_individual_is_forbidden(self, app, client):
        service = AsyncMock()
        app.dependency_overrides[get_counselor_service] = lambda: service

        response = await client.get("/counselor/individuals")

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "INSUFFICIENT_PERMISSIONS"
        service.roster.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_roster(self, app, client):
        _as_counselor(app)
        asha = make_user("Asha", counselor_id=USER_ID)
        service = AsyncMock()
        service.roster = AsyncMock(
            return_value=Roster(
                individuals=[RosterEntry(asha.id, "Asha", asha.email, 4, 3)],
                total_completed=3,
                average_completion=75,
            )
        )
        app.dependency_overrides[get_counselor_service] = lambda: service

        response = await client.get("/counselor/individuals")

        assert response.status_code == 200
        body = response.json()
        assert body["individuals"][0]["id"] == str(asha.id)
        assert body["individuals"][0]["completed_tasks"] == 3
        assert body["average_completion"] == 75

    @pytest.mark.asyncio
    async def test_add_individual_by_email(self, app, client):
        _as_counselor(app)
        asha = make_user("Asha", counselor_id=USER_ID)
        service = AsyncMock()
        service.add_individual = AsyncMock(return_value=asha)
        app.dependency_overrides[get_counselor_service] = lambda: service

        response = await client.post("/counselor/individuals", json={"email": asha.email})

        assert response.status_code == 200
        assert response.json() == {"id": str(asha.id), "name": "Asha", "email": asha.email}
        service.add_individual.assert_awaited_once_with(USER_ID, asha.email)

    @pytest.mark.asyncio
    async def test_add_already_assigned_is_400(self, app, client):
        _as_counselor(app)
        service = AsyncMock()
        service.add_individual = AsyncMock(
            side_effect=ValidationError(message="This individual is already assigned to you")
        )
        app.dependency_overrides[get_counselor_service] = lambda: service

        response = await client.post("/counselor/individuals", json={"email": "a@example.com"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_individual_detail(self, app, client):
        _as_counselor(app)
        asha = make_user("Asha", counselor_id=USER_ID)
        feedback = Feedback(
            id=uuid4(),
            counselor_id=USER_ID,
            individual_id=asha.id,
            message="Keep going",
            counselor_name="Bea",
            created_at=NOW,
        )
        service = AsyncMock()
        service.individual_detail = AsyncMock(
            return_value=IndividualDetail(
                user=asha, tasks=[make_task(asha.id, title="Essay")], feedback=[feedback]
            )
        )
        app.dependency_overrides[get_counselor_service] = lambda: service

        response = await client.get(f"/counselor/individuals/{asha.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["tasks"][0]["title"] == "Essay"
        assert body["feedback"][0]["counselor_name"] == "Bea"

    @pytest.mark.asyncio
    async def test_remove_individual(self, app, client):
        _as_counselor(app)
        individual_id = uuid4()
        service = AsyncMock()
        app.dependency_overrides[get_counselor_service] = lambda: service

        response = await client.delete(f"/counselor/individuals/{individual_id}")

        assert response.status_code == 204
        service.remove_individual.assert_awaited_once_with(USER_ID, individual_id)

    @pytest.mark.asyncio
    async def test_list_counselors_open_to_individuals(self, app, client):
        bea = make_user("Bea", role="counselor")
        service = AsyncMock()
        service.list_counselors = AsyncMock(return_value=[bea])
        app.dependency_overrides[get_counselor_service] = lambda: service

        response = await client.get("/counselors")

        assert response.status_code == 200
        assert response.json()[0]["name"] == "Bea"


class TestFeedback:
    @pytest.mark.asyncio
    async def test_individual_cannot_send_feedback(self, app, client):
        service = AsyncMock()
        app.dependency_overrides[get_feedback_service] = lambda: service

        response = await client.post(
            "/feedback", json={"individual_id": str(uuid4()), "message": "Hi"}
        )

        assert response.status_code == 403
        service.give_feedback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_counselor_sends_feedback(self, app, client):
        _as_counselor(app)
        individual_id = uuid4()
        feedback = Feedback(
            id=uuid4(),
            counselor_id=USER_ID,
            individual_id=individual_id,
            message="Great week",
            created_at=NOW,
        )
        service = AsyncMock()
        service.give_feedback = AsyncMock(return_value=feedback)
        app.dependency_overrides[get_feedback_service] = lambda: service

        response = await client.post(
            "/feedback", json={"individual_id": str(individual_id), "message": "Great week"}
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Great week"
        service.give_feedback.assert_awaited_once_with(USER_ID, individual_id, "Great week")

    @pytest.mark.asyncio
    async def test_list_received_feedback(self, app, client):
        service = AsyncMock()
        service.list_feedback = AsyncMock(return_value=[])
        app.dependency_overrides[get_feedback_service] = lambda: service

        response = await client.get("/feedback")

        assert response.status_code == 200
        assert response.json() == []
        service.list_feedback.assert_awaited_once_with(USER_ID)

    @pytest.mark.asyncio
    async def test_list_task_comments(self, app, client):
        task_id = uuid4()
        comment = TaskComment(
            id=uuid4(),
            task_id=task_id,
            author_id=uuid4(),
            message="Split this up",
            author_name="Bea",
            author_role="counselor",
            created_at=NOW,
        )
        service = AsyncMock()
        service.list_comments = AsyncMock(return_value=[comment])
        app.dependency_overrides[get_feedback_service] = lambda: service

        response = await client.get(f"/tasks/{task_id}/comments")

        assert response.status_code == 200
        assert response.json()[0]["author_role"] == "counselor"
        service.list_comments.assert_awaited_once_with(USER_ID, task_id)

    @pytest.mark.asyncio
    async def test_comment_on_unrelated_task_is_403(self, app, client):
        _as_counselor(app)
        service = AsyncMock()
        service.add_comment = AsyncMock(
            side_effect=InsufficientPermissionsError(message="Not your individual")
        )
        app.dependency_overrides[get_feedback_service] = lambda: service

        response = await client.post(f"/tasks/{uuid4()}/comments", json={"message": "Hi"})

        assert response.status_code == 403
