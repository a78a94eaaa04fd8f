"""Tests for domain entities."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from tasktrack.domain.entities import ConversationTurn, Task, TaskStatus, User

NOW = datetime(2026, 10, 21, 15, 0, tzinfo=UTC)


def _task(**overrides) -> Task:
    fields = {"id": uuid4(), "user_id": uuid4(), "title": "Revise algebra", "date": NOW}
    fields.update(overrides)
    return Task(**fields)


class TestUser:
    """Test User entity."""

    def test_user_creation(self):
        """Test creating a user."""
        user_id = uuid4()
        counselor_id = uuid4()
        user = User(
            id=user_id,
            email="asha@example.com",
            name="Asha",
            counselor_id=counselor_id,
        )

        assert user.id == user_id
        assert user.role == "individual"
        assert user.counselor_id == counselor_id
        assert user.is_counselor is False

    def test_counselor_role(self):
        user = User(id=uuid4(), email="c@example.com", name="Coach", role="counselor")
        assert user.is_counselor is True

    def test_user_requires_email(self):
        """Test that user requires email."""
        with pytest.raises(ValueError, match="email is required"):
            User(id=uuid4(), email="", name="Asha")

    def test_user_rejects_unknown_role(self):
        with pytest.raises(ValueError, match="Unknown user role"):
            User(id=uuid4(), email="a@example.com", name="Asha", role="admin")


class TestTask:
    """Test Task entity and its completion invariant."""

    def test_task_defaults(self):
        task = _task()

        assert task.status == TaskStatus.TODO
        assert task.completed is False
        assert task.completed_at is None
        assert task.is_done is False

    def test_task_requires_title(self):
        with pytest.raises(ValueError, match="title is required"):
            _task(title="   ")

    def test_task_requires_aware_date(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            _task(date=datetime(2026, 10, 21, 12))

    def test_status_coerced_from_string(self):
        assert _task(status="IN_PROGRESS").status == TaskStatus.IN_PROGRESS

    def test_done_sets_completion_fields(self):
        task = _task()

        task.set_status(TaskStatus.DONE, NOW, reward="Nice!")

        assert task.completed is True
        assert task.completed_at == NOW
        assert task.reward == "Nice!"
        assert task.is_done is True

    def test_leaving_done_clears_completion(self):
        task = _task()
        task.set_status(TaskStatus.DONE, NOW)

        task.set_status(TaskStatus.TODO, NOW + timedelta(minutes=5))

        assert task.completed is False
        assert task.completed_at is None

    def test_in_progress_stamps_start_once(self):
        task = _task()
        first = NOW
        task.set_status(TaskStatus.IN_PROGRESS, first)
        task.set_status(TaskStatus.IN_PROGRESS, first + timedelta(hours=1))

        assert task.started_at == first

    def test_set_completed_toggles_status(self):
        task = _task()

        task.set_completed(True, NOW)
        assert task.status == TaskStatus.DONE
        assert task.completed_at == NOW

        task.set_completed(False, NOW)
        assert task.status == TaskStatus.TODO
        assert task.completed is False
        assert task.completed_at is None

    def test_completed_flag_alone_counts_as_done(self):
        assert _task(completed=True).is_done is True


class TestConversationTurn:
    def test_turn_is_immutable(self):
        turn = ConversationTurn(role="user", content="hi")
        with pytest.raises(AttributeError):
            turn.content = "changed"
