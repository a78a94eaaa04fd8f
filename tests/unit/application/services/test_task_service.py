"""Tests for the task service."""

import random
from datetime import date, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from tasktrack.application.services.task_service import TaskService
from tasktrack.domain.entities import TaskStatus
from tasktrack.domain.errors import TaskNotFoundError, ValidationError
from tests.factories import NOW, make_task


def _service(mock_db_session, task=None) -> TaskService:
    service = TaskService(mock_db_session, rng=random.Random(0))
    service.task_repo = AsyncMock()
    service.task_repo.get_by_id = AsyncMock(return_value=task)
    service.task_repo.create = AsyncMock(side_effect=lambda t: t)
    service.task_repo.update = AsyncMock(side_effect=lambda t: t)
    return service


class TestCreateTask:
    @pytest.mark.asyncio
    async def test_scheduled_at_noon_utc(self, mock_db_session):
        service = _service(mock_db_session)
        user_id = uuid4()

        task = await service.create_task(user_id, "Read", date(2026, 10, 22), estimated_minutes=45)

        assert task.user_id == user_id
        assert task.date.hour == 12
        assert task.date.date() == date(2026, 10, 22)
        assert task.status == TaskStatus.TODO
        assert task.estimated_minutes == 45

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, mock_db_session):
        service = _service(mock_db_session)

        with pytest.raises(ValidationError):
            await service.create_task(uuid4(), " ", date(2026, 10, 22))


class TestUpdateTask:
    """Status and completion stay in sync."""

    @pytest.mark.asyncio
    async def test_done_sets_completion_and_reward(self, mock_db_session):
        task = make_task(title="Essay")
        service = _service(mock_db_session, task)

        updated = await service.update_task(task.user_id, task.id, status=TaskStatus.DONE, now=NOW)

        assert updated.completed is True
        assert updated.completed_at == NOW
        assert '"Essay"' in updated.reward

    @pytest.mark.asyncio
    async def test_uncomplete_resets_status(self, mock_db_session):
        task = make_task(status=TaskStatus.DONE)
        service = _service(mock_db_session, task)

        updated = await service.update_task(task.user_id, task.id, completed=False, now=NOW)

        assert updated.status == TaskStatus.TODO
        assert updated.completed_at is None

    @pytest.mark.asyncio
    async def test_in_progress_stamps_start(self, mock_db_session):
        task = make_task()
        service = _service(mock_db_session, task)

        updated = await service.update_task(
            task.user_id, task.id, status=TaskStatus.IN_PROGRESS, now=NOW
        )

        assert updated.started_at == NOW
        assert updated.completed is False

    @pytest.mark.asyncio
    async def test_field_edits(self, mock_db_session):
        task = make_task(estimated_minutes=30)
        service = _service(mock_db_session, task)

        updated = await service.update_task(
            task.user_id,
            task.id,
            title="Renamed",
            description=None,
            estimated_minutes=None,
            actual_minutes=25,
            now=NOW + timedelta(hours=1),
        )

        assert updated.title == "Renamed"
        assert updated.estimated_minutes is None
        assert updated.actual_minutes == 25
        assert updated.updated_at == NOW + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_other_users_task_is_not_found(self, mock_db_session):
        task = make_task()
        service = _service(mock_db_session, task)

        with pytest.raises(TaskNotFoundError):
            await service.update_task(uuid4(), task.id, completed=True)


class TestDeleteTask:
    @pytest.mark.asyncio
    async def test_delete_owned_task(self, mock_db_session):
        task = make_task()
        service = _service(mock_db_session, task)

        await service.delete_task(task.user_id, task.id)

        service.task_repo.delete.assert_awaited_once_with(task.id)

    @pytest.mark.asyncio
    async def test_missing_task(self, mock_db_session):
        service = _service(mock_db_session, None)

        with pytest.raises(TaskNotFoundError):
            await service.delete_task(uuid4(), uuid4())
