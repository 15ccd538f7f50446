"""
Property-based tests for task assignment and workload stats
"""

import asyncio
from datetime import datetime, timedelta, UTC
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from hypothesis import given, settings, strategies as st

import models  # noqa: F401
from models.task import Task, TaskStatus
from models.user import User
from schemas.task import TaskCreate, TaskUpdate
from services.task_service import TaskService, summarize_user_tasks
from core.exceptions import NotFoundError

NOW = datetime(2026, 5, 10, 8, 0, tzinfo=UTC)

def task_stub(assignee, status, due_date=None):
    return SimpleNamespace(
        assigned_to_id=assignee.id,
        assigned_to=assignee,
        status=status,
        due_date=due_date,
    )

class TestSummarizeUserTasks:
    """Workload counters per assignee"""

    def test_counts_open_completed_and_overdue(self):
        alice = SimpleNamespace(id=uuid4(), full_name="Alice")
        omar = SimpleNamespace(id=uuid4(), full_name="Omar")
        tasks = [
            task_stub(alice, TaskStatus.TODO, NOW - timedelta(days=1)),
            task_stub(alice, TaskStatus.IN_PROGRESS, NOW + timedelta(days=1)),
            task_stub(alice, TaskStatus.DONE, NOW - timedelta(days=5)),
            task_stub(omar, TaskStatus.DONE),
        ]

        stats = summarize_user_tasks(tasks, NOW)

        assert [entry.full_name for entry in stats] == ["Alice", "Omar"]
        assert (stats[0].open_tasks, stats[0].completed_tasks, stats[0].overdue_tasks) == (2, 1, 1)
        assert (stats[1].open_tasks, stats[1].completed_tasks, stats[1].overdue_tasks) == (0, 1, 0)

    def test_no_tasks(self):
        assert summarize_user_tasks([], NOW) == []

    @given(entries=st.lists(
        st.tuples(st.integers(min_value=0, max_value=3), st.sampled_from(list(TaskStatus)), st.booleans()),
        max_size=30,
    ))
    @settings(deadline=1000, max_examples=100)
    def test_every_task_is_counted_once(self, entries):
        people = [SimpleNamespace(id=uuid4(), full_name=f"User {i}") for i in range(4)]
        tasks = [
            task_stub(people[who], status, NOW - timedelta(hours=1) if late else None)
            for who, status, late in entries
        ]

        stats = summarize_user_tasks(tasks, NOW)

        assert sum(entry.open_tasks + entry.completed_tasks for entry in stats) == len(tasks)
        for entry in stats:
            assert entry.overdue_tasks <= entry.open_tasks

class TestTaskService:
    """Task operations with a mocked session"""

    def setup_method(self):
        self.mock_db = AsyncMock()
        self.mock_db.add = MagicMock()
        self.task_service = TaskService(self.mock_db)
        self.caller_id = uuid4()

    def _only_users_exist(self):
        async def lookup(model, _id):
            return SimpleNamespace(id=_id) if model is User else None

        self.mock_db.get = AsyncMock(side_effect=lookup)

    def test_creator_defaults_to_caller(self):
        self._only_users_exist()
        task_data = TaskCreate(title="Draft appeal", assigned_to_id=uuid4(), case_id=uuid4())

        task = asyncio.run(self.task_service.create_task(task_data, self.caller_id))

        assert task.created_by_id == self.caller_id
        assert task.case_id is None
        assert task.completed_at is None
        self.mock_db.commit.assert_awaited_once()

    def test_task_created_done_is_stamped(self):
        self._only_users_exist()
        task_data = TaskCreate(title="File power of attorney", status="done", assigned_to_id=uuid4())

        task = asyncio.run(self.task_service.create_task(task_data, self.caller_id))

        assert task.status == TaskStatus.DONE
        assert task.completed_at is not None

    def test_unknown_assignee_rejected(self):
        self.mock_db.get = AsyncMock(return_value=None)
        task_data = TaskCreate(title="Call client", assigned_to_id=uuid4())

        with pytest.raises(NotFoundError) as exc_info:
            asyncio.run(self.task_service.create_task(task_data, self.caller_id))

        assert exc_info.value.message == "Assigned user not found"
        self.mock_db.add.assert_not_called()

    def test_moving_to_done_stamps_completion(self):
        task = Task(
            id=uuid4(),
            title="Prepare memo",
            status=TaskStatus.IN_PROGRESS,
            assigned_to_id=uuid4(),
            created_by_id=uuid4(),
        )
        self.mock_db.get = AsyncMock(return_value=task)

        updated = asyncio.run(self.task_service.update_task(task.id, TaskUpdate(status="DONE")))

        assert updated.status == TaskStatus.DONE
        assert updated.completed_at is not None

    def test_completion_time_is_not_overwritten(self):
        finished = NOW - timedelta(days=2)
        task = Task(
            id=uuid4(),
            title="Prepare memo",
            status=TaskStatus.DONE,
            completed_at=finished,
            assigned_to_id=uuid4(),
            created_by_id=uuid4(),
        )
        self.mock_db.get = AsyncMock(return_value=task)

        updated = asyncio.run(self.task_service.update_task(task.id, TaskUpdate(title="Prepare final memo")))

        assert updated.completed_at == finished
