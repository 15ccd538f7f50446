"""
Task assignment service
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, and_
from sqlalchemy.orm import selectinload
from typing import Optional, List, Iterable, Dict, Any
from uuid import UUID
from datetime import datetime, UTC
import structlog

from models.task import Task, TaskStatus, TaskPriority
from models.case import Case
from models.client import Client
from models.user import User
from schemas.task import TaskCreate, TaskUpdate, UserTaskStats
from services.billing_service import is_past_due
from core.exceptions import NotFoundError

logger = structlog.get_logger()

def summarize_user_tasks(tasks: Iterable[Task], now: datetime) -> List[UserTaskStats]:
    """
    Count open, completed and overdue tasks per assignee

    Tasks not DONE are open; open tasks past their due date are also overdue.
    Assignees appear in order of first occurrence.
    """
    stats: Dict[Any, UserTaskStats] = {}

    for task in tasks:
        if task.assigned_to_id is None:
            continue

        entry = stats.get(task.assigned_to_id)
        if entry is None:
            assignee = task.assigned_to
            entry = UserTaskStats(
                user_id=task.assigned_to_id,
                full_name=assignee.full_name if assignee is not None else None,
            )
            stats[task.assigned_to_id] = entry

        if task.status == TaskStatus.DONE:
            entry.completed_tasks += 1
        else:
            entry.open_tasks += 1
            if is_past_due(task.due_date, now):
                entry.overdue_tasks += 1

    return list(stats.values())

class TaskService:
    """Service for task operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_user(self, user_id: UUID, label: str) -> None:
        if await self.db.get(User, user_id) is None:
            raise NotFoundError(f"{label} not found", error_code="USER_NOT_FOUND")

    async def _optional_link(self, model, link_id: Optional[UUID]) -> Optional[UUID]:
        if link_id is not None and await self.db.get(model, link_id) is None:
            return None
        return link_id

    async def list_tasks(
        self,
        assigned_to_id: Optional[UUID] = None,
        case_id: Optional[UUID] = None,
        client_id: Optional[UUID] = None,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> List[Task]:
        conditions = []
        if assigned_to_id:
            conditions.append(Task.assigned_to_id == assigned_to_id)
        if case_id:
            conditions.append(Task.case_id == case_id)
        if client_id:
            conditions.append(Task.client_id == client_id)
        if status:
            conditions.append(Task.status == status)
        if priority:
            conditions.append(Task.priority == priority)

        query = select(Task).order_by(Task.due_date.asc().nulls_last(), Task.created_at.desc())
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_task(self, task_id: UUID) -> Task:
        task = await self.db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task not found", error_code="TASK_NOT_FOUND")
        return task

    async def create_task(self, task_data: TaskCreate, current_user_id: UUID) -> Task:
        """
        Create a task

        The creator defaults to the calling user. Unknown client or case ids
        are left unlinked.
        """
        values = task_data.model_dump()
        values["created_by_id"] = values.get("created_by_id") or current_user_id

        await self._require_user(values["assigned_to_id"], "Assigned user")
        await self._require_user(values["created_by_id"], "Creator user")
        values["client_id"] = await self._optional_link(Client, values.get("client_id"))
        values["case_id"] = await self._optional_link(Case, values.get("case_id"))

        if values["status"] == TaskStatus.DONE:
            values["completed_at"] = datetime.now(UTC)

        task = Task(**values)
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)

        logger.info("Task created", task_id=str(task.id), assigned_to_id=str(task.assigned_to_id))
        return task

    async def update_task(self, task_id: UUID, task_data: TaskUpdate) -> Task:
        task = await self.get_task(task_id)
        update_data = task_data.model_dump(exclude_unset=True)

        if "assigned_to_id" in update_data:
            await self._require_user(update_data["assigned_to_id"], "Assigned user")
        if "client_id" in update_data:
            update_data["client_id"] = await self._optional_link(Client, update_data["client_id"])
        if "case_id" in update_data:
            update_data["case_id"] = await self._optional_link(Case, update_data["case_id"])

        previous_status = task.status
        for field, value in update_data.items():
            setattr(task, field, value)

        if task.status == TaskStatus.DONE and previous_status != TaskStatus.DONE and task.completed_at is None:
            task.completed_at = datetime.now(UTC)

        await self.db.commit()
        await self.db.refresh(task)

        logger.info("Task updated", task_id=str(task_id), status=task.status.value)
        return task

    async def delete_task(self, task_id: UUID) -> None:
        await self.db.execute(delete(Task).where(Task.id == task_id))
        await self.db.commit()
        logger.info("Task deleted", task_id=str(task_id))

    async def get_user_stats(self) -> List[UserTaskStats]:
        result = await self.db.execute(select(Task).options(selectinload(Task.assigned_to)))
        return summarize_user_tasks(result.scalars().all(), datetime.now(UTC))
