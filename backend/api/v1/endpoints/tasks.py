"""
Task endpoints
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List, Optional
from uuid import UUID

from core.auth import get_current_user
from core.database import get_db
from models.task import TaskStatus, TaskPriority
from schemas.base import BaseResponse
from schemas.task import TaskCreate, TaskUpdate, TaskResponse, UserTaskStats
from services.task_service import TaskService

router = APIRouter()

async def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    """Dependency to get task service instance"""
    return TaskService(db)

@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    assigned_to_id: Optional[UUID] = None,
    case_id: Optional[UUID] = None,
    client_id: Optional[UUID] = None,
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[TaskPriority] = None,
    current_user: Dict[str, Any] = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    """List tasks by due date, then newest"""
    return await task_service.list_tasks(
        assigned_to_id=assigned_to_id,
        case_id=case_id,
        client_id=client_id,
        status=task_status,
        priority=priority,
    )

@router.get("/stats/users", response_model=List[UserTaskStats])
async def get_user_task_stats(
    current_user: Dict[str, Any] = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    """Open, completed and overdue task counts per assignee"""
    return await task_service.get_user_stats()

@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    """
    Create a task

    - **assigned_to_id**: Assignee, must exist
    - **created_by_id**: Defaults to the caller
    """
    return await task_service.create_task(task_data, UUID(current_user["id"]))

@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    return await task_service.get_task(task_id)

@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    task_data: TaskUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    return await task_service.update_task(task_id, task_data)

@router.delete("/{task_id}", response_model=BaseResponse)
async def delete_task(
    task_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service)
):
    await task_service.delete_task(task_id)
    return BaseResponse(message="Task deleted successfully")
