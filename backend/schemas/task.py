"""
Task schemas
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, Any
from datetime import datetime
from uuid import UUID

from models.task import TaskStatus, TaskPriority
from schemas.base import BaseEntity, uppercase_enum_fields

class TaskCreate(BaseModel):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    assigned_to_id: UUID
    created_by_id: Optional[UUID] = Field(None, description="Defaults to the caller")
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'status', 'priority')

class TaskUpdate(BaseModel):
    """Schema for updating a task"""
    title: str = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: TaskStatus = None
    priority: TaskPriority = None
    due_date: Optional[datetime] = None
    assigned_to_id: UUID = None
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'status', 'priority')

class TaskResponse(BaseEntity):
    """Schema for task responses"""
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    assigned_to_id: UUID
    created_by_id: UUID
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None

class UserTaskStats(BaseModel):
    """Per-assignee workload counters"""
    user_id: UUID
    full_name: Optional[str] = None
    open_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
