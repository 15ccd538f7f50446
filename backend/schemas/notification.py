"""
Notification schemas
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, Any, Dict
from datetime import datetime
from uuid import UUID

from models.notification import NotificationChannel, NotificationStatus
from schemas.base import BaseEntity, uppercase_enum_fields

class NotificationCreate(BaseModel):
    """Schema for queueing a notification"""
    channel: NotificationChannel
    type: str = Field(..., min_length=1, max_length=100, description="Free-form notification kind")
    target_email: Optional[EmailStr] = None
    target_phone: Optional[str] = Field(None, max_length=30)
    target_whatsapp: Optional[str] = Field(None, max_length=30)
    user_id: Optional[UUID] = None
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None
    payload: Optional[Dict[str, Any]] = None
    scheduled_at: Optional[datetime] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'channel')

class NotificationResponse(BaseEntity):
    """Schema for notification responses"""
    channel: NotificationChannel
    type: str
    target_email: Optional[str] = None
    target_phone: Optional[str] = None
    target_whatsapp: Optional[str] = None
    user_id: Optional[UUID] = None
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None
    payload: Optional[Dict[str, Any]] = None
    scheduled_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    status: NotificationStatus
    error_message: Optional[str] = None

class UpcomingSessionPreview(BaseModel):
    """Case session due within the look-ahead window"""
    session_id: UUID
    case_id: Optional[UUID] = None
    case_number: Optional[str] = None
    client_name: Optional[str] = None
    date: datetime
    location: Optional[str] = None
