"""
Calendar schemas
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, Any, List
from datetime import datetime
from uuid import UUID

from models.calendar_event import CalendarEventType
from schemas.base import BaseEntity, uppercase_enum_fields

def check_time_range(start_at: datetime, end_at: Optional[datetime]) -> None:
    """Reject an end before the start, or a pair mixing aware and naive times"""
    if end_at is None:
        return
    if (start_at.tzinfo is None) != (end_at.tzinfo is None):
        raise ValueError('start_at and end_at must both include a timezone or both omit it')
    if end_at < start_at:
        raise ValueError('end_at must not be before start_at')

class CalendarEventCreate(BaseModel):
    """Schema for creating a calendar event"""
    title: str = Field(..., min_length=1, max_length=255)
    type: CalendarEventType
    start_at: datetime
    end_at: Optional[datetime] = None
    is_all_day: bool = False
    location: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None
    assigned_to_id: Optional[UUID] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'type')

    @model_validator(mode='after')
    def validate_time_range(self) -> 'CalendarEventCreate':
        check_time_range(self.start_at, self.end_at)
        return self

class CalendarEventUpdate(BaseModel):
    """Schema for updating a calendar event"""
    title: str = Field(None, min_length=1, max_length=255)
    type: CalendarEventType = None
    start_at: datetime = None
    end_at: Optional[datetime] = None
    is_all_day: bool = None
    location: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None
    assigned_to_id: Optional[UUID] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'type')

class CalendarEventResponse(BaseEntity):
    """Schema for calendar event responses"""
    title: str
    type: CalendarEventType
    start_at: datetime
    end_at: Optional[datetime] = None
    is_all_day: bool
    location: Optional[str] = None
    description: Optional[str] = None
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None
    assigned_to_id: Optional[UUID] = None

class SuggestedSlot(BaseModel):
    """Proposed free window"""
    start_at: str
    end_at: str

class SuggestedSlotsResponse(BaseModel):
    """Free-slot suggestion for a day"""
    date: str
    assigned_to_id: Optional[UUID] = None
    slots: List[SuggestedSlot]
