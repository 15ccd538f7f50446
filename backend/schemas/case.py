"""
Case-related schemas for API requests and responses
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, Any, List
from datetime import datetime
from uuid import UUID

from models.case import CaseStatus, CaseType, CaseStage
from schemas.base import BaseEntity, uppercase_enum_fields
from schemas.client import ClientSummary

CASE_ENUM_FIELDS = ('type', 'stage', 'status')

class CaseCreate(BaseModel):
    """Schema for creating a new case"""
    case_number: str = Field(..., min_length=1, max_length=100, description="Court or internal case number")
    title: Optional[str] = Field(None, max_length=255)
    type: CaseType = Field(CaseType.OTHER, description="Type of case")
    court: Optional[str] = Field(None, max_length=200)
    stage: CaseStage = CaseStage.PRE_TRIAL
    status: CaseStatus = CaseStatus.OPEN
    description: Optional[str] = None
    client_id: UUID = Field(..., description="Owning client")
    responsible_lawyer_id: Optional[UUID] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        """Allow case-insensitive enum values"""
        return uppercase_enum_fields(data, *CASE_ENUM_FIELDS)

class CaseUpdate(BaseModel):
    """Schema for updating an existing case"""
    case_number: str = Field(None, min_length=1, max_length=100)
    title: Optional[str] = Field(None, max_length=255)
    type: CaseType = None
    court: Optional[str] = Field(None, max_length=200)
    stage: CaseStage = None
    status: CaseStatus = None
    description: Optional[str] = None
    client_id: UUID = None
    responsible_lawyer_id: Optional[UUID] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        """Allow case-insensitive enum values"""
        return uppercase_enum_fields(data, *CASE_ENUM_FIELDS)

class CaseSessionCreate(BaseModel):
    """Schema for scheduling a court session"""
    date: datetime
    location: Optional[str] = Field(None, max_length=255)
    result: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None

class CaseSessionResponse(BaseEntity):
    """Schema for case session responses"""
    case_id: UUID
    date: datetime
    location: Optional[str] = None
    result: Optional[str] = None
    notes: Optional[str] = None

class CaseResponse(BaseEntity):
    """Schema for case API responses"""
    case_number: str
    title: Optional[str] = None
    type: CaseType
    court: Optional[str] = None
    stage: CaseStage
    status: CaseStatus
    description: Optional[str] = None
    client_id: UUID
    responsible_lawyer_id: Optional[UUID] = None

    client: Optional[ClientSummary] = None
    sessions: List[CaseSessionResponse] = []
