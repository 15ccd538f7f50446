"""
Client schemas for API requests and responses
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, Any

from models.client import ClientType
from schemas.base import BaseEntity, uppercase_enum_fields

class ClientCreate(BaseModel):
    """Schema for creating a client"""
    name: str = Field(..., min_length=1, max_length=200)
    type: ClientType = ClientType.INDIVIDUAL
    national_id: Optional[str] = Field(None, max_length=50)
    commercial_registration: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    notes: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'type')

class ClientUpdate(BaseModel):
    """Schema for updating a client; omitted fields are kept"""
    name: str = Field(None, min_length=1, max_length=200)
    type: ClientType = None
    national_id: Optional[str] = Field(None, max_length=50)
    commercial_registration: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    notes: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'type')

class ClientResponse(BaseEntity):
    """Schema for client API responses"""
    name: str
    type: ClientType
    national_id: Optional[str] = None
    commercial_registration: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None

class ClientSummary(BaseEntity):
    """Client reference embedded in other resources"""
    name: str
    type: ClientType
