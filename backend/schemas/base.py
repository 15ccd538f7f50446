"""
Base schemas and response models
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Any, Dict
from datetime import datetime, UTC
from uuid import UUID

def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so they compare with aware ones"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value

def uppercase_enum_fields(data: Any, *fields: str) -> Any:
    """Upper-case string values of the given enum fields so they match stored values"""
    if isinstance(data, dict):
        for field in fields:
            if field in data and isinstance(data[field], str):
                data[field] = data[field].upper()
    return data

class BaseResponse(BaseModel):
    """Base API response model"""
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

class ErrorResponse(BaseResponse):
    """Error response model"""
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

class BaseEntity(BaseModel):
    """Base entity model with identity and audit timestamps"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class HealthCheck(BaseModel):
    """Readiness check response"""
    status: str = "ready"
    database: str = "connected"
    migrations: Optional[Dict[str, Any]] = None
    version: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
