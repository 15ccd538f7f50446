"""
User and authentication schemas
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from uuid import UUID

from core.config import settings
from models.user import UserRole
from schemas.base import BaseEntity

class RegisterLawyerRequest(BaseModel):
    """Public self-registration of a lawyer account"""
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=30)
    password: str

    @field_validator('full_name')
    @classmethod
    def full_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('full_name must not be empty')
        return v.strip()

    @field_validator('password')
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(f'password must be at least {settings.PASSWORD_MIN_LENGTH} characters')
        return v

class LoginRequest(BaseModel):
    """Login request"""
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserResponse(BaseEntity):
    """User as exposed by the API; never carries the password hash"""
    email: str
    full_name: str
    phone: Optional[str] = None
    role: UserRole

class TokenResponse(BaseModel):
    """Login response"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

class CurrentUser(BaseModel):
    """Claims of the authenticated caller"""
    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None
