"""
Authentication endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any

from core.auth import get_current_user
from core.database import get_db
from schemas.user import RegisterLawyerRequest, LoginRequest, TokenResponse, UserResponse, CurrentUser
from services.user_service import UserService

router = APIRouter()

async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Dependency to get user service instance"""
    return UserService(db)

@router.post("/register-lawyer", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_lawyer(
    data: RegisterLawyerRequest,
    user_service: UserService = Depends(get_user_service)
):
    """
    Register a lawyer account

    - **email**: Unique login email
    - **full_name**: Display name
    - **password**: At least 6 characters
    """
    return await user_service.register_lawyer(data)

@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    user_service: UserService = Depends(get_user_service)
):
    """Exchange email and password for a bearer token"""
    token, user = await user_service.login(credentials.email, credentials.password)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))

@router.get("/me", response_model=CurrentUser)
async def get_me(current_user: Dict[str, Any] = Depends(get_current_user)):
    """Claims of the authenticated caller"""
    return current_user
