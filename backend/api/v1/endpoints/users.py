"""
User directory endpoints
"""

from fastapi import APIRouter, Depends
from typing import Dict, Any, List

from core.auth import get_current_user
from schemas.user import UserResponse
from services.user_service import UserService
from api.v1.endpoints.auth import get_user_service

router = APIRouter()

@router.get("", response_model=List[UserResponse])
async def list_users(
    current_user: Dict[str, Any] = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    """List firm users ordered by name"""
    return await user_service.list_users()
