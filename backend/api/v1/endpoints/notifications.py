"""
Notification endpoints
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List, Optional
from uuid import UUID

from core.auth import get_current_user
from core.database import get_db
from schemas.notification import NotificationCreate, NotificationResponse, UpcomingSessionPreview
from services.notification_service import NotificationService

router = APIRouter()

async def get_notification_service(db: AsyncSession = Depends(get_db)) -> NotificationService:
    """Dependency to get notification service instance"""
    return NotificationService(db)

@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    current_user: Dict[str, Any] = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    return await notification_service.list_notifications()

@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    notification_data: NotificationCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    return await notification_service.create_notification(notification_data)

@router.get("/preview/case-sessions", response_model=List[UpcomingSessionPreview])
async def preview_case_sessions(
    hours_ahead: Optional[int] = Query(None, ge=1, le=24 * 90),
    current_user: Dict[str, Any] = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """Case sessions coming up within the look-ahead window"""
    return await notification_service.preview_upcoming_case_sessions(hours_ahead)

@router.post("/{notification_id}/simulate-send", response_model=NotificationResponse)
async def simulate_send(
    notification_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """Mark a notification as sent without delivering it"""
    return await notification_service.simulate_send(notification_id)
