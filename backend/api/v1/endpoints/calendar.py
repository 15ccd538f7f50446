"""
Calendar endpoints
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List, Optional
from uuid import UUID
from datetime import date, datetime

from core.auth import get_current_user
from core.database import get_db
from schemas.base import BaseResponse
from schemas.calendar import (
    CalendarEventCreate, CalendarEventUpdate, CalendarEventResponse, SuggestedSlotsResponse
)
from services.calendar_service import CalendarService

router = APIRouter()

async def get_calendar_service(db: AsyncSession = Depends(get_db)) -> CalendarService:
    """Dependency to get calendar service instance"""
    return CalendarService(db)

@router.get("", response_model=List[CalendarEventResponse])
async def list_events(
    date_from: Optional[datetime] = Query(None, alias="from"),
    date_to: Optional[datetime] = Query(None, alias="to"),
    client_id: Optional[UUID] = None,
    case_id: Optional[UUID] = None,
    assigned_to_id: Optional[UUID] = None,
    current_user: Dict[str, Any] = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    """
    List events ordered by start

    - **from** / **to**: Inclusive start range, applied only when both are given
    """
    return await calendar_service.list_events(
        date_from=date_from,
        date_to=date_to,
        client_id=client_id,
        case_id=case_id,
        assigned_to_id=assigned_to_id,
    )

@router.get("/suggest/slots", response_model=SuggestedSlotsResponse)
async def suggest_slots(
    day: date = Query(..., alias="date", description="Day to plan, YYYY-MM-DD"),
    assigned_to_id: Optional[UUID] = None,
    current_user: Dict[str, Any] = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    """Propose free one-hour slots within working hours"""
    slots = await calendar_service.suggest_slots(day, assigned_to_id)
    return SuggestedSlotsResponse(date=day.isoformat(), assigned_to_id=assigned_to_id, slots=slots)

@router.post("", response_model=CalendarEventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: CalendarEventCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    return await calendar_service.create_event(event_data)

@router.get("/{event_id}", response_model=CalendarEventResponse)
async def get_event(
    event_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    return await calendar_service.get_event(event_id)

@router.patch("/{event_id}", response_model=CalendarEventResponse)
async def update_event(
    event_id: UUID,
    event_data: CalendarEventUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    return await calendar_service.update_event(event_id, event_data)

@router.delete("/{event_id}", response_model=BaseResponse)
async def delete_event(
    event_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    await calendar_service.delete_event(event_id)
    return BaseResponse(message="Calendar event deleted successfully")
