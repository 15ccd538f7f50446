"""
Calendar service: event CRUD and free-slot suggestion
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, and_
from typing import Optional, List, Dict, Iterable, Tuple, Any
from uuid import UUID
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo
import structlog

from models.calendar_event import CalendarEvent
from models.case import Case
from models.client import Client
from models.user import User
from schemas.calendar import CalendarEventCreate, CalendarEventUpdate
from schemas.base import as_utc
from core.config import settings
from core.exceptions import NotFoundError, ValidationError

logger = structlog.get_logger()

Interval = Tuple[datetime, Optional[datetime]]

def workday_window(day: date, tz_name: str = None) -> Tuple[datetime, datetime]:
    """Working hours of a calendar day as timezone-aware datetimes"""
    tz = ZoneInfo(tz_name or settings.CALENDAR_TIMEZONE)
    start = datetime.combine(day, time(hour=settings.WORKDAY_START_HOUR), tzinfo=tz)
    end = datetime.combine(day, time(hour=settings.WORKDAY_END_HOUR), tzinfo=tz)
    return start, end

def suggest_free_slots(
    events: Iterable[Interval],
    window_start: datetime,
    window_end: datetime,
    min_gap: timedelta = timedelta(minutes=30),
    slot_length: timedelta = timedelta(minutes=60),
) -> List[Tuple[datetime, datetime]]:
    """
    Walk the day's bookings and propose at most one slot per gap

    A gap qualifies when it is at least ``min_gap`` long, but a slot is only
    proposed when a full ``slot_length`` fits before the next booking. Events
    without an end do not move the cursor.

    Args:
        events: (start, end) pairs; end may be None
        window_start: Start of the working window
        window_end: End of the working window

    Returns:
        List of (slot_start, slot_end) pairs in chronological order
    """
    slots = []
    cursor = window_start

    def propose(boundary: datetime) -> None:
        if boundary - cursor >= min_gap:
            slot_end = cursor + slot_length
            if slot_end <= boundary:
                slots.append((cursor, slot_end))

    for start, end in sorted(events, key=lambda interval: interval[0]):
        propose(start)
        if end is not None and end > cursor:
            cursor = end

    propose(window_end)
    return slots

class CalendarService:
    """Service for calendar operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _resolve_links(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Null out link ids that do not point at an existing row"""
        for field, model in (("client_id", Client), ("case_id", Case), ("assigned_to_id", User)):
            link_id = values.get(field)
            if link_id is not None and await self.db.get(model, link_id) is None:
                logger.info("Calendar link not found, leaving unlinked", field=field, link_id=str(link_id))
                values[field] = None
        return values

    async def list_events(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        client_id: Optional[UUID] = None,
        case_id: Optional[UUID] = None,
        assigned_to_id: Optional[UUID] = None,
    ) -> List[CalendarEvent]:
        """List events; the date range applies only when both bounds are given"""
        conditions = []
        if client_id:
            conditions.append(CalendarEvent.client_id == client_id)
        if case_id:
            conditions.append(CalendarEvent.case_id == case_id)
        if assigned_to_id:
            conditions.append(CalendarEvent.assigned_to_id == assigned_to_id)
        if date_from and date_to:
            conditions.append(CalendarEvent.start_at.between(date_from, date_to))

        query = select(CalendarEvent).order_by(CalendarEvent.start_at.asc())
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_event(self, event_id: UUID) -> CalendarEvent:
        event = await self.db.get(CalendarEvent, event_id)
        if event is None:
            raise NotFoundError("Calendar event not found", error_code="EVENT_NOT_FOUND")
        return event

    async def create_event(self, event_data: CalendarEventCreate) -> CalendarEvent:
        values = await self._resolve_links(event_data.model_dump())

        event = CalendarEvent(**values)
        self.db.add(event)
        await self.db.commit()
        await self.db.refresh(event)

        logger.info("Calendar event created", event_id=str(event.id), start_at=event.start_at.isoformat())
        return event

    async def update_event(self, event_id: UUID, event_data: CalendarEventUpdate) -> CalendarEvent:
        event = await self.get_event(event_id)
        update_data = await self._resolve_links(event_data.model_dump(exclude_unset=True))

        start_at = as_utc(update_data.get("start_at", event.start_at))
        end_at = as_utc(update_data.get("end_at", event.end_at))
        if start_at is not None and end_at is not None and end_at < start_at:
            raise ValidationError("end_at must not be before start_at", error_code="INVALID_TIME_RANGE")

        for field, value in update_data.items():
            setattr(event, field, value)

        await self.db.commit()
        await self.db.refresh(event)

        logger.info("Calendar event updated", event_id=str(event_id))
        return event

    async def delete_event(self, event_id: UUID) -> None:
        await self.db.execute(delete(CalendarEvent).where(CalendarEvent.id == event_id))
        await self.db.commit()
        logger.info("Calendar event deleted", event_id=str(event_id))

    async def suggest_slots(self, day: date, assigned_to_id: Optional[UUID] = None) -> List[Dict[str, str]]:
        """Propose free working-hour slots on a day, optionally for one assignee"""
        window_start, window_end = workday_window(day)

        query = select(CalendarEvent).where(
            CalendarEvent.start_at >= window_start,
            CalendarEvent.start_at <= window_end,
        )
        if assigned_to_id:
            query = query.where(CalendarEvent.assigned_to_id == assigned_to_id)

        result = await self.db.execute(query.order_by(CalendarEvent.start_at.asc()))
        events = result.scalars().all()

        slots = suggest_free_slots(
            [(event.start_at, event.end_at) for event in events],
            window_start,
            window_end,
            min_gap=timedelta(minutes=settings.SLOT_MIN_GAP_MINUTES),
            slot_length=timedelta(minutes=settings.SLOT_LENGTH_MINUTES),
        )

        logger.info("Slots suggested", day=day.isoformat(), events=len(events), slots=len(slots))
        return [{"start_at": start.isoformat(), "end_at": end.isoformat()} for start, end in slots]
