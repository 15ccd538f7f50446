"""
Notification service

Delivery is simulated: sending flips the status to SENT without contacting
any provider.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List, Dict, Any
from uuid import UUID
from datetime import datetime, timedelta, UTC
import structlog

from models.case import Case, CaseSession
from models.notification import Notification, NotificationStatus
from schemas.notification import NotificationCreate
from core.config import settings
from core.exceptions import NotFoundError

logger = structlog.get_logger()

class NotificationService:
    """Service for notification records"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_notifications(self) -> List[Notification]:
        result = await self.db.execute(select(Notification).order_by(Notification.created_at.desc()))
        return list(result.scalars().all())

    async def create_notification(self, notification_data: NotificationCreate) -> Notification:
        notification = Notification(**notification_data.model_dump())
        self.db.add(notification)
        await self.db.commit()
        await self.db.refresh(notification)

        logger.info(
            "Notification queued",
            notification_id=str(notification.id),
            channel=notification.channel.value,
            type=notification.type
        )
        return notification

    async def preview_upcoming_case_sessions(self, hours_ahead: int = None) -> List[Dict[str, Any]]:
        """Case sessions dated within the next ``hours_ahead`` hours, soonest first"""
        if hours_ahead is None:
            hours_ahead = settings.UPCOMING_SESSION_HOURS

        now = datetime.now(UTC)
        until = now + timedelta(hours=hours_ahead)

        result = await self.db.execute(
            select(CaseSession)
            .options(selectinload(CaseSession.case).selectinload(Case.client))
            .where(CaseSession.date > now, CaseSession.date <= until)
            .order_by(CaseSession.date.asc())
        )

        previews = []
        for session in result.scalars().all():
            case = session.case
            previews.append({
                "session_id": session.id,
                "case_id": case.id if case else session.case_id,
                "case_number": case.case_number if case else None,
                "client_name": case.client.name if case and case.client else None,
                "date": session.date,
                "location": session.location,
            })
        return previews

    async def simulate_send(self, notification_id: UUID) -> Notification:
        notification = await self.db.get(Notification, notification_id)
        if notification is None:
            raise NotFoundError("Notification not found", error_code="NOTIFICATION_NOT_FOUND")

        notification.status = NotificationStatus.SENT
        notification.sent_at = datetime.now(UTC)
        notification.error_message = None

        await self.db.commit()
        await self.db.refresh(notification)

        logger.info("Notification sent (simulated)", notification_id=str(notification_id))
        return notification
