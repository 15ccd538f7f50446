"""
Notification model definitions
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from enum import Enum as PyEnum
import uuid

from core.database import Base

class NotificationChannel(PyEnum):
    """Delivery channel enumeration"""
    EMAIL = "EMAIL"
    SMS = "SMS"
    WHATSAPP = "WHATSAPP"

class NotificationStatus(PyEnum):
    """Delivery status enumeration"""
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"

class Notification(Base):
    """Outbound message record; sending is simulated by a status change"""
    __tablename__ = "notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    channel = Column(Enum(NotificationChannel, name="notificationchannel"), nullable=False)
    type = Column(String(100), nullable=False)

    # Targets
    target_email = Column(String(255))
    target_phone = Column(String(30))
    target_whatsapp = Column(String(30))

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"))
    client_id = Column(UUID(as_uuid=True), ForeignKey("clients.id", ondelete="SET NULL"))
    case_id = Column(UUID(as_uuid=True), ForeignKey("cases.id", ondelete="SET NULL"))

    payload = Column(JSON)
    scheduled_at = Column(DateTime(timezone=True))
    sent_at = Column(DateTime(timezone=True))
    status = Column(Enum(NotificationStatus, name="notificationstatus"), nullable=False, default=NotificationStatus.PENDING)
    error_message = Column(String(500))

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Notification(id={self.id}, channel='{self.channel}', status='{self.status}')>"
