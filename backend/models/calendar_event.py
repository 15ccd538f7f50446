"""
Calendar event model definitions
"""

from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
import uuid

from core.database import Base

class CalendarEventType(PyEnum):
    """Calendar event type enumeration"""
    SESSION = "SESSION"
    MEETING = "MEETING"
    DEADLINE = "DEADLINE"
    OTHER = "OTHER"

class CalendarEvent(Base):
    """Scheduled item on the firm calendar"""
    __tablename__ = "calendar_events"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String(255), nullable=False)
    type = Column(Enum(CalendarEventType, name="calendareventtype"), nullable=False)

    start_at = Column(DateTime(timezone=True), nullable=False, index=True)
    end_at = Column(DateTime(timezone=True))
    is_all_day = Column(Boolean, nullable=False, default=False)
    location = Column(String(255))
    description = Column(Text)

    # Optional links
    client_id = Column(UUID(as_uuid=True), ForeignKey("clients.id", ondelete="SET NULL"))
    case_id = Column(UUID(as_uuid=True), ForeignKey("cases.id", ondelete="SET NULL"))
    assigned_to_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    client = relationship("Client")
    case = relationship("Case")
    assigned_to = relationship("User")

    def __repr__(self):
        return f"<CalendarEvent(id={self.id}, title='{self.title}', start_at={self.start_at})>"
