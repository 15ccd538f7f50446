"""
Case and case session model definitions
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
import uuid

from core.database import Base

class CaseType(PyEnum):
    """Case type enumeration"""
    CRIMINAL = "CRIMINAL"
    COMMERCIAL = "COMMERCIAL"
    PERSONAL_STATUS = "PERSONAL_STATUS"
    ADMINISTRATIVE = "ADMINISTRATIVE"
    LABOR = "LABOR"
    OTHER = "OTHER"

class CaseStatus(PyEnum):
    """Case status enumeration"""
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    PENDING = "PENDING"
    SUSPENDED = "SUSPENDED"

class CaseStage(PyEnum):
    """Litigation stage enumeration"""
    PRE_TRIAL = "PRE_TRIAL"
    FIRST_INSTANCE = "FIRST_INSTANCE"
    APPEAL = "APPEAL"
    SUPREME = "SUPREME"
    EXECUTION = "EXECUTION"

class Case(Base):
    """Legal matter tracked for a client"""
    __tablename__ = "cases"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    case_number = Column(String(100), nullable=False, index=True)
    title = Column(String(255))
    description = Column(Text)

    # Case details
    type = Column(Enum(CaseType, name="casetype"), nullable=False, default=CaseType.OTHER)
    court = Column(String(200))
    stage = Column(Enum(CaseStage, name="casestage"), nullable=False, default=CaseStage.PRE_TRIAL)
    status = Column(Enum(CaseStatus, name="casestatus"), nullable=False, default=CaseStatus.OPEN)

    # Ownership
    client_id = Column(UUID(as_uuid=True), ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    responsible_lawyer_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"))

    # Audit fields
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("Client", back_populates="cases", lazy="selectin")
    responsible_lawyer = relationship("User", foreign_keys=[responsible_lawyer_id])
    sessions = relationship(
        "CaseSession",
        back_populates="case",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CaseSession.date",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Case(id={self.id}, case_number='{self.case_number}')>"

class CaseSession(Base):
    """Court hearing belonging to a case"""
    __tablename__ = "case_sessions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    case_id = Column(UUID(as_uuid=True), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(DateTime(timezone=True), nullable=False, index=True)
    location = Column(String(255))
    result = Column(String(500))
    notes = Column(Text)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    case = relationship("Case", back_populates="sessions")

    def __repr__(self):
        return f"<CaseSession(id={self.id}, case_id={self.case_id}, date={self.date})>"
