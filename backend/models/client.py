"""
Client model definitions
"""

from sqlalchemy import Column, String, Text, DateTime, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
import uuid

from core.database import Base

class ClientType(PyEnum):
    """Client type enumeration"""
    INDIVIDUAL = "INDIVIDUAL"
    COMPANY = "COMPANY"
    GOVERNMENT = "GOVERNMENT"

class Client(Base):
    """Client model"""
    __tablename__ = "clients"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    # Basic information
    name = Column(String(200), nullable=False)
    type = Column(Enum(ClientType, name="clienttype"), nullable=False, default=ClientType.INDIVIDUAL)

    # Identifiers
    national_id = Column(String(50))
    commercial_registration = Column(String(50))

    # Contact information
    email = Column(String(255))
    phone = Column(String(30))
    notes = Column(Text)

    # Audit fields
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Cases restrict deletion of their client at the database level
    cases = relationship("Case", back_populates="client", passive_deletes="all")

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name}')>"
