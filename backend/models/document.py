"""
Document metadata model definitions
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
import uuid

from core.database import Base

class DocumentType(PyEnum):
    """Document type enumeration"""
    PLEADING = "PLEADING"
    JUDGMENT = "JUDGMENT"
    POWER_OF_ATTORNEY = "POWER_OF_ATTORNEY"
    CONTRACT = "CONTRACT"
    CORRESPONDENCE = "CORRESPONDENCE"
    OTHER = "OTHER"

class Document(Base):
    """Document reference with optional extracted text; the file itself lives elsewhere"""
    __tablename__ = "documents"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String(255), nullable=False)
    type = Column(Enum(DocumentType, name="documenttype"), nullable=False, default=DocumentType.OTHER)

    # File reference
    file_url = Column(String(1000), nullable=False)
    original_file_name = Column(String(255))
    mime_type = Column(String(100))

    description = Column(Text)
    text_content = Column(Text)
    tags = Column(JSON, nullable=False, default=list)

    client_id = Column(UUID(as_uuid=True), ForeignKey("clients.id", ondelete="SET NULL"), index=True)
    case_id = Column(UUID(as_uuid=True), ForeignKey("cases.id", ondelete="SET NULL"), index=True)
    uploaded_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"))

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    client = relationship("Client")
    case = relationship("Case")
    uploaded_by = relationship("User")

    def __repr__(self):
        return f"<Document(id={self.id}, title='{self.title}', type='{self.type}')>"
