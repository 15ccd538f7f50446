"""
Invoice and payment model definitions
"""

from sqlalchemy import Column, String, Text, DateTime, Float, ForeignKey, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
import uuid

from core.database import Base

class Currency(PyEnum):
    """Supported invoice currencies"""
    SAR = "SAR"
    USD = "USD"
    EGP = "EGP"
    EUR = "EUR"

class InvoiceStatus(PyEnum):
    """Invoice status enumeration"""
    DRAFT = "DRAFT"
    SENT = "SENT"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"

class BillingModel(PyEnum):
    """How the invoice amount was derived"""
    HOURLY = "HOURLY"
    FIXED = "FIXED"
    CONTINGENCY = "CONTINGENCY"

class Invoice(Base):
    """Invoice issued to a client, optionally for a case"""
    __tablename__ = "invoices"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    client_id = Column(UUID(as_uuid=True), ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    case_id = Column(UUID(as_uuid=True), ForeignKey("cases.id", ondelete="SET NULL"), index=True)

    status = Column(Enum(InvoiceStatus, name="invoicestatus"), nullable=False, default=InvoiceStatus.DRAFT)
    billing_model = Column(Enum(BillingModel, name="billingmodel"), nullable=False)
    total_amount = Column(Float, nullable=False)
    currency = Column(Enum(Currency, name="currency"), nullable=False, default=Currency.SAR)

    due_date = Column(DateTime(timezone=True))
    paid_at = Column(DateTime(timezone=True))
    description = Column(Text)

    # Billing model inputs
    hours = Column(Float)
    hourly_rate = Column(Float)
    percentage = Column(Float)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    client = relationship("Client")
    case = relationship("Case")
    payments = relationship(
        "Payment",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Invoice(id={self.id}, total_amount={self.total_amount}, status='{self.status}')>"

class Payment(Base):
    """Money applied against an invoice"""
    __tablename__ = "payments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    invoice_id = Column(UUID(as_uuid=True), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)

    amount = Column(Float, nullable=False)
    currency = Column(Enum(Currency, name="currency"), nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=False)
    method = Column(String(50))
    reference = Column(String(100))

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    invoice = relationship("Invoice", back_populates="payments")

    def __repr__(self):
        return f"<Payment(id={self.id}, invoice_id={self.invoice_id}, amount={self.amount})>"
