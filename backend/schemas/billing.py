"""
Billing schemas for invoices, payments and summaries
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, Any
from datetime import datetime
from uuid import UUID

from models.billing import InvoiceStatus, BillingModel, Currency
from schemas.base import BaseEntity, uppercase_enum_fields

INVOICE_ENUM_FIELDS = ('status', 'billing_model', 'currency')

class InvoiceCreate(BaseModel):
    """Schema for creating an invoice"""
    client_id: UUID
    case_id: Optional[UUID] = None
    billing_model: BillingModel
    total_amount: float = Field(..., ge=0)
    currency: Currency = Currency.SAR
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: Optional[datetime] = None
    description: Optional[str] = None
    hours: Optional[float] = Field(None, ge=0)
    hourly_rate: Optional[float] = Field(None, ge=0)
    percentage: Optional[float] = Field(None, ge=0, le=100)

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, *INVOICE_ENUM_FIELDS)

class InvoiceUpdate(BaseModel):
    """Schema for updating an invoice"""
    client_id: UUID = None
    case_id: Optional[UUID] = None
    billing_model: BillingModel = None
    total_amount: float = Field(None, ge=0)
    currency: Currency = None
    status: InvoiceStatus = None
    due_date: Optional[datetime] = None
    description: Optional[str] = None
    hours: Optional[float] = Field(None, ge=0)
    hourly_rate: Optional[float] = Field(None, ge=0)
    percentage: Optional[float] = Field(None, ge=0, le=100)

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, *INVOICE_ENUM_FIELDS)

class InvoiceResponse(BaseEntity):
    """Schema for invoice responses"""
    client_id: UUID
    case_id: Optional[UUID] = None
    status: InvoiceStatus
    billing_model: BillingModel
    total_amount: float
    currency: Currency
    due_date: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    description: Optional[str] = None
    hours: Optional[float] = None
    hourly_rate: Optional[float] = None
    percentage: Optional[float] = None

class PaymentCreate(BaseModel):
    """Schema for recording a payment against an invoice"""
    amount: float = Field(..., gt=0)
    currency: Currency
    paid_at: datetime
    method: Optional[str] = Field(None, max_length=50)
    reference: Optional[str] = Field(None, max_length=100)

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'currency')

class PaymentResponse(BaseEntity):
    """Schema for payment responses"""
    invoice_id: UUID
    amount: float
    currency: Currency
    paid_at: datetime
    method: Optional[str] = None
    reference: Optional[str] = None

class BillingSummary(BaseModel):
    """Aggregate money position over a set of invoices"""
    total_invoiced: float = 0.0
    total_paid: float = 0.0
    outstanding: float = 0.0
    overdue: float = 0.0
