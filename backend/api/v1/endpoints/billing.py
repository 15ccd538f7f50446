"""
Billing endpoints for invoices and payments
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List, Optional
from uuid import UUID

from core.auth import get_current_user
from core.database import get_db
from models.billing import InvoiceStatus
from schemas.base import BaseResponse
from schemas.billing import (
    InvoiceCreate, InvoiceUpdate, InvoiceResponse, PaymentCreate, PaymentResponse, BillingSummary
)
from services.billing_service import BillingService

router = APIRouter()

async def get_billing_service(db: AsyncSession = Depends(get_db)) -> BillingService:
    """Dependency to get billing service instance"""
    return BillingService(db)

@router.get("/summary", response_model=BillingSummary)
async def get_billing_summary(
    current_user: Dict[str, Any] = Depends(get_current_user),
    billing_service: BillingService = Depends(get_billing_service)
):
    """Totals invoiced, paid, outstanding and overdue"""
    return await billing_service.get_summary()

@router.get("/invoices", response_model=List[InvoiceResponse])
async def list_invoices(
    client_id: Optional[UUID] = None,
    case_id: Optional[UUID] = None,
    invoice_status: Optional[InvoiceStatus] = Query(None, alias="status"),
    current_user: Dict[str, Any] = Depends(get_current_user),
    billing_service: BillingService = Depends(get_billing_service)
):
    return await billing_service.list_invoices(client_id=client_id, case_id=case_id, status=invoice_status)

@router.post("/invoices", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    billing_service: BillingService = Depends(get_billing_service)
):
    """
    Create an invoice

    - **client_id**: Billed client, must exist
    - **case_id**: Optional case, must exist when given
    - **billing_model**: HOURLY, FIXED or CONTINGENCY
    """
    return await billing_service.create_invoice(invoice_data)

@router.get("/invoices/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    billing_service: BillingService = Depends(get_billing_service)
):
    return await billing_service.get_invoice(invoice_id)

@router.patch("/invoices/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: UUID,
    invoice_data: InvoiceUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    billing_service: BillingService = Depends(get_billing_service)
):
    return await billing_service.update_invoice(invoice_id, invoice_data)

@router.delete("/invoices/{invoice_id}", response_model=BaseResponse)
async def delete_invoice(
    invoice_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    billing_service: BillingService = Depends(get_billing_service)
):
    await billing_service.delete_invoice(invoice_id)
    return BaseResponse(message="Invoice deleted successfully")

@router.get("/invoices/{invoice_id}/payments", response_model=List[PaymentResponse])
async def list_payments(
    invoice_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    billing_service: BillingService = Depends(get_billing_service)
):
    """Payments on an invoice, most recent first"""
    return await billing_service.list_payments(invoice_id)

@router.post("/invoices/{invoice_id}/payments", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def record_payment(
    invoice_id: UUID,
    payment_data: PaymentCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    billing_service: BillingService = Depends(get_billing_service)
):
    """Record a payment and update the invoice status"""
    return await billing_service.record_payment(invoice_id, payment_data)
