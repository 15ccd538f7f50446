"""
Billing service: invoices, payment reconciliation and money summaries
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, and_
from sqlalchemy.orm import selectinload
from typing import Optional, List, Iterable, Tuple
from uuid import UUID
from datetime import datetime, UTC
import structlog

from models.billing import Invoice, Payment, InvoiceStatus
from models.case import Case
from models.client import Client
from schemas.billing import InvoiceCreate, InvoiceUpdate, PaymentCreate, BillingSummary
from schemas.base import as_utc
from core.exceptions import NotFoundError

logger = structlog.get_logger()

def is_past_due(due_date: Optional[datetime], now: datetime) -> bool:
    return due_date is not None and as_utc(due_date) < as_utc(now)

def reconcile_invoice_status(
    status: InvoiceStatus,
    paid_at: Optional[datetime],
    total_amount: float,
    total_paid: float,
    due_date: Optional[datetime],
    payment_paid_at: datetime,
    now: datetime,
) -> Tuple[InvoiceStatus, Optional[datetime]]:
    """
    Derive an invoice's status after a payment

    Args:
        status: Current invoice status
        paid_at: Current invoice paid_at
        total_amount: Invoice total
        total_paid: Sum of all payments, including the new one
        due_date: Invoice due date, if any
        payment_paid_at: When the new payment was made
        now: Reference time for the overdue check

    Returns:
        (status, paid_at) to store on the invoice
    """
    if total_paid >= total_amount:
        status = InvoiceStatus.PAID
        paid_at = payment_paid_at
    elif total_paid > 0:
        status = InvoiceStatus.PARTIALLY_PAID

    # Overdue wins over a partial payment
    if status != InvoiceStatus.PAID and is_past_due(due_date, now):
        status = InvoiceStatus.OVERDUE

    return status, paid_at

def summarize_invoices(invoices: Iterable[Invoice], now: datetime) -> BillingSummary:
    """Totals over invoices with their payments loaded"""
    summary = BillingSummary()

    for invoice in invoices:
        paid = sum(payment.amount for payment in invoice.payments)
        summary.total_invoiced += invoice.total_amount
        summary.total_paid += paid

        remaining = invoice.total_amount - paid
        if remaining > 0:
            summary.outstanding += remaining
            if is_past_due(invoice.due_date, now):
                summary.overdue += remaining

    return summary

class BillingService:
    """Service for invoice and payment operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_client(self, client_id: UUID) -> None:
        if await self.db.get(Client, client_id) is None:
            raise NotFoundError("Client not found", error_code="CLIENT_NOT_FOUND")

    async def _require_case(self, case_id: UUID) -> None:
        if await self.db.get(Case, case_id) is None:
            raise NotFoundError("Case not found", error_code="CASE_NOT_FOUND")

    async def list_invoices(
        self,
        client_id: Optional[UUID] = None,
        case_id: Optional[UUID] = None,
        status: Optional[InvoiceStatus] = None,
    ) -> List[Invoice]:
        conditions = []
        if client_id:
            conditions.append(Invoice.client_id == client_id)
        if case_id:
            conditions.append(Invoice.case_id == case_id)
        if status:
            conditions.append(Invoice.status == status)

        query = select(Invoice).order_by(Invoice.created_at.desc())
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_invoice(self, invoice_id: UUID) -> Invoice:
        invoice = await self.db.get(Invoice, invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice not found", error_code="INVOICE_NOT_FOUND")
        return invoice

    async def create_invoice(self, invoice_data: InvoiceCreate) -> Invoice:
        """
        Create an invoice

        Raises:
            NotFoundError: If the client, or a given case, does not exist
        """
        await self._require_client(invoice_data.client_id)
        if invoice_data.case_id is not None:
            await self._require_case(invoice_data.case_id)

        invoice = Invoice(**invoice_data.model_dump())
        self.db.add(invoice)
        await self.db.commit()
        await self.db.refresh(invoice)

        logger.info(
            "Invoice created",
            invoice_id=str(invoice.id),
            client_id=str(invoice.client_id),
            total_amount=invoice.total_amount
        )
        return invoice

    async def update_invoice(self, invoice_id: UUID, invoice_data: InvoiceUpdate) -> Invoice:
        invoice = await self.get_invoice(invoice_id)
        update_data = invoice_data.model_dump(exclude_unset=True)

        if "client_id" in update_data:
            await self._require_client(update_data["client_id"])
        if update_data.get("case_id") is not None:
            await self._require_case(update_data["case_id"])

        for field, value in update_data.items():
            setattr(invoice, field, value)

        await self.db.commit()
        await self.db.refresh(invoice)

        logger.info("Invoice updated", invoice_id=str(invoice_id), fields=sorted(update_data))
        return invoice

    async def delete_invoice(self, invoice_id: UUID) -> None:
        """Delete an invoice together with its payments"""
        await self.db.execute(delete(Invoice).where(Invoice.id == invoice_id))
        await self.db.commit()
        logger.info("Invoice deleted", invoice_id=str(invoice_id))

    async def list_payments(self, invoice_id: UUID) -> List[Payment]:
        await self.get_invoice(invoice_id)
        result = await self.db.execute(
            select(Payment)
            .where(Payment.invoice_id == invoice_id)
            .order_by(Payment.paid_at.desc())
        )
        return list(result.scalars().all())

    async def record_payment(self, invoice_id: UUID, payment_data: PaymentCreate) -> Payment:
        """
        Record a payment and reconcile the invoice status

        The invoice row is locked for the duration of the transaction so
        concurrent payments see each other's amounts.
        """
        result = await self.db.execute(
            select(Invoice).where(Invoice.id == invoice_id).with_for_update()
        )
        invoice = result.scalar_one_or_none()
        if invoice is None:
            raise NotFoundError("Invoice not found", error_code="INVOICE_NOT_FOUND")

        try:
            payment = Payment(invoice_id=invoice.id, **payment_data.model_dump())
            self.db.add(payment)
            await self.db.flush()

            total_result = await self.db.execute(
                select(func.coalesce(func.sum(Payment.amount), 0.0)).where(Payment.invoice_id == invoice.id)
            )
            total_paid = float(total_result.scalar_one())

            invoice.status, invoice.paid_at = reconcile_invoice_status(
                status=invoice.status,
                paid_at=invoice.paid_at,
                total_amount=invoice.total_amount,
                total_paid=total_paid,
                due_date=invoice.due_date,
                payment_paid_at=payment.paid_at,
                now=datetime.now(UTC),
            )

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to record payment", invoice_id=str(invoice_id), error=str(e))
            raise

        await self.db.refresh(payment)

        logger.info(
            "Payment recorded",
            invoice_id=str(invoice_id),
            payment_id=str(payment.id),
            amount=payment.amount,
            total_paid=total_paid,
            status=invoice.status.value
        )
        return payment

    async def get_summary(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> BillingSummary:
        """Money position over all invoices, optionally bounded by creation time"""
        query = select(Invoice).options(selectinload(Invoice.payments))
        if created_from:
            query = query.where(Invoice.created_at >= created_from)
        if created_to:
            query = query.where(Invoice.created_at <= created_to)

        result = await self.db.execute(query)
        return summarize_invoices(result.scalars().all(), datetime.now(UTC))
