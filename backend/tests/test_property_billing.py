"""
Property-based tests for invoice reconciliation and billing summaries
"""

import asyncio
from datetime import datetime, timedelta, UTC
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from hypothesis import given, settings, strategies as st

import models  # noqa: F401
from models.billing import Invoice, Payment, InvoiceStatus, BillingModel, Currency
from schemas.billing import InvoiceCreate, PaymentCreate
from services.billing_service import BillingService, reconcile_invoice_status, summarize_invoices
from core.exceptions import NotFoundError

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)
PAST = NOW - timedelta(days=10)
FUTURE = NOW + timedelta(days=10)

amounts = st.floats(min_value=0.01, max_value=1_000_000, allow_nan=False, allow_infinity=False)

def invoice_stub(total, payments, due_date=None):
    return SimpleNamespace(
        total_amount=total,
        due_date=due_date,
        payments=[SimpleNamespace(amount=amount) for amount in payments],
    )

class TestReconcileInvoiceStatus:
    """Status derivation after a payment"""

    def test_partial_payment_past_due_is_overdue(self):
        status, paid_at = reconcile_invoice_status(
            status=InvoiceStatus.SENT,
            paid_at=None,
            total_amount=1000,
            total_paid=400,
            due_date=PAST,
            payment_paid_at=NOW,
            now=NOW,
        )
        assert status == InvoiceStatus.OVERDUE
        assert paid_at is None

    def test_full_payment_marks_paid_with_payment_time(self):
        payment_time = NOW - timedelta(hours=3)
        status, paid_at = reconcile_invoice_status(
            status=InvoiceStatus.SENT,
            paid_at=None,
            total_amount=1000,
            total_paid=1000,
            due_date=PAST,
            payment_paid_at=payment_time,
            now=NOW,
        )
        assert status == InvoiceStatus.PAID
        assert paid_at == payment_time

    def test_partial_payment_before_due_date(self):
        status, _ = reconcile_invoice_status(
            status=InvoiceStatus.DRAFT,
            paid_at=None,
            total_amount=1000,
            total_paid=250,
            due_date=FUTURE,
            payment_paid_at=NOW,
            now=NOW,
        )
        assert status == InvoiceStatus.PARTIALLY_PAID

    def test_nothing_paid_keeps_status(self):
        status, _ = reconcile_invoice_status(
            status=InvoiceStatus.SENT,
            paid_at=None,
            total_amount=500,
            total_paid=0,
            due_date=None,
            payment_paid_at=NOW,
            now=NOW,
        )
        assert status == InvoiceStatus.SENT

    def test_naive_due_date_is_treated_as_utc(self):
        status, _ = reconcile_invoice_status(
            status=InvoiceStatus.SENT,
            paid_at=None,
            total_amount=100,
            total_paid=10,
            due_date=PAST.replace(tzinfo=None),
            payment_paid_at=NOW,
            now=NOW,
        )
        assert status == InvoiceStatus.OVERDUE

    @given(total=amounts, paid=st.floats(min_value=0, max_value=2_000_000, allow_nan=False), past_due=st.booleans())
    @settings(deadline=1000, max_examples=200)
    def test_status_property(self, total, paid, past_due):
        status, _ = reconcile_invoice_status(
            status=InvoiceStatus.SENT,
            paid_at=None,
            total_amount=total,
            total_paid=paid,
            due_date=PAST if past_due else FUTURE,
            payment_paid_at=NOW,
            now=NOW,
        )

        assert (status == InvoiceStatus.PAID) == (paid >= total)
        assert (status == InvoiceStatus.PARTIALLY_PAID) == (0 < paid < total and not past_due)
        assert (status == InvoiceStatus.OVERDUE) == (paid < total and past_due)

class TestSummarizeInvoices:
    """Billing summary arithmetic"""

    def test_summary_splits_outstanding_and_overdue(self):
        invoices = [
            invoice_stub(1000, [400], due_date=PAST),
            invoice_stub(500, [500], due_date=PAST),
            invoice_stub(300, [], due_date=FUTURE),
        ]

        summary = summarize_invoices(invoices, NOW)

        assert summary.total_invoiced == 1800
        assert summary.total_paid == 900
        assert summary.outstanding == 900
        assert summary.overdue == 600

    def test_overpayment_does_not_reduce_outstanding(self):
        summary = summarize_invoices([invoice_stub(100, [150]), invoice_stub(200, [])], NOW)
        assert summary.outstanding == 200
        assert summary.total_paid == 150

    @given(data=st.lists(
        st.tuples(
            st.integers(min_value=0, max_value=10_000),
            st.lists(st.integers(min_value=1, max_value=5_000), max_size=4),
            st.booleans(),
        ),
        max_size=10,
    ))
    @settings(deadline=1000, max_examples=100)
    def test_overdue_never_exceeds_outstanding(self, data):
        invoices = [invoice_stub(total, payments, PAST if late else None) for total, payments, late in data]
        summary = summarize_invoices(invoices, NOW)

        assert 0 <= summary.overdue <= summary.outstanding
        assert summary.total_invoiced == sum(total for total, _, _ in data)

class TestBillingService:
    """Billing service behavior with a mocked session"""

    def setup_method(self):
        self.mock_db = AsyncMock()
        self.mock_db.add = MagicMock()
        self.mock_db.flush = AsyncMock()
        self.mock_db.commit = AsyncMock()
        self.mock_db.rollback = AsyncMock()
        self.mock_db.refresh = AsyncMock()
        self.billing_service = BillingService(self.mock_db)

    def _invoice(self, due_date):
        return Invoice(
            id=uuid4(),
            client_id=uuid4(),
            status=InvoiceStatus.SENT,
            billing_model=BillingModel.FIXED,
            total_amount=1000.0,
            currency=Currency.SAR,
            due_date=due_date,
        )

    def _execute_returning(self, invoice, total_paid):
        invoice_result = MagicMock()
        invoice_result.scalar_one_or_none.return_value = invoice
        total_result = MagicMock()
        total_result.scalar_one.return_value = total_paid
        self.mock_db.execute = AsyncMock(side_effect=[invoice_result, total_result])

    def test_partial_payment_on_overdue_invoice(self):
        invoice = self._invoice(due_date=datetime.now(UTC) - timedelta(days=5))
        self._execute_returning(invoice, 400.0)
        payment_data = PaymentCreate(amount=400, currency="sar", paid_at=datetime.now(UTC))

        payment = asyncio.run(self.billing_service.record_payment(invoice.id, payment_data))

        assert isinstance(payment, Payment)
        assert payment.invoice_id == invoice.id
        assert payment.amount == 400
        assert invoice.status == InvoiceStatus.OVERDUE
        assert invoice.paid_at is None
        self.mock_db.flush.assert_awaited_once()
        self.mock_db.commit.assert_awaited_once()

    def test_full_payment_marks_invoice_paid(self):
        invoice = self._invoice(due_date=datetime.now(UTC) - timedelta(days=5))
        self._execute_returning(invoice, 1000.0)
        paid_at = datetime.now(UTC) - timedelta(hours=1)
        payment_data = PaymentCreate(amount=1000, currency=Currency.SAR, paid_at=paid_at)

        asyncio.run(self.billing_service.record_payment(invoice.id, payment_data))

        assert invoice.status == InvoiceStatus.PAID
        assert invoice.paid_at == paid_at

    def test_payment_on_unknown_invoice(self):
        missing = MagicMock()
        missing.scalar_one_or_none.return_value = None
        self.mock_db.execute = AsyncMock(return_value=missing)
        payment_data = PaymentCreate(amount=10, currency="USD", paid_at=NOW)

        with pytest.raises(NotFoundError):
            asyncio.run(self.billing_service.record_payment(uuid4(), payment_data))

        self.mock_db.add.assert_not_called()

    def test_create_invoice_requires_client(self):
        self.mock_db.get = AsyncMock(return_value=None)
        invoice_data = InvoiceCreate(client_id=uuid4(), billing_model="fixed", total_amount=100)

        with pytest.raises(NotFoundError) as exc_info:
            asyncio.run(self.billing_service.create_invoice(invoice_data))

        assert exc_info.value.message == "Client not found"
        self.mock_db.add.assert_not_called()

    def test_create_invoice_defaults(self):
        self.mock_db.get = AsyncMock(return_value=SimpleNamespace(id=uuid4()))
        invoice_data = InvoiceCreate(client_id=uuid4(), billing_model="HOURLY", total_amount=750, hours=5, hourly_rate=150)

        invoice = asyncio.run(self.billing_service.create_invoice(invoice_data))

        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.currency == Currency.SAR
        assert invoice.billing_model == BillingModel.HOURLY
        self.mock_db.commit.assert_awaited_once()
