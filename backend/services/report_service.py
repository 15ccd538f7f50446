"""
Read-only reporting over cases, billing and tasks
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Optional, List, Iterable, Tuple, Dict, Any
from datetime import datetime
import structlog

from models.billing import Invoice, Payment
from models.case import Case, CaseType
from models.client import Client
from schemas.billing import BillingSummary
from schemas.report import CasesOverview, ClientProfitability, CaseTypeRevenue, DashboardReport
from schemas.task import UserTaskStats
from services.billing_service import BillingService
from services.task_service import TaskService

logger = structlog.get_logger()

def _enum_key(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)

def count_cases(rows: Iterable[Tuple[Any, Any, Any]]) -> CasesOverview:
    """Tally (status, type, stage) rows"""
    overview = CasesOverview()
    for status, case_type, stage in rows:
        overview.total += 1
        for bucket, value in ((overview.by_status, status), (overview.by_type, case_type), (overview.by_stage, stage)):
            key = _enum_key(value)
            bucket[key] = bucket.get(key, 0) + 1
    return overview

def rank_case_types(rows: Iterable[Tuple[Optional[Any], float]]) -> List[CaseTypeRevenue]:
    """Merge (case type, total) rows, folding unlinked invoices into OTHER, largest first"""
    totals: Dict[str, float] = {}
    for case_type, total in rows:
        key = _enum_key(case_type) if case_type is not None else CaseType.OTHER.value
        totals[key] = totals.get(key, 0.0) + float(total or 0)

    ranked = [CaseTypeRevenue(type=key, total=total) for key, total in totals.items()]
    ranked.sort(key=lambda item: item.total, reverse=True)
    return ranked

class ReportService:
    """Service for aggregate reports"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def cases_overview(self) -> CasesOverview:
        result = await self.db.execute(select(Case.status, Case.type, Case.stage))
        return count_cases(result.all())

    async def financial_overview(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> BillingSummary:
        return await BillingService(self.db).get_summary(created_from=date_from, created_to=date_to)

    async def team_performance(self) -> List[UserTaskStats]:
        return await TaskService(self.db).get_user_stats()

    async def client_profitability(self) -> List[ClientProfitability]:
        """Invoiced, paid and outstanding amounts for every client"""
        invoiced_result = await self.db.execute(
            select(Client.id, Client.name, func.coalesce(func.sum(Invoice.total_amount), 0.0))
            .select_from(Client)
            .outerjoin(Invoice, Invoice.client_id == Client.id)
            .group_by(Client.id, Client.name)
            .order_by(Client.name)
        )
        paid_result = await self.db.execute(
            select(Invoice.client_id, func.coalesce(func.sum(Payment.amount), 0.0))
            .select_from(Payment)
            .join(Invoice, Payment.invoice_id == Invoice.id)
            .group_by(Invoice.client_id)
        )
        paid_by_client = {client_id: float(total) for client_id, total in paid_result.all()}

        report = []
        for client_id, name, invoiced in invoiced_result.all():
            invoiced = float(invoiced)
            paid = paid_by_client.get(client_id, 0.0)
            report.append(ClientProfitability(
                client_id=client_id,
                client_name=name,
                total_invoiced=invoiced,
                total_paid=paid,
                outstanding=invoiced - paid,
            ))
        return report

    async def top_case_types(self) -> List[CaseTypeRevenue]:
        result = await self.db.execute(
            select(Case.type, func.sum(Invoice.total_amount))
            .select_from(Invoice)
            .outerjoin(Case, Invoice.case_id == Case.id)
            .group_by(Case.type)
        )
        return rank_case_types(result.all())

    async def dashboard(self) -> DashboardReport:
        """Every report in one payload; queries run sequentially on one session"""
        report = DashboardReport(
            cases_overview=await self.cases_overview(),
            financial_overview=await self.financial_overview(),
            team_performance=await self.team_performance(),
            client_profitability=await self.client_profitability(),
            top_case_types=await self.top_case_types(),
        )
        logger.info("Dashboard report built", total_cases=report.cases_overview.total)
        return report
