"""
Reporting endpoints
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List, Optional
from datetime import datetime

from core.auth import get_current_user
from core.database import get_db
from schemas.billing import BillingSummary
from schemas.report import CasesOverview, ClientProfitability, CaseTypeRevenue, DashboardReport
from schemas.task import UserTaskStats
from services.report_service import ReportService

router = APIRouter()

async def get_report_service(db: AsyncSession = Depends(get_db)) -> ReportService:
    """Dependency to get report service instance"""
    return ReportService(db)

@router.get("/cases-overview", response_model=CasesOverview)
async def cases_overview(
    current_user: Dict[str, Any] = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service)
):
    """Case counts by status, type and stage"""
    return await report_service.cases_overview()

@router.get("/financial-overview", response_model=BillingSummary)
async def financial_overview(
    date_from: Optional[datetime] = Query(None, alias="from"),
    date_to: Optional[datetime] = Query(None, alias="to"),
    current_user: Dict[str, Any] = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service)
):
    """Billing summary over invoices created within the optional bounds"""
    return await report_service.financial_overview(date_from, date_to)

@router.get("/team-performance", response_model=List[UserTaskStats])
async def team_performance(
    current_user: Dict[str, Any] = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service)
):
    return await report_service.team_performance()

@router.get("/client-profitability", response_model=List[ClientProfitability])
async def client_profitability(
    current_user: Dict[str, Any] = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service)
):
    return await report_service.client_profitability()

@router.get("/top-case-types", response_model=List[CaseTypeRevenue])
async def top_case_types(
    current_user: Dict[str, Any] = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service)
):
    """Invoice totals by case type, largest first"""
    return await report_service.top_case_types()

@router.get("/dashboard", response_model=DashboardReport)
async def dashboard(
    current_user: Dict[str, Any] = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service)
):
    return await report_service.dashboard()
