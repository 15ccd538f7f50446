"""
Reporting schemas
"""

from pydantic import BaseModel
from typing import Dict, List
from uuid import UUID

from schemas.billing import BillingSummary
from schemas.task import UserTaskStats

class CasesOverview(BaseModel):
    """Case counts"""
    total: int = 0
    by_status: Dict[str, int] = {}
    by_type: Dict[str, int] = {}
    by_stage: Dict[str, int] = {}

class ClientProfitability(BaseModel):
    """Money position for one client"""
    client_id: UUID
    client_name: str
    total_invoiced: float = 0.0
    total_paid: float = 0.0
    outstanding: float = 0.0

class CaseTypeRevenue(BaseModel):
    """Invoiced amount for one case type"""
    type: str
    total: float = 0.0

class DashboardReport(BaseModel):
    """All reports in one payload"""
    cases_overview: CasesOverview
    financial_overview: BillingSummary
    team_performance: List[UserTaskStats]
    client_profitability: List[ClientProfitability]
    top_case_types: List[CaseTypeRevenue]
