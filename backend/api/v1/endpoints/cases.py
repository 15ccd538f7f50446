"""
Case management endpoints with full CRUD operations
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List
from uuid import UUID

from core.auth import get_current_user
from core.database import get_db
from schemas.base import BaseResponse
from schemas.case import CaseCreate, CaseUpdate, CaseResponse, CaseSessionCreate, CaseSessionResponse
from services.case_service import CaseService

router = APIRouter()

async def get_case_service(db: AsyncSession = Depends(get_db)) -> CaseService:
    """Dependency to get case service instance"""
    return CaseService(db)

@router.get("", response_model=List[CaseResponse])
async def list_cases(
    current_user: Dict[str, Any] = Depends(get_current_user),
    case_service: CaseService = Depends(get_case_service)
):
    """List cases with their client and sessions"""
    return await case_service.list_cases()

@router.post("", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
async def create_case(
    case_data: CaseCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    case_service: CaseService = Depends(get_case_service)
):
    """
    Create a new case

    - **case_number**: Court or internal case identifier
    - **client_id**: Owning client, must exist
    - **type**: CRIMINAL, COMMERCIAL, PERSONAL_STATUS, ADMINISTRATIVE, LABOR or OTHER
    - **stage**: PRE_TRIAL, FIRST_INSTANCE, APPEAL, SUPREME or EXECUTION
    - **responsible_lawyer_id**: Optional; ignored when unknown
    """
    return await case_service.create_case(case_data)

@router.get("/{case_id}", response_model=CaseResponse)
async def get_case(
    case_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    case_service: CaseService = Depends(get_case_service)
):
    return await case_service.get_case(case_id)

@router.patch("/{case_id}", response_model=CaseResponse)
async def update_case(
    case_id: UUID,
    case_data: CaseUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    case_service: CaseService = Depends(get_case_service)
):
    """Partially update a case; omitted fields are kept"""
    return await case_service.update_case(case_id, case_data)

@router.delete("/{case_id}", response_model=BaseResponse)
async def delete_case(
    case_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    case_service: CaseService = Depends(get_case_service)
):
    """Delete a case and its sessions"""
    await case_service.delete_case(case_id)
    return BaseResponse(message="Case deleted successfully")

@router.get("/{case_id}/sessions", response_model=List[CaseSessionResponse])
async def list_case_sessions(
    case_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    case_service: CaseService = Depends(get_case_service)
):
    return await case_service.list_sessions(case_id)

@router.post("/{case_id}/sessions", response_model=CaseSessionResponse, status_code=status.HTTP_201_CREATED)
async def add_case_session(
    case_id: UUID,
    session_data: CaseSessionCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    case_service: CaseService = Depends(get_case_service)
):
    """Schedule a court session for a case"""
    return await case_service.add_session(case_id, session_data)
