"""
Client management endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List
from uuid import UUID

from core.auth import get_current_user
from core.database import get_db
from schemas.base import BaseResponse
from schemas.client import ClientCreate, ClientUpdate, ClientResponse
from services.client_service import ClientService

router = APIRouter()

async def get_client_service(db: AsyncSession = Depends(get_db)) -> ClientService:
    """Dependency to get client service instance"""
    return ClientService(db)

@router.get("", response_model=List[ClientResponse])
async def list_clients(
    current_user: Dict[str, Any] = Depends(get_current_user),
    client_service: ClientService = Depends(get_client_service)
):
    """List clients, newest first"""
    return await client_service.list_clients()

@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    client_service: ClientService = Depends(get_client_service)
):
    """
    Create a client

    - **name**: Person or organisation name
    - **type**: INDIVIDUAL, COMPANY or GOVERNMENT
    """
    return await client_service.create_client(client_data)

@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    client_service: ClientService = Depends(get_client_service)
):
    return await client_service.get_client(client_id)

@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    client_data: ClientUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    client_service: ClientService = Depends(get_client_service)
):
    return await client_service.update_client(client_id, client_data)

@router.delete("/{client_id}", response_model=BaseResponse)
async def delete_client(
    client_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    client_service: ClientService = Depends(get_client_service)
):
    """Delete a client that no longer owns cases or invoices"""
    await client_service.delete_client(client_id)
    return BaseResponse(message="Client deleted successfully")
