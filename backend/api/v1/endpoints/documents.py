"""
Document metadata endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List, Optional
from uuid import UUID

from core.auth import get_current_user
from core.database import get_db
from schemas.base import BaseResponse
from schemas.document import DocumentCreate, DocumentUpdate, DocumentResponse
from services.document_service import DocumentService

router = APIRouter()

async def get_document_service(db: AsyncSession = Depends(get_db)) -> DocumentService:
    """Dependency to get document service instance"""
    return DocumentService(db)

@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    client_id: Optional[UUID] = None,
    case_id: Optional[UUID] = None,
    search: Optional[str] = None,
    current_user: Dict[str, Any] = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """
    List documents, newest first

    - **search**: Case-insensitive match on title, description or text; overrides the id filters
    """
    return await document_service.list_documents(client_id=client_id, case_id=case_id, search=search)

@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Register a document stored at file_url"""
    return await document_service.create_document(document_data, uploaded_by_id=UUID(current_user["id"]))

@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    return await document_service.get_document(document_id)

@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: UUID,
    document_data: DocumentUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    return await document_service.update_document(document_id, document_data)

@router.delete("/{document_id}", response_model=BaseResponse)
async def delete_document(
    document_id: UUID,
    current_user: Dict[str, Any] = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    await document_service.delete_document(document_id)
    return BaseResponse(message="Document deleted successfully")
