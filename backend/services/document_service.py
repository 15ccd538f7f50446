"""
Document metadata service
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, or_, and_
from typing import Optional, List
from uuid import UUID
import structlog

from models.document import Document
from schemas.document import DocumentCreate, DocumentUpdate
from core.exceptions import NotFoundError

logger = structlog.get_logger()

def contains_pattern(term: str) -> str:
    """ILIKE pattern matching ``term`` literally anywhere; escape character is a backslash"""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"

class DocumentService:
    """Service for document records; file bytes are stored elsewhere"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_documents(
        self,
        client_id: Optional[UUID] = None,
        case_id: Optional[UUID] = None,
        search: Optional[str] = None,
    ) -> List[Document]:
        """
        List documents, newest first

        A non-empty search term matches title, description or text content
        case-insensitively and takes precedence over the id filters.
        """
        query = select(Document).order_by(Document.created_at.desc())

        if search and search.strip():
            pattern = contains_pattern(search.strip())
            query = query.where(or_(
                Document.title.ilike(pattern, escape="\\"),
                Document.description.ilike(pattern, escape="\\"),
                Document.text_content.ilike(pattern, escape="\\"),
            ))
        else:
            conditions = []
            if client_id:
                conditions.append(Document.client_id == client_id)
            if case_id:
                conditions.append(Document.case_id == case_id)
            if conditions:
                query = query.where(and_(*conditions))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_document(self, document_id: UUID) -> Document:
        document = await self.db.get(Document, document_id)
        if document is None:
            raise NotFoundError("Document not found", error_code="DOCUMENT_NOT_FOUND")
        return document

    async def create_document(self, document_data: DocumentCreate, uploaded_by_id: Optional[UUID] = None) -> Document:
        document = Document(**document_data.model_dump(), uploaded_by_id=uploaded_by_id)
        self.db.add(document)
        await self.db.commit()
        await self.db.refresh(document)

        logger.info("Document created", document_id=str(document.id), type=document.type.value)
        return document

    async def update_document(self, document_id: UUID, document_data: DocumentUpdate) -> Document:
        document = await self.get_document(document_id)

        for field, value in document_data.model_dump(exclude_unset=True).items():
            setattr(document, field, value)

        await self.db.commit()
        await self.db.refresh(document)

        logger.info("Document updated", document_id=str(document_id))
        return document

    async def delete_document(self, document_id: UUID) -> None:
        await self.db.execute(delete(Document).where(Document.id == document_id))
        await self.db.commit()
        logger.info("Document deleted", document_id=str(document_id))
