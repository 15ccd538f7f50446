"""
AI helper request and response schemas
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any
from uuid import UUID

class SummarizeTextRequest(BaseModel):
    text: str = ""

class SummarizeDocumentRequest(BaseModel):
    document_id: UUID

class SummaryResponse(BaseModel):
    summary: str
    document_id: Optional[UUID] = None

class CaseMemoRequest(BaseModel):
    case_summary: str = Field(..., description="Free-text description of the case facts")

class MemoSection(BaseModel):
    title: str
    body: str

class CaseMemoResponse(BaseModel):
    sections: List[MemoSection]

class ClientSentimentRequest(BaseModel):
    interactions: List[Any] = Field(default_factory=list)

class ClientSentimentResponse(BaseModel):
    score: float
    label: str
    notes: str
