"""
AI assistant endpoints (deterministic stubs)
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any

from core.auth import get_current_user
from core.config import settings
from core.database import get_db
from schemas.ai import (
    SummarizeTextRequest, SummarizeDocumentRequest, SummaryResponse,
    CaseMemoRequest, CaseMemoResponse, ClientSentimentRequest, ClientSentimentResponse
)
from services.ai_service import AIService, summarize_text, generate_case_memo, analyze_client_sentiment

def require_ai_enabled():
    """Reject AI calls when the feature is switched off"""
    if not settings.ENABLE_AI_FEATURES:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI features are disabled"
        )

router = APIRouter(dependencies=[Depends(require_ai_enabled)])

async def get_ai_service(db: AsyncSession = Depends(get_db)) -> AIService:
    """Dependency to get AI service instance"""
    return AIService(db)

@router.post("/summarize-text", response_model=SummaryResponse)
async def summarize_text_endpoint(
    request: SummarizeTextRequest,
    current_user: Dict[str, Any] = Depends(get_current_user)
):
    return SummaryResponse(summary=summarize_text(request.text))

@router.post("/summarize-document", response_model=SummaryResponse)
async def summarize_document(
    request: SummarizeDocumentRequest,
    current_user: Dict[str, Any] = Depends(get_current_user),
    ai_service: AIService = Depends(get_ai_service)
):
    """Summarize a stored document's text content"""
    return await ai_service.summarize_document(request.document_id)

@router.post("/generate-case-memo", response_model=CaseMemoResponse)
async def generate_case_memo_endpoint(
    request: CaseMemoRequest,
    current_user: Dict[str, Any] = Depends(get_current_user)
):
    """Draft memo with facts, proposed defense and potential requests"""
    return CaseMemoResponse(sections=generate_case_memo(request.case_summary))

@router.post("/analyze-client-sentiment", response_model=ClientSentimentResponse)
async def analyze_client_sentiment_endpoint(
    request: ClientSentimentRequest,
    current_user: Dict[str, Any] = Depends(get_current_user)
):
    return analyze_client_sentiment(request.interactions)
