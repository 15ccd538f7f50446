"""
Placeholder AI helpers

No model is called; each helper returns a deterministic result with the
shape a real integration would produce.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List
from uuid import UUID
import structlog

from models.document import Document
from core.config import settings

logger = structlog.get_logger()

DEFENSE_DRAFT = (
    "Draft defense based on the case summary. "
    "Review and adapt it to the facts before use."
)
REQUESTS_DRAFT = "Set the final requests according to the case type and the client's objective."
SENTIMENT_NOTES = "Approximate result from a stub; connect a model for real sentiment analysis."

def summarize_text(text: str, max_chars: int = None) -> str:
    """Trim and truncate text to ``max_chars`` characters, marking cuts with '...'"""
    if max_chars is None:
        max_chars = settings.AI_SUMMARY_MAX_CHARS

    trimmed = (text or "").strip()
    if len(trimmed) <= max_chars:
        return trimmed
    return trimmed[:max_chars] + "..."

def generate_case_memo(case_summary: str) -> List[Dict[str, str]]:
    return [
        {"title": "Summary of facts", "body": case_summary or ""},
        {"title": "Proposed defense", "body": DEFENSE_DRAFT},
        {"title": "Potential requests", "body": REQUESTS_DRAFT},
    ]

def analyze_client_sentiment(interactions: List[Any]) -> Dict[str, Any]:
    return {"score": 0.5, "label": "NEUTRAL", "notes": SENTIMENT_NOTES}

class AIService:
    """Service wrapping the AI helpers that need data access"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def summarize_document(self, document_id: UUID) -> Dict[str, Any]:
        """Summarize a document's extracted text; empty when there is none"""
        document = await self.db.get(Document, document_id)
        if document is None or not document.text_content:
            logger.info("No text to summarize", document_id=str(document_id))
            return {"summary": "", "document_id": document_id}

        return {"summary": summarize_text(document.text_content), "document_id": document_id}
