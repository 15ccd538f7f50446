"""
Document metadata schemas
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, Any, List
from uuid import UUID

from models.document import DocumentType
from schemas.base import BaseEntity, uppercase_enum_fields

def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return tags
    return [tag.strip() for tag in tags if tag and tag.strip()]

class DocumentCreate(BaseModel):
    """Schema for registering a document"""
    title: str = Field(..., min_length=1, max_length=255)
    type: DocumentType = DocumentType.OTHER
    file_url: str = Field(..., min_length=1, max_length=1000, description="Storage URL or path of the file")
    original_file_name: Optional[str] = Field(None, max_length=255)
    mime_type: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    text_content: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'type')

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)

class DocumentUpdate(BaseModel):
    """Schema for updating a document; tags are replaced when given"""
    title: str = Field(None, min_length=1, max_length=255)
    type: DocumentType = None
    file_url: str = Field(None, min_length=1, max_length=1000)
    original_file_name: Optional[str] = Field(None, max_length=255)
    mime_type: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    text_content: Optional[str] = None
    tags: List[str] = None
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None

    @model_validator(mode='before')
    @classmethod
    def validate_enums_case_insensitive(cls, data: Any) -> Any:
        return uppercase_enum_fields(data, 'type')

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)

class DocumentResponse(BaseEntity):
    """Schema for document responses"""
    title: str
    type: DocumentType
    file_url: str
    original_file_name: Optional[str] = None
    mime_type: Optional[str] = None
    description: Optional[str] = None
    text_content: Optional[str] = None
    tags: List[str] = []
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None
    uploaded_by_id: Optional[UUID] = None
