"""Request models for API endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class SearchRequest(BaseModel):
    """Request model for search queries."""
    
    query: str = Field(..., min_length=1, description="Search query")

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Reject blank queries."""
        if not v or not v.strip():
            raise ValueError("Query cannot be empty")
        return v


class PagesTextRequest(BaseModel):
    """Request model for loading a document from already-extracted page text."""
    
    document_id: Optional[str] = Field(None, max_length=255, description="Identifier of the document")
    pages: List[str] = Field(..., description="One text block per page, in page order starting at page 1")
