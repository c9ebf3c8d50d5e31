"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .index import ListingItem


class DocumentLoadResponse(BaseModel):
    """Response for a document load."""
    
    document_id: Optional[str] = Field(None, description="Identifier of the loaded document")
    page_count: int = Field(..., description="Number of pages indexed")
    total_entries: int = Field(..., description="Number of indexed name entries")
    listing: List[ListingItem] = Field(..., description="Listing items sorted by label")
    execution_time_ms: float = Field(..., description="Load time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class ErrorResponse(BaseModel):
    """Error response model."""
    
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""
    
    total_queries: int = Field(..., description="Total queries processed")
    average_response_time_ms: float = Field(..., description="Average response time")
    match_rate: float = Field(..., description="Share of queries that resolved to a page")
    documents_loaded: int = Field(..., description="Documents indexed since start")
    stale_builds_discarded: int = Field(..., description="Index builds superseded by a newer load")
    total_entries: int = Field(..., description="Entries in the current index")
    memory_usage_mb: float = Field(..., description="Memory usage in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
