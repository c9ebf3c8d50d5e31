"""Data models for the page name finder."""

from .index import Entry, IndexBuildResult, ListingItem, SearchMatch
from .response import (
    DocumentLoadResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)
from .request import PagesTextRequest, SearchRequest

__all__ = [
    "Entry",
    "IndexBuildResult",
    "ListingItem",
    "SearchMatch",
    "DocumentLoadResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "PagesTextRequest",
    "SearchRequest",
]
