"""API endpoints for the page name finder."""

from .documents import router as documents_router
from .search import router as search_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "documents_router",
    "search_router",
    "health_router",
    "metrics_router",
]
