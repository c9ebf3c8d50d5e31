"""Global search engine instance to avoid circular imports."""

from .core.engine import DocumentSearchEngine
from .config import get_settings

# Global search engine instance
settings = get_settings()
search_engine = DocumentSearchEngine(
    marker=settings.name_marker,
    max_matches=settings.max_matches
)
