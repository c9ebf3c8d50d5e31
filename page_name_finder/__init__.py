"""
Page Name Finder - indexing and fuzzy search of named records in multi-page documents.

This package scans the text of each page for "Name:" records (for example
well/unit names such as "HILL CREEK UNIT 10-28F"), builds an ordered index of
them and resolves free-text queries to the best-matching page, cycling
through the ranked matches when the same query is submitted again.
"""

__version__ = "1.0.0"

from .core.engine import DocumentSearchEngine
from .models.index import Entry, IndexBuildResult, ListingItem, SearchMatch

__all__ = [
    "DocumentSearchEngine",
    "Entry",
    "IndexBuildResult",
    "ListingItem",
    "SearchMatch",
]
