"""Core indexing and search functionality."""

from .engine import DocumentSearchEngine
from .indexer import IndexBuilder, NameIndexer, build_index, sort_listing_items
from .keys import extract_number_key, tokens_key_from_name
from .normalizer import normalize_words
from .scorer import rank_entries, score_entry
from .session import SearchSession
from .truncation import (
    DEFAULT_TRUNCATION_RULES,
    PatternTruncation,
    SubstringTruncation,
    TruncationRule,
)

__all__ = [
    "DocumentSearchEngine",
    "IndexBuilder",
    "NameIndexer",
    "build_index",
    "sort_listing_items",
    "extract_number_key",
    "tokens_key_from_name",
    "normalize_words",
    "rank_entries",
    "score_entry",
    "SearchSession",
    "DEFAULT_TRUNCATION_RULES",
    "PatternTruncation",
    "SubstringTruncation",
    "TruncationRule",
]
