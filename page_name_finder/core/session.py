"""Search session: cycles through the ranked matches of a repeated query."""

from typing import List, Optional, Sequence

import structlog

from ..models.index import Entry, SearchMatch
from .normalizer import normalize_words
from .scorer import DEFAULT_MAX_MATCHES, rank_entries

logger = structlog.get_logger(__name__)


class SearchSession:
    """
    Holds the cycling state of one document's searches.
    
    A new normalized query ranks the index and starts at the best match;
    resubmitting the same normalized query advances to the next match,
    wrapping around at the end of the candidate list.
    """
    
    def __init__(self, max_matches: int = DEFAULT_MAX_MATCHES) -> None:
        self.max_matches = max_matches
        self.last_query_signature: Optional[str] = None
        self.last_matches: List[Entry] = []
        self.last_scores: List[int] = []
        self.last_match_index = 0
    
    @property
    def is_active(self) -> bool:
        """True once a query has produced a candidate list."""
        return self.last_query_signature is not None and bool(self.last_matches)
    
    def reset(self) -> None:
        """Return to the idle state."""
        self.last_query_signature = None
        self.last_matches = []
        self.last_scores = []
        self.last_match_index = 0
    
    def search(self, raw_query: str, entries: Sequence[Entry]) -> Optional[SearchMatch]:
        """
        Resolve a query against the index.
        
        Args:
            raw_query: Query as typed by the user
            entries: Current index, in insertion order
            
        Returns:
            SearchMatch for the current cursor, or None for no match
            (empty index, blank query, or no candidates)
        """
        if not entries or not raw_query or not raw_query.strip():
            return None
        
        signature = normalize_words(raw_query)
        if signature != self.last_query_signature:
            ranked = rank_entries(signature, entries, self.max_matches)
            self.last_matches = [entry for entry, _ in ranked]
            self.last_scores = [score for _, score in ranked]
            self.last_match_index = 0
            self.last_query_signature = signature
        elif self.last_matches:
            self.last_match_index = (self.last_match_index + 1) % len(self.last_matches)
        
        if not self.last_matches:
            logger.info("search_no_match", query=signature)
            return None
        
        entry = self.last_matches[self.last_match_index]
        logger.debug(
            "search_resolved",
            query=signature,
            page_number=entry.page_number,
            match_index=self.last_match_index,
            match_count=len(self.last_matches)
        )
        
        return SearchMatch(
            page_number=entry.page_number,
            entry=entry,
            match_index=self.last_match_index,
            match_count=len(self.last_matches),
            score=self.last_scores[self.last_match_index],
        )
