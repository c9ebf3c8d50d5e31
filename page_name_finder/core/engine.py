"""Per-document search engine owning the entry index and the search session."""

import threading
import time
from contextlib import aclosing
from typing import AsyncIterable, Dict, Iterable, List, Optional, Sequence

import structlog

from ..models.index import Entry, IndexBuildResult, ListingItem, SearchMatch
from .extraction import extract_pages_text, iter_pages_text
from .indexer import DEFAULT_NAME_MARKER, IndexBuilder, NameIndexer, sort_listing_items
from .scorer import DEFAULT_MAX_MATCHES
from .session import SearchSession
from .truncation import DEFAULT_TRUNCATION_RULES, TruncationRule

logger = structlog.get_logger(__name__)


class DocumentSearchEngine:
    """
    Search engine for the currently loaded document.
    
    Every load starts a new generation: the previous index and search session
    are dropped immediately, and a build only commits if no newer load has
    started in the meantime. Searches and commits are serialized by a lock so
    the session's single cursor is never advanced concurrently.
    ``loading`` stays true from ``begin_load`` until the current build commits
    or fails.
    """
    
    def __init__(
        self,
        marker: str = DEFAULT_NAME_MARKER,
        rules: Sequence[TruncationRule] = DEFAULT_TRUNCATION_RULES,
        max_matches: int = DEFAULT_MAX_MATCHES
    ) -> None:
        """
        Initialize the engine.
        
        Args:
            marker: Literal text introducing a record name
            rules: Truncation rules applied after the marker
            max_matches: Maximum number of candidates kept per query
        """
        self.indexer = NameIndexer(marker, rules)
        self.session = SearchSession(max_matches)
        self.entries: List[Entry] = []
        self.listing_events: List[ListingItem] = []
        self.document_id: Optional[str] = None
        self.page_count = 0
        self.generation = 0
        self.loading = False
        self._lock = threading.Lock()
        self._stats = self._empty_stats()
    
    @staticmethod
    def _empty_stats() -> Dict[str, float]:
        return {
            "documents_loaded": 0,
            "stale_builds_discarded": 0,
            "total_queries": 0,
            "matches": 0,
            "no_matches": 0,
            "total_execution_time": 0.0,
        }
    
    def begin_load(self, document_id: Optional[str] = None) -> int:
        """
        Start loading a new document and return its generation.
        
        The current index and search session are discarded right away, so
        searches issued while the new index is being built report no match.
        """
        with self._lock:
            self.generation += 1
            self.loading = True
            self.entries = []
            self.listing_events = []
            self.page_count = 0
            self.document_id = document_id
            self.session.reset()
            logger.debug("document_load_started", document_id=document_id, generation=self.generation)
            return self.generation
    
    def _commit(self, generation: int, builder: IndexBuilder) -> Optional[IndexBuildResult]:
        with self._lock:
            if generation != self.generation:
                self._stats["stale_builds_discarded"] += 1
                logger.info(
                    "stale_index_build_discarded",
                    generation=generation,
                    current_generation=self.generation
                )
                return None
            
            result = builder.result()
            self.entries = result.entries
            self.listing_events = result.listing_events
            self.page_count = builder.page_count
            self.loading = False
            self.session.reset()
            self._stats["documents_loaded"] += 1
        
        logger.info(
            "index_built",
            document_id=self.document_id,
            generation=generation,
            page_count=builder.page_count,
            total_entries=len(result.entries)
        )
        return result
    
    def _abort(self, generation: int) -> None:
        with self._lock:
            if generation == self.generation:
                self.loading = False
        logger.warning("index_build_failed", document_id=self.document_id, generation=generation)
    
    def rebuild(
        self,
        pages_text: Iterable[str],
        document_id: Optional[str] = None,
        generation: Optional[int] = None
    ) -> Optional[IndexBuildResult]:
        """
        Rebuild the index from page texts.
        
        Args:
            pages_text: One text block per page, in page order
            document_id: Identifier of the document being loaded
            generation: Generation from ``begin_load``; a new load is started when omitted
            
        Returns:
            IndexBuildResult, or None if a newer load superseded this one
        """
        if generation is None:
            generation = self.begin_load(document_id)
        
        builder = IndexBuilder(self.indexer)
        try:
            for page_number, text in enumerate(pages_text, start=1):
                builder.add_page(page_number, text)
        except Exception:
            self._abort(generation)
            raise
        
        return self._commit(generation, builder)
    
    async def load_pages_async(
        self,
        pages_text: AsyncIterable[str],
        document_id: Optional[str] = None
    ) -> Optional[IndexBuildResult]:
        """
        Rebuild the index from page texts supplied asynchronously, in page order.
        
        A load started while this one is still consuming pages supersedes it;
        this build is then abandoned and None is returned.
        """
        generation = self.begin_load(document_id)
        builder = IndexBuilder(self.indexer)
        
        page_number = 0
        try:
            async for text in pages_text:
                if generation != self.generation:
                    break
                page_number += 1
                builder.add_page(page_number, text)
        except Exception:
            self._abort(generation)
            raise
        
        return self._commit(generation, builder)
    
    def load_pdf(self, data: bytes, document_id: Optional[str] = None) -> Optional[IndexBuildResult]:
        """Extract text from PDF bytes and rebuild the index."""
        pages_text = extract_pages_text(data)
        return self.rebuild(pages_text, document_id=document_id)
    
    async def load_pdf_async(self, data: bytes, document_id: Optional[str] = None) -> Optional[IndexBuildResult]:
        """Extract PDF text page by page without blocking the event loop, then index it."""
        async with aclosing(iter_pages_text(data)) as pages:
            return await self.load_pages_async(
                (text async for _, text in pages),
                document_id=document_id
            )
    
    def search(self, raw_query: str) -> Optional[SearchMatch]:
        """
        Resolve a query to a target page.
        
        Repeating the same normalized query cycles through the ranked matches.
        
        Returns:
            SearchMatch, or None when there is no match
        """
        start_time = time.time()
        
        with self._lock:
            match = self.session.search(raw_query, self.entries)
            
            execution_time = (time.time() - start_time) * 1000
            self._stats["total_queries"] += 1
            self._stats["total_execution_time"] += execution_time
            if match is None:
                self._stats["no_matches"] += 1
            else:
                self._stats["matches"] += 1
        
        return match
    
    def listing(self) -> List[ListingItem]:
        """Listing items sorted by label for display."""
        return sort_listing_items(self.listing_events)
    
    def jump_to_listing(self, page_number: int) -> Optional[ListingItem]:
        """Find the first displayed listing item for a page; search cycling is unaffected."""
        for item in self.listing():
            if item.value == page_number:
                return item
        return None
    
    def get_stats(self) -> Dict[str, object]:
        """Get engine statistics."""
        stats: Dict[str, object] = dict(self._stats)
        
        total_queries = self._stats["total_queries"]
        if total_queries > 0:
            stats["average_execution_time_ms"] = self._stats["total_execution_time"] / total_queries
            stats["match_rate"] = self._stats["matches"] / total_queries
        else:
            stats["average_execution_time_ms"] = 0.0
            stats["match_rate"] = 0.0
        
        stats["index_stats"] = {
            "document_id": self.document_id,
            "generation": self.generation,
            "loading": self.loading,
            "page_count": self.page_count,
            "total_entries": len(self.entries),
            "numbered_entries": sum(1 for entry in self.entries if entry.number_key),
        }
        return stats
    
    def clear(self) -> None:
        """Drop the loaded document and reset statistics."""
        self.begin_load(None)
        with self._lock:
            self.loading = False
            self._stats = self._empty_stats()
