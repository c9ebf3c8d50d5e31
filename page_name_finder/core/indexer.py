"""Index construction: scans per-page text for named records."""

import re
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..models.index import Entry, IndexBuildResult, ListingItem
from .keys import canonical_digits, extract_number_key, tokens_key_from_name
from .truncation import DEFAULT_TRUNCATION_RULES, TruncationRule, apply_truncation_rules

DEFAULT_NAME_MARKER = "Name:"

_NATURAL_SPLIT_RE = re.compile(r'([0-9]+)')


def make_entry(page_number: int, name_raw: str) -> Entry:
    """Create an entry with both keys derived from the raw name."""
    return Entry(
        page_number=page_number,
        name_raw=name_raw,
        number_key=extract_number_key(name_raw),
        tokens_key=tokens_key_from_name(name_raw),
    )


def listing_label(entry: Entry) -> str:
    """Display label for an entry in the names listing."""
    return f"{entry.name_raw} (page {entry.page_number})"


class NameIndexer:
    """Extracts named records from page text into an ordered entry index."""
    
    def __init__(
        self,
        marker: str = DEFAULT_NAME_MARKER,
        rules: Sequence[TruncationRule] = DEFAULT_TRUNCATION_RULES
    ) -> None:
        """
        Initialize the indexer.
        
        Args:
            marker: Literal text that introduces a record name
            rules: Truncation rules applied, in order, to the text after a marker
        """
        if not marker:
            raise ValueError("Name marker cannot be empty")
        self.marker = marker
        self.rules = list(rules)
    
    def extract_names(self, text: str) -> List[str]:
        """
        Extract every non-empty record name from one page of text.
        
        Markers are visited left to right without overlap. Each name is the
        text after its marker, cut by the truncation rules and trimmed. Names
        are returned in occurrence order, duplicates included.
        """
        names = []
        if not text:
            return names
        
        pos = 0
        while True:
            idx = text.find(self.marker, pos)
            if idx == -1:
                break
            pos = idx + len(self.marker)
            
            name_raw = apply_truncation_rules(text[pos:], self.rules).strip()
            if name_raw:
                names.append(name_raw)
        
        return names
    
    def build_index(self, pages_text: Iterable[str]) -> IndexBuildResult:
        """
        Build the entry index for a whole document.
        
        Args:
            pages_text: One text block per page, in page order starting at 1
            
        Returns:
            IndexBuildResult with entries and one listing event per entry
        """
        builder = IndexBuilder(self)
        for page_number, text in enumerate(pages_text, start=1):
            builder.add_page(page_number, text)
        return builder.result()


class IndexBuilder:
    """Incremental index build fed one page at a time, in page order."""
    
    def __init__(self, indexer: NameIndexer) -> None:
        self.indexer = indexer
        self.entries: List[Entry] = []
        self.listing_events: List[ListingItem] = []
        self.page_count = 0
        self._seen: Set[Tuple[int, str]] = set()
    
    def add_page(self, page_number: int, text: str) -> List[Entry]:
        """
        Index one page and return the entries it added.
        
        Raises:
            ValueError: If pages are fed out of order
        """
        if page_number <= self.page_count:
            raise ValueError(
                f"Pages must be indexed in increasing order: got {page_number} after {self.page_count}"
            )
        self.page_count = page_number
        
        added = []
        for name_raw in self.indexer.extract_names(text):
            unique = (page_number, name_raw)
            if unique in self._seen:
                continue
            self._seen.add(unique)
            
            entry = make_entry(page_number, name_raw)
            self.entries.append(entry)
            self.listing_events.append(ListingItem(
                page_number=page_number,
                label=listing_label(entry),
                value=page_number,
            ))
            added.append(entry)
        
        return added
    
    def result(self) -> IndexBuildResult:
        return IndexBuildResult(
            entries=list(self.entries),
            listing_events=list(self.listing_events),
        )


def build_index(
    pages_text: Iterable[str],
    marker: str = DEFAULT_NAME_MARKER,
    rules: Optional[Sequence[TruncationRule]] = None
) -> IndexBuildResult:
    """Build an index with a one-off indexer (default marker and rules)."""
    indexer = NameIndexer(marker, DEFAULT_TRUNCATION_RULES if rules is None else rules)
    return indexer.build_index(pages_text)


def _natural_key(label: str) -> List[object]:
    # Odd positions are digit runs, compared as (length, digits): "UNIT 2" sorts before "UNIT 10"
    parts = _NATURAL_SPLIT_RE.split(label.casefold())
    key = []
    for i, part in enumerate(parts):
        if i % 2:
            digits = canonical_digits(part)
            key.append((len(digits), digits))
        else:
            key.append(part)
    return key


def sort_listing_items(items: Iterable[ListingItem]) -> List[ListingItem]:
    """Sort listing items by label, comparing digit runs numerically."""
    return sorted(items, key=lambda item: _natural_key(item.label))
