"""Heuristic scoring of index entries against a free-text query."""

from typing import List, Optional, Sequence, Tuple

from rapidfuzz.distance import Prefix

from ..models.index import Entry
from .keys import extract_number_key, parse_number_pair
from .normalizer import has_letters, letters_only, normalize_words

DEFAULT_MAX_MATCHES = 20

EXACT_NUMBER_BONUS = 1000
NUMBER_FORMAT_MISMATCH_PENALTY = 50
MISSING_NUMBER_PENALTY = 200
TOKENS_CONTAINED_BONUS = 300
TOKENS_CONTAIN_ENTRY_BONUS = 150
TOKENS_PREFIX_CAP = 20
TOKENS_MISMATCH_PENALTY = 50


class QueryKeys:
    """Keys derived once from a query and reused across every entry."""
    
    __slots__ = ("normalized", "number_key", "number_pair", "tokens_key", "has_letters")
    
    def __init__(self, query: str) -> None:
        self.normalized = normalize_words(query)
        self.number_key = extract_number_key(self.normalized)
        self.number_pair = parse_number_pair(self.number_key)
        self.tokens_key = letters_only(self.normalized)
        self.has_letters = has_letters(self.normalized)


def _number_score(keys: QueryKeys, entry: Entry) -> int:
    if keys.number_key is None:
        return 0
    
    if entry.number_key == keys.number_key:
        return -EXACT_NUMBER_BONUS
    
    if entry.number_key is None:
        return MISSING_NUMBER_PENALTY
    
    entry_pair = parse_number_pair(entry.number_key)
    if keys.number_pair and entry_pair:
        return (
            abs(keys.number_pair[0] - entry_pair[0])
            + abs(keys.number_pair[1] - entry_pair[1])
        )
    
    return NUMBER_FORMAT_MISMATCH_PENALTY


def _tokens_score(keys: QueryKeys, entry: Entry) -> int:
    if not keys.has_letters or not keys.tokens_key:
        return 0
    
    if keys.tokens_key in entry.tokens_key:
        return -TOKENS_CONTAINED_BONUS
    
    if entry.tokens_key in keys.tokens_key:
        return -TOKENS_CONTAIN_ENTRY_BONUS
    
    common = Prefix.similarity(entry.tokens_key, keys.tokens_key)
    return (TOKENS_PREFIX_CAP - min(common, TOKENS_PREFIX_CAP)) + TOKENS_MISMATCH_PENALTY


def score_entry(query: str, entry: Entry, keys: Optional[QueryKeys] = None) -> int:
    """
    Score an entry against a query; lower is better.
    
    An exact numeric key match dominates (-1000). Otherwise numeric
    closeness of "A-B" pairs, a format-mismatch penalty or a missing-number
    penalty applies. Letters in the query add a token term: containment
    either way is rewarded, anything else is penalized by how short the
    common prefix is.
    
    Args:
        query: Raw or normalized query text
        entry: Entry to score
        keys: Precomputed query keys (derived from query when omitted)
        
    Returns:
        Integer score, possibly negative
    """
    if keys is None:
        keys = QueryKeys(query)
    
    return _number_score(keys, entry) + _tokens_score(keys, entry)


def rank_entries(
    query: str,
    entries: Sequence[Entry],
    limit: int = DEFAULT_MAX_MATCHES
) -> List[Tuple[Entry, int]]:
    """
    Rank every entry against a query.
    
    The sort is stable, so equal scores keep index insertion order. Scores
    are never used as a filter: a non-empty index always yields candidates.
    
    Args:
        query: Query text
        entries: Index entries in insertion order
        limit: Maximum number of candidates to keep
        
    Returns:
        Up to ``limit`` (entry, score) pairs, best first
    """
    keys = QueryKeys(query)
    scored = [(entry, score_entry(query, entry, keys)) for entry in entries]
    scored.sort(key=lambda item: item[1])
    return scored[:limit]
