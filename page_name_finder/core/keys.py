"""Identity keys derived from record names: numeric keys and letter-only token keys."""

import re
from typing import Optional, Tuple

from .normalizer import letters_only, normalize_words

_DIGIT_RUN_RE = re.compile(r'[0-9]+')
_NUMBER_PAIR_RE = re.compile(r'([0-9]+)-([0-9]+)')

# Longest digit string converted to int; longer runs only compare as text
MAX_INT_DIGITS = 18


def canonical_digits(run: str) -> str:
    """Drop leading zeros from a digit run, keeping a single "0"."""
    return run.lstrip("0") or "0"


def extract_number_key(text: str) -> Optional[str]:
    """
    Extract the numeric identity key of a name.
    
    Digit runs are read left to right and leading zeros are dropped. The
    first two runs form an ``"A-B"`` key, a single run forms an ``"A"`` key,
    and text without digits has no key. Any runs beyond the first two are
    ignored, including stray header numbers that precede the well/unit
    number. Runs of any length are accepted.
    
    Args:
        text: Text to scan (usually a raw record name or normalized query)
        
    Returns:
        ``"A-B"``, ``"A"`` or None
    """
    numbers = [canonical_digits(run) for run in _DIGIT_RUN_RE.findall(text or "")[:2]]
    
    if not numbers:
        return None
    return "-".join(numbers)


def parse_number_pair(number_key: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    Parse an ``"A-B"`` key into an integer pair.
    
    Returns None for any other form, and for components too long to be a
    well/unit number; those keys still match exactly by string.
    """
    if not number_key:
        return None
    
    match = _NUMBER_PAIR_RE.search(number_key)
    if not match:
        return None
    
    first, second = match.groups()
    if len(first) > MAX_INT_DIGITS or len(second) > MAX_INT_DIGITS:
        return None
    return int(first), int(second)


def tokens_key_from_name(name_raw: str) -> str:
    """
    Build the letter-only fuzzy key of a name.
    
    Words carrying any digit (``10-28F``, ``05``) are dropped and the
    remaining words are collapsed into one string of letters, e.g.
    ``"HILL CREEK UNIT 10-28F"`` becomes ``"HILLCREEKUNIT"``.
    
    Args:
        name_raw: Raw record name
        
    Returns:
        Upper-case letters only (possibly empty)
    """
    cleaned = normalize_words(name_raw)
    
    without_numbers = " ".join(
        word for word in cleaned.split(" ") if not any(ch.isdigit() for ch in word)
    )
    
    return letters_only(without_numbers)
