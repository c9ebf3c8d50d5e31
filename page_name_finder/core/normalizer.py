"""Text normalization utilities for consistent name and query comparison."""

import re

# Everything outside upper-case letters, digits, whitespace and hyphens
_DISALLOWED_RE = re.compile(r'[^A-Z0-9\s-]')
_WHITESPACE_RE = re.compile(r'\s+')
_NON_LETTER_RE = re.compile(r'[^A-Z]')
_LETTER_RE = re.compile(r'[A-Z]')


def normalize_words(text: str) -> str:
    """
    Normalize text for comparison.
    
    Upper-cases the text, replaces every character other than A-Z, 0-9,
    whitespace and hyphen with a space, collapses whitespace runs and trims.
    The result is idempotent under a second application.
    
    Args:
        text: Input text (None is treated as empty)
        
    Returns:
        Normalized text
    """
    if not text:
        return ""
    
    normalized = text.upper()
    normalized = _DISALLOWED_RE.sub(' ', normalized)
    normalized = _WHITESPACE_RE.sub(' ', normalized)
    
    return normalized.strip()


def letters_only(text: str) -> str:
    """Strip every character that is not an upper-case letter A-Z."""
    return _NON_LETTER_RE.sub('', text or "")


def has_letters(text: str) -> bool:
    """Check whether text contains at least one upper-case letter."""
    return bool(_LETTER_RE.search(text or ""))
