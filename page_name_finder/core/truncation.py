"""Ordered rules that cut page-template text off the end of a record name."""

import re
from typing import Iterable, Optional, Pattern, Sequence, Union

MONTHS = (
    "JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE",
    "JULY", "AUGUST", "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER",
)

MONTH_YEAR_PATTERN = re.compile(
    r'\b(' + '|'.join(MONTHS) + r')\s+[0-9]{4}\b',
    re.IGNORECASE,
)


class TruncationRule:
    """Base class for a rule that truncates text before a matched position."""
    
    name = "truncation"
    
    def find(self, text: str) -> Optional[int]:
        """Return the index to cut at, or None if the rule does not apply."""
        raise NotImplementedError
    
    def apply(self, text: str) -> str:
        """Truncate text immediately before the first match of this rule."""
        index = self.find(text)
        if index is None:
            return text
        return text[:index]
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class SubstringTruncation(TruncationRule):
    """Cut before the first occurrence of a literal, case-sensitive substring."""
    
    def __init__(self, marker: str) -> None:
        if not marker:
            raise ValueError("Truncation marker cannot be empty")
        self.marker = marker
        self.name = marker
    
    def find(self, text: str) -> Optional[int]:
        index = text.find(self.marker)
        return index if index != -1 else None


class PatternTruncation(TruncationRule):
    """Cut before the first match of a regular expression."""
    
    def __init__(self, pattern: Union[str, Pattern[str]], name: Optional[str] = None) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.name = name or self.pattern.pattern
    
    def find(self, text: str) -> Optional[int]:
        match = self.pattern.search(text)
        return match.start() if match else None


# Header text first, then the statement period suffix
DEFAULT_TRUNCATION_RULES: Sequence[TruncationRule] = (
    SubstringTruncation("GAS VOLUME STATEMENT"),
    PatternTruncation(MONTH_YEAR_PATTERN, name="month_year"),
)


def apply_truncation_rules(text: str, rules: Iterable[TruncationRule] = DEFAULT_TRUNCATION_RULES) -> str:
    """
    Apply truncation rules in order.
    
    Each rule sees the output of the previous one, so a later rule never
    matches text that an earlier rule already removed.
    
    Args:
        text: Text following the name marker
        rules: Rules to apply, in order
        
    Returns:
        Truncated (untrimmed) text
    """
    for rule in rules:
        text = rule.apply(text)
    return text
