"""Index data models shared by the core engine and the API layer."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """One indexed occurrence of a named record on a page."""
    
    model_config = ConfigDict(frozen=True)
    
    page_number: int = Field(..., ge=1, description="1-indexed page the name was found on")
    name_raw: str = Field(..., min_length=1, description="Display name as found in the page text")
    number_key: Optional[str] = Field(None, description="Numeric key ('A-B' or 'A'), absent without digits")
    tokens_key: str = Field(..., description="Letter-only, number-stripped name key")


class ListingItem(BaseModel):
    """Selectable listing item emitted for every new entry."""
    
    model_config = ConfigDict(frozen=True)
    
    page_number: int = Field(..., ge=1, description="Page of the entry")
    label: str = Field(..., description="Display label '<name> (page <n>)'")
    value: int = Field(..., ge=1, description="Value carried by the listing item (the page number)")


class IndexBuildResult(BaseModel):
    """Output of a full index build."""
    
    entries: List[Entry] = Field(default_factory=list, description="Entries in page, then first-occurrence order")
    listing_events: List[ListingItem] = Field(default_factory=list, description="One listing item per entry")


class SearchMatch(BaseModel):
    """Resolved search target."""
    
    page_number: int = Field(..., ge=1, description="Target page")
    entry: Entry = Field(..., description="Matched entry")
    match_index: int = Field(..., ge=0, description="Position of this match in the candidate list")
    match_count: int = Field(..., ge=1, description="Number of candidate matches")
    score: int = Field(..., description="Score of the matched entry (lower is better)")
