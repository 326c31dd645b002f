# models.py
"""Plain data carried between the adapter and its caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

STATUS_UNKNOWN = "unknown"


@dataclass
class Request:
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CategoryEntry:
    """A browsable category or tag. An empty key means "no filter"."""
    label: str
    key: str

    @property
    def is_tag(self) -> bool:
        return self.key.lower().startswith("tag/")


ALL_ENTRY = CategoryEntry("All", "")


@dataclass
class SearchFilterSelection:
    query: str = ""
    selected_keys: List[str] = field(default_factory=list)


@dataclass
class Entry:
    url: str
    title: str
    thumbnail_url: Optional[str] = None


@dataclass
class EntriesPage:
    entries: List[Entry]
    has_next_page: bool


@dataclass
class EntryDetails:
    title: str
    description: str = ""
    genre: str = ""
    author: Optional[str] = None
    thumbnail_url: Optional[str] = None
    status: str = STATUS_UNKNOWN


@dataclass
class Chapter:
    name: str
    url: str
    date_upload: int = 0          # epoch millis, 0 when unknown


@dataclass
class Page:
    index: int
    image_url: str
    url: str = ""
