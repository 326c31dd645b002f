# filters.py
"""Selectable category/tag filters built from the category cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union

from models import CategoryEntry

UNAVAILABLE = "Categories unavailable"
HEADER_EXCLUSIVE = "Search text ignores the filters below"
HEADER_NO_COMBINE = "Pick a category OR a tag, not both"


@dataclass
class Header:
    name: str


@dataclass
class UriPartFilter:
    """Single-select filter; `state` is the index of the chosen value."""
    name: str
    values: List[CategoryEntry]
    state: int = 0

    @property
    def labels(self) -> List[str]:
        return [v.label for v in self.values]

    def to_uri_part(self) -> str:
        if 0 <= self.state < len(self.values):
            return self.values[self.state].key
        return ""


Filter = Union[Header, UriPartFilter]


@dataclass
class FilterList:
    filters: List[Filter] = field(default_factory=list)

    def __iter__(self):
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    @property
    def available(self) -> bool:
        return any(isinstance(f, UriPartFilter) for f in self.filters)

    def get(self, name: str) -> UriPartFilter:
        for f in self.filters:
            if isinstance(f, UriPartFilter) and f.name == name:
                return f
        raise KeyError(name)


def partition(entries: Iterable[CategoryEntry], use_tags: bool = True):
    """Split into (categories, tags), first-seen order, deduped by key."""
    categories: List[CategoryEntry] = []
    tags: List[CategoryEntry] = []
    seen = set()
    for entry in entries:
        if entry.key in seen:
            continue
        seen.add(entry.key)
        if entry.is_tag:
            if use_tags:
                tags.append(entry)
        else:
            categories.append(entry)
    return categories, tags


def present_filters(entries: Sequence[CategoryEntry], use_tags: bool = True,
                    headers: bool = False) -> FilterList:
    categories, tags = partition(entries, use_tags)
    if headers and tags:
        tags.insert(0, CategoryEntry("All", ""))

    filters: List[Filter] = []
    if headers and (categories or tags):
        filters += [Header(HEADER_EXCLUSIVE), Header(HEADER_NO_COMBINE)]
    if categories:
        filters.append(UriPartFilter("Category", categories))
    if tags:
        filters.append(UriPartFilter("Tag", tags))

    if not any(isinstance(f, UriPartFilter) for f in filters):
        return FilterList([Header(UNAVAILABLE)])
    return FilterList(filters)


def keys_from_filters(filters: Iterable[Filter]) -> List[str]:
    """Selected non-empty keys, in filter order."""
    out = []
    for f in filters:
        if isinstance(f, UriPartFilter):
            part = f.to_uri_part()
            if part:
                out.append(part)
    return out
