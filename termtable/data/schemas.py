"""
Query, page and search-state schemas.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from termtable.config import DEFAULT_PAGE_SIZE


class SearchField(str, Enum):
    TERM = "Term"
    JAPANESE = "Japanese"


class MatchMode(str, Enum):
    PARTIAL = "partial"
    EXACT = "exact"


@dataclass(frozen=True)
class Query:
    """Which column to search, how to match, and the keyword."""
    field: SearchField = SearchField.TERM
    match: MatchMode = MatchMode.PARTIAL
    keyword: str = ""

    def __post_init__(self) -> None:
        # Accept plain strings from query params and CLI args
        object.__setattr__(self, "field", SearchField(self.field))
        object.__setattr__(self, "match", MatchMode(self.match))


@dataclass(frozen=True)
class Page:
    """One page of sorted results plus the numbers a pager needs."""
    visible: tuple[Mapping[str, str], ...]
    page: int
    page_count: int
    total: int
    page_size: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def first_index(self) -> int:
        """1-based position of the first visible record (0 when empty)."""
        if not self.visible:
            return 0
        return (self.page - 1) * self.page_size + 1


@dataclass(frozen=True)
class SearchState:
    """Everything a pager front-end tracks between renders.

    Updating the query or the page size sends the user back to page 1;
    navigation keeps the query and moves within ``[1, page_count]``.
    """
    query: Query = field(default_factory=Query)
    page_size: int = DEFAULT_PAGE_SIZE
    page: int = 1

    def with_query(self, **changes) -> "SearchState":
        query = replace(self.query, **changes)
        if query == self.query:
            return self
        return replace(self, query=query, page=1)

    def with_page_size(self, page_size: int) -> "SearchState":
        if page_size == self.page_size:
            return self
        return replace(self, page_size=page_size, page=1)

    def goto(self, page: int, page_count: int) -> "SearchState":
        return replace(self, page=min(max(page, 1), max(page_count, 1)))

    def first(self) -> "SearchState":
        return replace(self, page=1)

    def previous(self, page_count: int) -> "SearchState":
        return self.goto(min(self.page, page_count) - 1, page_count)

    def next(self, page_count: int) -> "SearchState":
        return self.goto(self.page + 1, page_count)

    def last(self, page_count: int) -> "SearchState":
        return self.goto(page_count, page_count)
