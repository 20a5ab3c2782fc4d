"""
FastAPI dependencies — TermStore singleton, query parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query as QueryParam

from termtable.config import DEFAULT_PAGE_SIZE, PAGE_SIZES
from termtable.data.schemas import MatchMode, Query, SearchField
from termtable.data.store import TermStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: TermStore | None = None


def set_store(store: TermStore) -> None:
    global _store
    _store = store


def get_store() -> TermStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Search parameters from query string
# ---------------------------------------------------------------------------

def parse_query(
    field: str = QueryParam(SearchField.TERM.value, description="Term|Japanese"),
    match: str = QueryParam(MatchMode.PARTIAL.value, description="partial|exact"),
    keyword: Optional[str] = QueryParam("", description="Search text"),
) -> Query:
    """Parse search query parameters into a Query."""
    try:
        sf = SearchField(field)
    except ValueError:
        raise HTTPException(400, f"Invalid field: {field}")
    try:
        mm = MatchMode(match)
    except ValueError:
        raise HTTPException(400, f"Invalid match: {match}")
    return Query(field=sf, match=mm, keyword=keyword or "")


def parse_page_size(
    page_size: int = QueryParam(DEFAULT_PAGE_SIZE, description="25|50|100|200"),
) -> int:
    if page_size not in PAGE_SIZES:
        raise HTTPException(400, f"Invalid page_size: {page_size}")
    return page_size
