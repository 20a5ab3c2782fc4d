"""
Term search endpoint: filter, sort by (Document, Clause), paginate.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query as QueryParam

from termtable.config import COLUMNS
from termtable.data.schemas import Query
from termtable.data.store import TermStore
from termtable.api.dependencies import get_store, parse_page_size, parse_query
from termtable.api.response_models import TermsResponse

router = APIRouter(prefix="/api", tags=["terms"])


@router.get("/terms", response_model=TermsResponse)
def search_terms(
    query: Query = Depends(parse_query),
    page_size: int = Depends(parse_page_size),
    page: int = QueryParam(1, description="1-based; clamped to the last page"),
    store: TermStore = Depends(get_store),
):
    result = store.table.search(query, page_size=page_size, page=page)
    return TermsResponse.from_page(COLUMNS, result)
