"""
Meta endpoints: health, columns and query options.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from termtable.config import COLUMNS, DEFAULT_PAGE_SIZE, MATCH_MODES, PAGE_SIZES, SEARCH_FIELDS
from termtable.data.store import TermStore
from termtable.api.dependencies import get_store
from termtable.api.response_models import ColumnsResponse, HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: TermStore = Depends(get_store)):
    table = store.table
    return HealthResponse(
        status="ok",
        rows=len(table),
        source_name=table.source_name,
        sheet_name=table.sheet_name,
    )


@router.get("/columns", response_model=ColumnsResponse)
def list_columns():
    return ColumnsResponse(
        columns=COLUMNS,
        search_fields=SEARCH_FIELDS,
        match_modes=MATCH_MODES,
        page_sizes=PAGE_SIZES,
        default_page_size=DEFAULT_PAGE_SIZE,
    )
