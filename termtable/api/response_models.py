"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from pydantic import BaseModel

from termtable.data.schemas import Page
from termtable.data.store import Table


class HealthResponse(BaseModel):
    status: str
    rows: int
    source_name: str
    sheet_name: str


class ColumnsResponse(BaseModel):
    columns: list[str]
    search_fields: list[str]
    match_modes: list[str]
    page_sizes: list[int]
    default_page_size: int


class TableResponse(BaseModel):
    status: str
    rows: int
    source_name: str
    sheet_name: str

    @classmethod
    def from_table(cls, status: str, table: Table) -> "TableResponse":
        return cls(
            status=status,
            rows=len(table),
            source_name=table.source_name,
            sheet_name=table.sheet_name,
        )


class TermsResponse(BaseModel):
    columns: list[str]
    records: list[dict[str, str]]
    page: int
    page_count: int
    page_size: int
    total: int

    @classmethod
    def from_page(cls, columns: list[str], page: Page) -> "TermsResponse":
        return cls(
            columns=columns,
            records=[dict(r) for r in page.visible],
            page=page.page,
            page_count=page.page_count,
            page_size=page.page_size,
            total=page.total,
        )
