"""Workbook loading, record normalization, and in-memory query engine."""
from .loader import DecodeError, decode_workbook
from .normalize import normalize_header_key, resolve_header, normalize_record
from .query import filter_records, sort_records, paginate, run_query
from .schemas import MatchMode, Page, Query, SearchField, SearchState
from .store import Table, TermStore, build_table
