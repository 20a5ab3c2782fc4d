"""
Query engine: keyword filter, natural (Document, Clause) sort, pagination.

All functions are pure; they take a sequence of canonical records and
return new sequences without touching the input.
"""
from __future__ import annotations

import math
import re
from typing import Any, Iterable, Mapping, Sequence

from termtable.config import SORT_COLUMNS
from termtable.data.schemas import MatchMode, Page, Query

Record = Mapping[str, str]

_DIGITS_RE = re.compile(r"(\d+)")


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

def fold_text(value: Any) -> str:
    """Trimmed, lower-cased text with the ideographic space folded to ASCII."""
    text = "" if value is None else str(value)
    return text.strip().replace("\u3000", " ").lower()


def filter_records(records: Sequence[Record], query: Query) -> list[Record]:
    """Records whose ``query.field`` matches the keyword, in input order."""
    keyword = fold_text(query.keyword)
    if not keyword:
        return list(records)

    column = query.field.value
    if query.match == MatchMode.EXACT:
        return [r for r in records if fold_text(r.get(column)) == keyword]
    return [r for r in records if keyword in fold_text(r.get(column))]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def natural_key(text: str) -> tuple:
    """Sort key that orders embedded digit runs by value ("2" < "10").

    Digit runs sort before text at the same position; equal values fall back
    to the digit text so "02" and "2" still have a fixed order.
    """
    key = []
    for i, part in enumerate(_DIGITS_RE.split(text)):
        if not part:
            continue
        if i % 2:
            key.append((0, int(part), part))
        else:
            key.append((1, 0, part))
    return tuple(key)


def _component(value: Any) -> tuple:
    text = "" if value is None else str(value).strip().lower()
    if not text:
        return (1, ())
    return (0, natural_key(text))


def sort_key(record: Record) -> tuple:
    """(Document, Clause) key with empty values after non-empty ones."""
    return tuple(_component(record.get(c)) for c in SORT_COLUMNS)


def sort_records(records: Iterable[Record]) -> list[Record]:
    """Stable sort by :func:`sort_key`; full ties keep their input order."""
    return sorted(records, key=sort_key)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

def paginate(records: Sequence[Record], page_size: int, requested_page: int) -> Page:
    """Slice out one page, clamping the request to ``[1, page_count]``."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive (got {page_size})")

    total = len(records)
    page_count = max(1, math.ceil(total / page_size))
    page = min(max(requested_page, 1), page_count)
    start = (page - 1) * page_size
    return Page(
        visible=tuple(records[start:start + page_size]),
        page=page,
        page_count=page_count,
        total=total,
        page_size=page_size,
    )


def run_query(records: Sequence[Record], query: Query, page_size: int, page: int = 1) -> Page:
    """Filter, sort and paginate in one call."""
    return paginate(sort_records(filter_records(records, query)), page_size, page)
