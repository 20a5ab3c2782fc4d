"""
Header alias resolution and canonical record shaping.
"""
from __future__ import annotations

import datetime as dt
import math
import re
from types import MappingProxyType
from typing import Any, Mapping

from termtable.config import COLUMNS, HEADER_ALIASES

CanonicalRecord = Mapping[str, str]

_SEPARATOR_RE = re.compile(r"[_\-]+")
_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Header resolution
# ---------------------------------------------------------------------------

def normalize_header_key(header: Any) -> str:
    """Reduce a raw header to its alias-table key.

    Trims, maps the ideographic space to a plain space, turns runs of
    ``_``/``-`` into one space, collapses whitespace and lower-cases.
    """
    text = "" if header is None else str(header)
    text = text.strip().replace("\u3000", " ")
    text = _SEPARATOR_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.lower()


def resolve_header(header: Any) -> str | None:
    """Canonical column for a raw header, or None if the column is unknown."""
    return HEADER_ALIASES.get(normalize_header_key(header))


# ---------------------------------------------------------------------------
# Cell coercion
# ---------------------------------------------------------------------------

def cell_to_text(value: Any) -> str:
    """Coerce a decoded cell value to display text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        # pandas.NaT is a datetime subclass whose isoformat() is "NaT"
        if value != value:
            return ""
        return value.isoformat()
    return str(value)


# ---------------------------------------------------------------------------
# Record normalisation
# ---------------------------------------------------------------------------

def normalize_record(raw: Mapping[Any, Any]) -> CanonicalRecord:
    """Map one raw row onto the canonical columns.

    Unknown headers are dropped. When several headers resolve to the same
    column the last one in the row wins. Columns with no source are "".
    """
    mapped: dict[str, str] = {}
    for header, value in raw.items():
        column = resolve_header(header)
        if column is not None:
            mapped[column] = cell_to_text(value)

    return MappingProxyType({c: mapped.get(c, "") for c in COLUMNS})
