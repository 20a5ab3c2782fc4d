"""
TermTable — Configuration: canonical columns, header aliases, query options.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Optional workbook loaded at API start-up
# ---------------------------------------------------------------------------
_startup = os.environ.get("TERMTABLE_WORKBOOK", "")
STARTUP_WORKBOOK = Path(_startup) if _startup else None

# ---------------------------------------------------------------------------
# Canonical columns (display order)
# ---------------------------------------------------------------------------
COLUMNS = [
    "Term",
    "Abbreviation",
    "Japanese",
    "Definition",
    "Notes",
    "Classification",
    "Document",
    "Clause",
    "Source",
    "Status",
    "Previous",
    "Next",
]

# ---------------------------------------------------------------------------
# Header aliases: normalized header text → canonical column
# Keys are already normalized (lower-case, single spaces, no _ or -).
# "standard" and the *version spellings are legacy workbook headers.
# ---------------------------------------------------------------------------
HEADER_ALIASES = {
    "term": "Term",
    "abbreviation": "Abbreviation",
    "abbr": "Abbreviation",
    "abbr.": "Abbreviation",
    "japanese": "Japanese",
    "definition": "Definition",
    "notes": "Notes",
    "classification": "Classification",
    "standard": "Document",
    "std": "Document",
    "std.": "Document",
    "document": "Document",
    "clause": "Clause",
    "source": "Source",
    "status": "Status",
    "previous version": "Previous",
    "prev version": "Previous",
    "previous": "Previous",
    "prev": "Previous",
    "previousversion": "Previous",
    "prevversion": "Previous",
    "next version": "Next",
    "next": "Next",
    "nextversion": "Next",
}

# ---------------------------------------------------------------------------
# Sort keys (primary, secondary)
# ---------------------------------------------------------------------------
SORT_COLUMNS = ("Document", "Clause")

# ---------------------------------------------------------------------------
# Query options
# ---------------------------------------------------------------------------
SEARCH_FIELDS = ["Term", "Japanese"]
MATCH_MODES = ["partial", "exact"]
PAGE_SIZES = [25, 50, 100, 200]
DEFAULT_PAGE_SIZE = 50

# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------
ACCEPTED_EXTENSIONS = (".xlsx", ".xlsm", ".xls")
