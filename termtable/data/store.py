"""
TermStore — holds the current Table and swaps it atomically.

One Table per ingested workbook. A new upload or a clear replaces it whole;
readers always see a complete Table.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path

from termtable.config import DEFAULT_PAGE_SIZE
from termtable.data.loader import decode_workbook
from termtable.data.normalize import CanonicalRecord, normalize_record
from termtable.data.query import run_query
from termtable.data.schemas import Page, Query


@dataclass(frozen=True)
class Table:
    """Canonical records of one workbook's first sheet, in row order."""
    records: tuple[CanonicalRecord, ...] = ()
    source_name: str = ""
    sheet_name: str = ""

    def __len__(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def search(self, query: Query, page_size: int = DEFAULT_PAGE_SIZE, page: int = 1) -> Page:
        return run_query(self.records, query, page_size, page)


EMPTY_TABLE = Table()


def build_table(data: bytes, source_name: str = "") -> Table:
    """Decode workbook bytes and normalise every row. Raises DecodeError."""
    sheet_name, rows = decode_workbook(data)
    records = tuple(normalize_record(row) for row in rows)
    return Table(records=records, source_name=source_name, sheet_name=sheet_name)


class TermStore:
    """Current Table with single-writer replacement.

    Every write (upload or clear) takes a ticket from :meth:`begin` before it
    does any I/O. :meth:`commit` installs a result only if no later ticket
    has been committed already, so a slow upload can never overwrite a newer
    one.
    """

    def __init__(self) -> None:
        self._table: Table = EMPTY_TABLE
        self._lock = threading.Lock()
        self._issued = 0
        self._committed = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def table(self) -> Table:
        return self._table

    def row_count(self) -> int:
        return len(self._table)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def begin(self) -> int:
        """Reserve the next write ticket."""
        with self._lock:
            self._issued += 1
            return self._issued

    def commit(self, ticket: int, table: Table) -> bool:
        """Install ``table`` unless a later write already landed."""
        with self._lock:
            if ticket <= self._committed:
                print(f"  Dropped stale write #{ticket} (current is #{self._committed})")
                return False
            self._committed = ticket
            self._table = table
            return True

    def ingest(self, data: bytes, source_name: str = "", ticket: int | None = None) -> bool:
        """Build a Table from workbook bytes and install it.

        On DecodeError nothing changes and the error propagates.
        """
        if ticket is None:
            ticket = self.begin()
        table = build_table(data, source_name)
        installed = self.commit(ticket, table)
        if installed:
            sheet = table.sheet_name or "none"
            print(f"  Loaded {len(table):,} terms from {source_name or '(bytes)'} (sheet: {sheet})")
        return installed

    def load(self, path: Path) -> "TermStore":
        """Ingest a workbook from disk."""
        print(f"Loading terms from {path}...")
        self.ingest(Path(path).read_bytes(), source_name=Path(path).name)
        return self

    def clear(self, ticket: int | None = None) -> bool:
        """Drop the current Table and its file/sheet metadata."""
        if ticket is None:
            ticket = self.begin()
        installed = self.commit(ticket, EMPTY_TABLE)
        if installed:
            print("  Table cleared")
        return installed
