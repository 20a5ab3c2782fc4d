"""
Workbook decoding: bytes → first-sheet raw records.
"""
from __future__ import annotations

import io
from typing import Any

import pandas as pd

RawRecord = dict[Any, Any]


class DecodeError(ValueError):
    """The uploaded bytes could not be read as a workbook."""


def decode_workbook(data: bytes) -> tuple[str, list[RawRecord]]:
    """Read the first sheet of an .xlsx or legacy .xls workbook.

    pandas picks the engine from the file contents (openpyxl for OOXML, xlrd
    for BIFF). Returns ``(sheet_name, rows)`` where each row maps the header
    text of the first sheet row to the cell value, in column order. Rows with
    no values at all are skipped. A workbook without sheets gives
    ``("", [])``.
    """
    try:
        with pd.ExcelFile(io.BytesIO(data)) as book:
            if not book.sheet_names:
                return "", []
            sheet_name = str(book.sheet_names[0])
            df = book.parse(sheet_name, header=0, dtype=object, na_filter=False)
    except Exception as exc:
        raise DecodeError(f"Could not read workbook: {exc}") from exc

    # Blank cells (NaN from ragged rows, "" with na_filter off) become None
    df = df.astype(object)
    df = df.where(pd.notna(df) & (df != ""), None)
    df = df.dropna(axis=0, how="all")
    return sheet_name, df.to_dict(orient="records")
