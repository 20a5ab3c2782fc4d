import pytest

from termtable.config import COLUMNS
from termtable.data.loader import DecodeError, decode_workbook
from termtable.data.schemas import Query
from termtable.data.store import EMPTY_TABLE, TermStore, build_table


def test_ingest_resolves_messy_headers(workbook):
    data = workbook(["Term", "Std.", "clause", "Japanese"], [["geometry", "ISO 19107", "4.2", "ジオメトリ"]])
    table = build_table(data, source_name="TermTable2.xlsx")

    assert len(table) == 1
    expected = {c: "" for c in COLUMNS}
    expected.update(Term="geometry", Document="ISO 19107", Clause="4.2", Japanese="ジオメトリ")
    assert dict(table.records[0]) == expected
    assert table.source_name == "TermTable2.xlsx"
    assert table.sheet_name == "Terms"


def test_ingest_keeps_row_order_and_fills_blanks(workbook):
    rows = [["b", None, "ISO 2"], ["a", "x", None], ["c", 3, "ISO 1"]]
    table = build_table(workbook(["Term", "Notes", "Standard", "Comment"], rows))

    assert [r["Term"] for r in table.records] == ["b", "a", "c"]
    assert table.records[0]["Notes"] == ""
    assert table.records[1]["Document"] == ""
    assert table.records[2]["Notes"] == "3"
    assert all(list(r.keys()) == COLUMNS for r in table.records)


def test_only_first_sheet_is_read(workbook):
    data = workbook(["Term"], [["first"]], title="Main", extra_sheets=["Archive"])
    sheet_name, rows = decode_workbook(data)
    assert sheet_name == "Main"
    assert [r["Term"] for r in rows] == ["first"]


def test_header_only_sheet_gives_empty_table(workbook):
    table = build_table(workbook(["Term", "Japanese"], []))
    assert table.is_empty
    assert table.sheet_name == "Terms"


def test_canonical_workbook_reingests_unchanged(workbook):
    first = build_table(workbook(COLUMNS, [[f"{c}-1" for c in COLUMNS], [f"{c}-2" for c in COLUMNS]]))
    rows = [[r[c] for c in COLUMNS] for r in first.records]
    second = build_table(workbook(COLUMNS, rows))
    assert [dict(r) for r in second.records] == [dict(r) for r in first.records]


def test_table_search(workbook):
    rows = [["geometry", "ISO 19107", "4.2"], ["feature", "ISO 19109", "4.11"], ["feature type", "ISO 19109", "4.12"]]
    table = build_table(workbook(["Term", "Document", "Clause"], rows))
    page = table.search(Query(keyword="feat"), page_size=25)
    assert [r["Term"] for r in page.visible] == ["feature", "feature type"]


# ---------------------------------------------------------------------------
# TermStore
# ---------------------------------------------------------------------------

def test_bad_bytes_leave_table_untouched(workbook):
    store = TermStore()
    store.ingest(workbook(["Term"], [["kept"]]), source_name="good.xlsx")

    with pytest.raises(DecodeError):
        store.ingest(b"definitely not a workbook", source_name="bad.xlsx")

    assert store.table.source_name == "good.xlsx"
    assert store.table.records[0]["Term"] == "kept"


def test_new_ingest_replaces_whole_table(workbook):
    store = TermStore()
    store.ingest(workbook(["Term"], [["a"], ["b"]]), source_name="one.xlsx")
    store.ingest(workbook(["Term"], [["c"]]), source_name="two.xlsx")
    assert [r["Term"] for r in store.table.records] == ["c"]
    assert store.row_count() == 1


def test_clear_resets_metadata(workbook):
    store = TermStore()
    store.ingest(workbook(["Term"], [["a"]]), source_name="one.xlsx")
    assert store.clear()
    assert store.table is EMPTY_TABLE
    assert store.table.source_name == ""
    assert store.table.sheet_name == ""


def test_stale_ingest_is_dropped(workbook):
    store = TermStore()
    slow = store.begin()
    fast = store.begin()

    assert store.ingest(workbook(["Term"], [["newer"]]), "newer.xlsx", ticket=fast)
    assert not store.ingest(workbook(["Term"], [["older"]]), "older.xlsx", ticket=slow)
    assert store.table.source_name == "newer.xlsx"


def test_earlier_ingest_finishing_first_is_then_replaced(workbook):
    store = TermStore()
    first = store.begin()
    second = store.begin()

    assert store.ingest(workbook(["Term"], [["one"]]), "one.xlsx", ticket=first)
    assert store.ingest(workbook(["Term"], [["two"]]), "two.xlsx", ticket=second)
    assert store.table.source_name == "two.xlsx"


def test_ingest_started_before_clear_is_dropped(workbook):
    store = TermStore()
    pending = store.begin()
    store.clear()
    assert not store.ingest(workbook(["Term"], [["late"]]), "late.xlsx", ticket=pending)
    assert store.table.is_empty


def test_load_from_path(tmp_path, workbook):
    path = tmp_path / "terms.xlsx"
    path.write_bytes(workbook(["Term"], [["a"]]))
    store = TermStore().load(path)
    assert store.table.source_name == "terms.xlsx"
    assert store.row_count() == 1


def test_blank_rows_are_skipped(workbook):
    rows = [["geometry", "ISO 19107"], [None, None], ["", ""], ["feature", "ISO 19109"]]
    table = build_table(workbook(["Term", "Document"], rows))
    assert len(table) == 2
    assert [r["Term"] for r in table.records] == ["geometry", "feature"]
    assert table.search(Query(), page_size=25).total == 2


def test_row_with_only_unmapped_values_is_kept(workbook):
    # Non-empty source row, even if every value lands in a dropped column
    table = build_table(workbook(["Term", "Comment"], [["a", ""], [None, "note"]]))
    assert [r["Term"] for r in table.records] == ["a", ""]
