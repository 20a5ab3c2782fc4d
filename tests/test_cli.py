import json

import pytest

from termtable.cli import apply_browse_command, browse, main
from termtable.data.schemas import SearchState
from termtable.data.store import build_table


@pytest.fixture
def terms_path(tmp_path, workbook):
    rows = [
        ["geometry", "ISO 19107", "4.2", "ジオメトリ"],
        ["feature", "ISO 19109", "4.11", "地物"],
        ["feature type", "ISO 19109", "4.12", "地物型"],
    ]
    path = tmp_path / "TermTable2.xlsx"
    path.write_bytes(workbook(["Term", "Standard", "Clause", "Japanese"], rows))
    return path


def test_search_json(terms_path, capsys):
    assert main(["search", str(terms_path), "--keyword", "feature", "--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["total"] == 2
    assert [r["Clause"] for r in out["records"]] == ["4.11", "4.12"]


def test_search_table_output(terms_path, capsys):
    assert main(["search", str(terms_path), "--field", "Japanese", "--match", "exact",
                 "--keyword", "地物", "--columns", "Term,Japanese"]) == 0
    out = capsys.readouterr().out
    assert "feature" in out
    assert "feature type" not in out
    assert "Page 1 / 1" in out


def test_search_unknown_column(terms_path, capsys):
    assert main(["search", str(terms_path), "--columns", "Term,Bogus"]) == 1
    assert "Bogus" in capsys.readouterr().err


def test_search_bad_workbook(tmp_path, capsys):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"nope")
    assert main(["search", str(path)]) == 1
    assert "Could not read workbook" in capsys.readouterr().err


def test_search_rejects_page_size_outside_choices(terms_path):
    with pytest.raises(SystemExit):
        main(["search", str(terms_path), "--page-size", "30"])


def test_browse_commands(terms_path, capsys):
    table = build_table(terms_path.read_bytes(), terms_path.name)
    state = browse(table, ["size 25", "/feature", "match exact", "n", "q", "/ignored"])
    assert state.page_size == 25
    assert state.query.keyword == "feature"
    assert state.query.match.value == "exact"
    assert state.page == 1
    assert "No matching records" not in capsys.readouterr().out


def test_apply_browse_command_ignores_unknown_input():
    state = SearchState(page=2)
    assert apply_browse_command(state, "size 30", page_count=5) == state
    assert apply_browse_command(state, "field Notes", page_count=5) == state
    assert apply_browse_command(state, "jump", page_count=5) == state
    assert apply_browse_command(state, "g 4", page_count=5).page == 4
    assert apply_browse_command(state, "l", page_count=5).page == 5
    assert apply_browse_command(state, "/", page_count=5).query.keyword == ""
