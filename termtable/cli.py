#!/usr/bin/env python3
"""
TermTable CLI — search a terminology workbook from the terminal, or run the API.

USAGE:
  python -m termtable.cli search TermTable2.xlsx --keyword feature
  python -m termtable.cli search TermTable2.xlsx --field Japanese --match exact --keyword 地物
  python -m termtable.cli search TermTable2.xlsx --page 2 --page-size 25 --json

  python -m termtable.cli browse TermTable2.xlsx            # Interactive pager

  python -m termtable.cli serve                              # Start API server
  python -m termtable.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Iterable

import pandas as pd

from termtable.config import COLUMNS, DEFAULT_PAGE_SIZE, MATCH_MODES, PAGE_SIZES, SEARCH_FIELDS
from termtable.data.loader import DecodeError
from termtable.data.schemas import Page, Query, SearchState
from termtable.data.store import Table, build_table

BROWSE_HELP = """Commands:
  n / p / f / l      next, previous, first, last page
  g N                go to page N
  /TEXT              search for TEXT (a lone "/" clears the keyword)
  field Term|Japanese
  match partial|exact
  size 25|50|100|200
  q                  quit"""


def _load_table(path: str) -> Table:
    p = Path(path)
    return build_table(p.read_bytes(), source_name=p.name)


def _format_page(page: Page, columns: list[str]) -> str:
    """Render a page as a plain-text table with a pager footer."""
    if not page.visible:
        body = "  No matching records"
    else:
        df = pd.DataFrame([dict(r) for r in page.visible], columns=COLUMNS)
        body = df[columns].to_string(index=False)
    footer = f"Page {page.page} / {page.page_count}  ({page.total:,} matching)"
    return f"{body}\n{footer}"


def _page_to_json(page: Page) -> dict:
    return {
        "columns": COLUMNS,
        "records": [dict(r) for r in page.visible],
        "page": page.page,
        "page_count": page.page_count,
        "page_size": page.page_size,
        "total": page.total,
    }


def cmd_search(args):
    """One-shot search."""
    try:
        table = _load_table(args.workbook)
    except (OSError, DecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    query = Query(field=args.field, match=args.match, keyword=args.keyword)
    page = table.search(query, page_size=args.page_size, page=args.page)

    if args.json:
        print(json.dumps(_page_to_json(page), ensure_ascii=False, indent=2))
    else:
        columns = args.columns.split(",") if args.columns else COLUMNS
        unknown = [c for c in columns if c not in COLUMNS]
        if unknown:
            print(f"Error: unknown column(s): {', '.join(unknown)}", file=sys.stderr)
            return 1
        print(f"{table.source_name} (sheet: {table.sheet_name or 'none'}) — {len(table):,} terms")
        print(_format_page(page, columns))
    return 0


def apply_browse_command(state: SearchState, command: str, page_count: int) -> SearchState:
    """Return the state after one pager command. Unknown commands are no-ops."""
    command = command.strip()
    if command.startswith("/"):
        return state.with_query(keyword=command[1:])

    verb, _, arg = command.partition(" ")
    arg = arg.strip()
    if verb == "n":
        return state.next(page_count)
    if verb == "p":
        return state.previous(page_count)
    if verb == "f":
        return state.first()
    if verb == "l":
        return state.last(page_count)
    if verb == "g" and arg.lstrip("-").isdigit():
        return state.goto(int(arg), page_count)
    if verb == "field" and arg in SEARCH_FIELDS:
        return state.with_query(field=arg)
    if verb == "match" and arg in MATCH_MODES:
        return state.with_query(match=arg)
    if verb == "size" and arg.isdigit() and int(arg) in PAGE_SIZES:
        return state.with_page_size(int(arg))
    return state


def browse(table: Table, commands: Iterable[str], columns: list[str] = COLUMNS) -> SearchState:
    """Run the pager over ``commands`` until they run out or "q"."""
    state = SearchState()
    page = table.search(state.query, state.page_size, state.page)
    print(_format_page(page, columns))

    for command in commands:
        if command.strip() in ("q", "quit"):
            break
        if command.strip() in ("?", "help"):
            print(BROWSE_HELP)
            continue
        state = apply_browse_command(state, command, page.page_count)
        page = table.search(state.query, state.page_size, state.page)
        q = state.query
        print(f"\n[{q.field.value} / {q.match.value} / {q.keyword!r}]")
        print(_format_page(page, columns))
    return state


def _stdin_commands():
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def cmd_browse(args):
    """Interactive pager."""
    try:
        table = _load_table(args.workbook)
    except (OSError, DecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"{table.source_name} (sheet: {table.sheet_name or 'none'}) — {len(table):,} terms")
    print(BROWSE_HELP + "\n")
    columns = args.columns.split(",") if args.columns else COLUMNS
    browse(table, _stdin_commands(), [c for c in columns if c in COLUMNS] or COLUMNS)
    return 0


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting TermTable API on port {args.port}...")
    uvicorn.run("termtable.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _add_query_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("workbook", help="Path to an .xlsx workbook")
    p.add_argument("--columns", help="Comma-separated columns to show (default: all)")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="TermTable — terminology workbook search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # search subcommand
    search_parser = subparsers.add_parser("search", help="Search a workbook once")
    _add_query_args(search_parser)
    search_parser.add_argument("--field", choices=SEARCH_FIELDS, default="Term", help="Column to search")
    search_parser.add_argument("--match", choices=MATCH_MODES, default="partial", help="Match mode")
    search_parser.add_argument("--keyword", default="", help="Search text")
    search_parser.add_argument("--page", type=int, default=1, help="Page number (clamped)")
    search_parser.add_argument("--page-size", type=int, choices=PAGE_SIZES, default=DEFAULT_PAGE_SIZE,
                               help=f"Rows per page (default {DEFAULT_PAGE_SIZE})")
    search_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    search_parser.set_defaults(func=cmd_search)

    # browse subcommand
    browse_parser = subparsers.add_parser("browse", help="Page through a workbook interactively")
    _add_query_args(browse_parser)
    browse_parser.set_defaults(func=cmd_browse)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address (default 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
