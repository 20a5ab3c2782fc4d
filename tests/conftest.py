import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from termtable.main import create_app


def make_workbook(headers, rows, title="Terms", extra_sheets=()):
    """Build .xlsx bytes whose first sheet has ``headers`` then ``rows``."""
    wb = Workbook()
    ws = wb.active
    ws.title = title
    ws.append(list(headers))
    for row in rows:
        ws.append(list(row))
    for name in extra_sheets:
        other = wb.create_sheet(title=name)
        other.append(["Term"])
        other.append(["from another sheet"])
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def workbook():
    return make_workbook


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c
