"""
Upload endpoints: ingest a workbook, clear the current table.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from termtable.config import ACCEPTED_EXTENSIONS
from termtable.data.loader import DecodeError
from termtable.data.store import TermStore
from termtable.api.dependencies import get_store
from termtable.api.response_models import TableResponse

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=TableResponse)
async def upload_workbook(file: UploadFile = File(...), store: TermStore = Depends(get_store)):
    """Replace the current table with the first sheet of an uploaded workbook."""
    if not file.filename:
        raise HTTPException(400, "Missing filename")
    if not file.filename.lower().endswith(ACCEPTED_EXTENSIONS):
        accepted = ", ".join(ACCEPTED_EXTENSIONS)
        raise HTTPException(400, f"Only {accepted} files are accepted (got '{file.filename}')")

    # Ticket before the read so a later upload always wins
    ticket = store.begin()
    content = await file.read()

    # Parsing is blocking pandas work; keep it off the event loop
    try:
        installed = await run_in_threadpool(store.ingest, content, file.filename, ticket)
    except DecodeError as exc:
        raise HTTPException(422, str(exc))

    if not installed:
        raise HTTPException(409, "Superseded by a newer upload")
    return TableResponse.from_table("loaded", store.table)


@router.delete("/table", response_model=TableResponse)
def clear_table(store: TermStore = Depends(get_store)):
    """Empty the table and forget the source file and sheet names."""
    if not store.clear():
        raise HTTPException(409, "Superseded by a newer upload or clear")
    return TableResponse.from_table("cleared", store.table)
