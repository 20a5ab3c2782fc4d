"""
TermTable — FastAPI app factory with optional start-up workbook.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from termtable.data.loader import DecodeError
from termtable.data.store import TermStore
from termtable.api.dependencies import set_store
from termtable.api.router_meta import router as meta_router
from termtable.api.router_terms import router as terms_router
from termtable.api.router_upload import router as upload_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the store; preload TERMTABLE_WORKBOOK when it is set."""
    from termtable.config import STARTUP_WORKBOOK

    store = TermStore()
    if STARTUP_WORKBOOK is not None:
        print(f"  TERMTABLE_WORKBOOK = {STARTUP_WORKBOOK}")
        try:
            store.load(STARTUP_WORKBOOK)
        except (OSError, DecodeError) as exc:
            print(f"  Warning: could not load {STARTUP_WORKBOOK}: {exc}")
    set_store(store)

    if store.row_count() > 0:
        print(f"\nTermTable ready — {store.row_count():,} terms\n")
    else:
        print("\nTermTable ready — no data yet. Upload a workbook via POST /api/upload.\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="TermTable API",
        description="Terminology workbook search — header normalisation, filtering, paging",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(terms_router)

    return app


app = create_app()
