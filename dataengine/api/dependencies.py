"""
FastAPI dependencies — DataStore injection, page parameter parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import Query, Request

from dataengine.analytics.pagination import clamp_page_params
from dataengine.data.schemas import Dataset
from dataengine.data.store import DataStore


# ---------------------------------------------------------------------------
# Store injection (the store lives on app.state, set by create_app)
# ---------------------------------------------------------------------------

def get_store(request: Request) -> DataStore:
    return request.app.state.store


def get_snapshot(request: Request) -> Dataset:
    """The current Dataset; raises NotLoadedError (404) when nothing is loaded."""
    return get_store(request).snapshot()


# ---------------------------------------------------------------------------
# Page parsing from query params
# ---------------------------------------------------------------------------

def parse_page(
    start: Optional[str] = Query(None, description="First row index (default 0)"),
    limit: Optional[str] = Query(None, description="Rows per page (default 100, max 1000)"),
) -> tuple[int, int]:
    """Parse page query parameters; invalid values fall back to the defaults."""
    return clamp_page_params(start, limit)
