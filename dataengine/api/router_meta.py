"""
Meta endpoints: health.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from dataengine.api.dependencies import get_store
from dataengine.api.response_models import HealthResponse
from dataengine.data.store import DataStore

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    info = store.info()
    return HealthResponse(
        status="ok",
        loaded=info.loaded,
        generation=info.generation,
        source=info.source,
        loaded_at=info.loaded_at.isoformat() if info.loaded_at else None,
        rows=info.rows,
        columns=info.columns,
    )
