"""
Data Engine — FastAPI app factory with optional startup preload.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dataengine.api.errors import register_error_handlers
from dataengine.api.router_data import router as data_router
from dataengine.api.router_meta import router as meta_router
from dataengine.data.errors import LoadError
from dataengine.data.store import DataStore
from dataengine.logging_config import get_logger

logger = get_logger(__name__)


def create_app(store: DataStore | None = None, preload: str | None = None) -> FastAPI:
    """Build the API around ``store`` (a fresh, empty one by default).

    ``preload`` names a CSV loaded at startup; a failed preload is logged and
    the server starts empty.
    """
    store = store if store is not None else DataStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if preload:
            try:
                store.load(preload)
            except LoadError as exc:
                logger.error("Preload of %s failed: %s", preload, exc)
        info = store.info()
        if info.loaded:
            logger.info("Data Engine ready — %s", info.label)
        else:
            logger.info("Data Engine ready — no data yet. POST /load to load a CSV.")
        yield

    app = FastAPI(
        title="Data Engine API",
        description="In-memory CSV dataset — paginated rows and column statistics",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(meta_router)
    app.include_router(data_router)

    return app


def _default_app() -> FastAPI:
    from dataengine.config import PRELOAD_CSV
    return create_app(preload=PRELOAD_CSV)


app = _default_app()
