"""
Exception handlers: map the DataEngineError hierarchy to JSON error responses.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dataengine.data.errors import DataEngineError
from dataengine.logging_config import get_logger

logger = get_logger(__name__)


async def data_engine_error_handler(request: Request, exc: DataEngineError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.kind)
    else:
        logger.info("%s %s rejected: %s (%s)", request.method, request.url.path, exc.message, exc.kind)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "error": exc.kind})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else escaping a route is a server-side bug (e.g. a response that cannot be encoded)."""
    logger.exception("%s %s raised %s", request.method, request.url.path, type(exc).__name__)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Failed to encode response: {exc}", "error": "EncodingError"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DataEngineError, data_engine_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
