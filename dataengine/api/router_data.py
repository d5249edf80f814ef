"""
Data endpoints: load a CSV, page through rows, column summaries, Excel export.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from dataengine.analytics.pagination import page
from dataengine.analytics.summary import summarize
from dataengine.api.dependencies import get_snapshot, get_store, parse_page
from dataengine.api.response_models import (
    ColumnInfo, ColumnsResponse, ErrorResponse, LoadRequest, LoadResponse, PageResponse, SummaryResponse,
)
from dataengine.config import EXCEL_MEDIA_TYPE
from dataengine.data.errors import InvalidRequestError
from dataengine.data.schemas import Dataset
from dataengine.data.store import DataStore
from dataengine.excel.export import export_workbook
from dataengine.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["data"])

_NOT_LOADED = {404: {"model": ErrorResponse, "description": "No data loaded"}}


@router.post(
    "/load",
    response_model=LoadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def load_data(req: LoadRequest, store: DataStore = Depends(get_store)):
    """Load a CSV from a server-side path, replacing the current dataset.

    A failed load leaves the previous dataset in place.
    """
    path = req.path.strip()
    if not path:
        raise InvalidRequestError("path is required")

    logger.info("Load requested: %s", path)
    dataset, generation = store.load(path)
    return LoadResponse(
        status="loaded",
        path=path,
        rows=dataset.row_count,
        columns=len(dataset.columns),
        generation=generation,
    )


@router.get("/data", response_model=PageResponse, responses=_NOT_LOADED)
def get_data(
    dataset: Dataset = Depends(get_snapshot),
    params: tuple[int, int] = Depends(parse_page),
):
    """Rows [start, start + limit) in file order, with the total row count."""
    start, limit = params
    result = page(dataset, start, limit)
    logger.debug("Returned %d rows (start=%d, limit=%d)", len(result.rows), result.start, result.limit)
    return PageResponse(
        columns=result.columns,
        records=result.rows,
        total=result.total,
        start=result.start,
        limit=result.limit,
        message="No data in specified range" if result.is_empty else None,
    )


@router.get("/summary", response_model=SummaryResponse, responses=_NOT_LOADED)
def get_summary(dataset: Dataset = Depends(get_snapshot)):
    """Descriptive statistics per column, in column order."""
    return SummaryResponse(
        rows=dataset.row_count,
        columns=[s.to_dict() for s in summarize(dataset)],
    )


@router.get("/columns", response_model=ColumnsResponse, responses=_NOT_LOADED)
def get_columns(dataset: Dataset = Depends(get_snapshot)):
    return ColumnsResponse(
        columns=[ColumnInfo(name=c.name, type=c.inferred_type.value) for c in dataset.columns],
    )


@router.get("/summary/export", responses=_NOT_LOADED)
def export_summary(
    dataset: Dataset = Depends(get_snapshot),
    params: tuple[int, int] = Depends(parse_page),
):
    """Excel workbook with the column summary and one page of rows."""
    start, limit = params
    content = export_workbook(dataset, start=start, limit=limit)
    return Response(
        content=content,
        media_type=EXCEL_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="summary.xlsx"'},
    )
