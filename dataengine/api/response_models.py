"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

# Null | Number | Text, as served to clients
CellValue = Union[None, float, str]


class LoadRequest(BaseModel):
    path: str


class LoadResponse(BaseModel):
    status: str
    path: str
    rows: int
    columns: int
    generation: int


class PageResponse(BaseModel):
    columns: list[str]
    records: list[list[CellValue]]
    total: int
    start: int
    limit: int
    message: Optional[str] = None


class NumericSummaryModel(BaseModel):
    name: str
    type: Literal["numeric"]
    count: int
    null_count: int
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    stddev: Optional[float] = None
    p25: Optional[float] = None
    median: Optional[float] = None
    p75: Optional[float] = None


class CategoricalSummaryModel(BaseModel):
    name: str
    type: Literal["categorical"]
    count: int
    null_count: int
    distinct_count: int
    top: Optional[str] = None
    top_count: int = 0


ColumnSummaryModel = Union[NumericSummaryModel, CategoricalSummaryModel]


class SummaryResponse(BaseModel):
    rows: int
    columns: list[ColumnSummaryModel] = Field(default_factory=list)


class ColumnInfo(BaseModel):
    name: str
    type: str


class ColumnsResponse(BaseModel):
    columns: list[ColumnInfo]


class HealthResponse(BaseModel):
    status: str
    loaded: bool
    generation: int
    source: Optional[str] = None
    loaded_at: Optional[str] = None
    rows: int
    columns: int


class ErrorResponse(BaseModel):
    detail: str
    error: str
