"""
Table schemas: cells, columns, datasets, and the result shapes of page/summary queries.
"""
from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

import pandas as pd

# Null | Number | Text
Cell = Union[None, float, str]


class ColumnType(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


@dataclass(frozen=True)
class Column:
    name: str
    inferred_type: ColumnType

    @property
    def is_numeric(self) -> bool:
        return self.inferred_type == ColumnType.NUMERIC


def to_cell(value) -> Cell:
    """Convert a stored frame value to a Cell (NaN and None both become Null)."""
    if value is None:
        return None
    if isinstance(value, float):
        return None if math.isnan(value) else float(value)
    return str(value)


@dataclass(frozen=True, eq=False)
class Dataset:
    """An immutable in-memory table loaded from one CSV source.

    Numeric columns are stored as float64 (NaN marks a null cell), categorical
    columns as object holding str or None. Nothing may write to ``frame``
    after construction; callers only read it.
    """
    columns: tuple[Column, ...]
    frame: pd.DataFrame = field(repr=False)
    source: Optional[str] = None

    @property
    def row_count(self) -> int:
        return len(self.frame)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def rows(self, start: int = 0, stop: int | None = None) -> list[list[Cell]]:
        """Rows in [start, stop) as lists of Cells, in source order."""
        window = self.frame.iloc[start:stop]
        return [
            [to_cell(v) for v in values]
            for values in window.itertuples(index=False, name=None)
        ]


# ---------------------------------------------------------------------------
# Query results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PageResult:
    """A bounded window of rows plus the effective parameters used."""
    columns: list[str]
    rows: list[list[Cell]]
    total: int
    start: int
    limit: int

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class NumericSummary:
    name: str
    count: int
    null_count: int
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    stddev: Optional[float] = None       # sample (ddof=1)
    p25: Optional[float] = None
    median: Optional[float] = None
    p75: Optional[float] = None
    type: ColumnType = ColumnType.NUMERIC

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type.value,
            "count": self.count,
            "null_count": self.null_count,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "stddev": self.stddev,
            "p25": self.p25,
            "median": self.median,
            "p75": self.p75,
        }


@dataclass(frozen=True)
class CategoricalSummary:
    name: str
    count: int
    null_count: int
    distinct_count: int
    top: Optional[str] = None            # most frequent value, smallest on ties
    top_count: int = 0
    type: ColumnType = ColumnType.CATEGORICAL

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type.value,
            "count": self.count,
            "null_count": self.null_count,
            "distinct_count": self.distinct_count,
            "top": self.top,
            "top_count": self.top_count,
        }


ColumnSummary = Union[NumericSummary, CategoricalSummary]


@dataclass(frozen=True)
class StoreInfo:
    """Point-in-time description of the store for health checks."""
    loaded: bool
    generation: int = 0
    source: Optional[str] = None
    loaded_at: Optional[dt.datetime] = None
    rows: int = 0
    columns: int = 0

    @property
    def label(self) -> str:
        if not self.loaded:
            return "empty"
        return f"{self.rows:,} rows x {self.columns} columns from {self.source or '<stream>'}"
