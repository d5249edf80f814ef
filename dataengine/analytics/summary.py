"""
Per-column descriptive statistics.

Numeric columns: count, null_count, min, max, mean, sample stddev (ddof=1),
quartiles. Categorical columns: count, null_count, distinct_count and the most
frequent value. Aggregates over zero values are None, never NaN.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from dataengine.analytics.common import finite_or_none
from dataengine.data.schemas import (
    CategoricalSummary,
    Column,
    ColumnSummary,
    Dataset,
    NumericSummary,
)


def _stable(values: pd.Series, stat):
    """``stat(values)``, recomputed on values scaled into [-1, 1] when the direct
    result overflows. Intermediate sums of values near the float limit overflow
    even when the statistic itself is representable."""
    result = stat(values)
    if np.isfinite(np.asarray(result, dtype=float)).all():
        return result
    scale = float(values.abs().max())
    if not scale or finite_or_none(scale) is None:
        return result
    return stat(values / scale) * scale


def summarize_numeric(name: str, series: pd.Series) -> NumericSummary:
    values = series.dropna()
    count = int(len(values))
    null_count = int(len(series) - count)
    if count == 0:
        return NumericSummary(name=name, count=0, null_count=null_count)

    q = _stable(values, lambda v: v.quantile([0.25, 0.5, 0.75]))
    return NumericSummary(
        name=name,
        count=count,
        null_count=null_count,
        min=finite_or_none(values.min()),
        max=finite_or_none(values.max()),
        mean=finite_or_none(_stable(values, lambda v: v.mean())),
        # sample stddev is undefined for a single value
        stddev=finite_or_none(_stable(values, lambda v: v.std(ddof=1))) if count > 1 else None,
        p25=finite_or_none(q.loc[0.25]),
        median=finite_or_none(q.loc[0.5]),
        p75=finite_or_none(q.loc[0.75]),
    )


def summarize_categorical(name: str, series: pd.Series) -> CategoricalSummary:
    values = series.dropna()
    count = int(len(values))
    null_count = int(len(series) - count)
    if count == 0:
        return CategoricalSummary(name=name, count=0, null_count=null_count, distinct_count=0)

    freq = values.value_counts(sort=False)
    top_count = int(freq.max())
    top = min(str(v) for v in freq[freq == top_count].index)
    return CategoricalSummary(
        name=name,
        count=count,
        null_count=null_count,
        distinct_count=int(len(freq)),
        top=top,
        top_count=top_count,
    )


def summarize_column(dataset: Dataset, column: Column) -> ColumnSummary:
    series = dataset.frame[column.name]
    if column.is_numeric:
        return summarize_numeric(column.name, series)
    return summarize_categorical(column.name, series)


def summarize(dataset: Dataset) -> list[ColumnSummary]:
    """One summary per column, in column order."""
    return [summarize_column(dataset, c) for c in dataset.columns]
