"""
Pagination — bounded, ordered row windows over a Dataset.
"""
from __future__ import annotations

from dataengine.analytics.common import parse_int
from dataengine.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from dataengine.data.schemas import Dataset, PageResult


def clamp_page_params(
    start=None,
    limit=None,
    default_limit: int = DEFAULT_PAGE_LIMIT,
    max_limit: int = MAX_PAGE_LIMIT,
) -> tuple[int, int]:
    """Normalise raw (start, limit) values, which may be ints, strings or None.

    start: negative or unparsable -> 0.
    limit: missing, unparsable or non-positive -> default; above max -> max.
    """
    s = parse_int(start, 0)
    if s < 0:
        s = 0

    n = parse_int(limit, default_limit)
    if n <= 0:
        n = default_limit
    n = min(n, max_limit)
    return s, n


def page(dataset: Dataset, start=None, limit=None) -> PageResult:
    """Rows [start, min(start + limit, total)) of the dataset.

    A start at or past the end gives an empty window with the true total.
    """
    s, n = clamp_page_params(start, limit)
    total = dataset.row_count
    end = min(s + n, total)
    rows = dataset.rows(s, end) if s < end else []
    return PageResult(
        columns=dataset.column_names,
        rows=rows,
        total=total,
        start=s,
        limit=n,
    )
