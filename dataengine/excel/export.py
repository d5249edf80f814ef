"""
Workbook export: a Summary sheet and one page of rows on a Data sheet.
"""
from __future__ import annotations

from pathlib import Path

from dataengine.analytics.pagination import page
from dataengine.analytics.summary import summarize
from dataengine.data.schemas import ColumnType, Dataset
from dataengine.excel.writer import ExcelWriter

SUMMARY_COLUMNS = [
    ("name", "Column", "text"),
    ("type", "Type", "text"),
    ("count", "Count", "number"),
    ("null_count", "Nulls", "number"),
    ("min", "Min", "decimal"),
    ("max", "Max", "decimal"),
    ("mean", "Mean", "decimal"),
    ("stddev", "Std Dev (sample)", "decimal"),
    ("p25", "25%", "decimal"),
    ("median", "Median", "decimal"),
    ("p75", "75%", "decimal"),
    ("distinct_count", "Distinct", "number"),
    ("top", "Top Value", "text"),
    ("top_count", "Top Count", "number"),
]


def build_workbook(dataset: Dataset, start=None, limit=None) -> ExcelWriter:
    writer = ExcelWriter()
    source = dataset.source or "<stream>"

    ws = writer.add_sheet("Summary")
    row = writer.write_title(
        ws, "Column Summary", f"{source} — {dataset.row_count:,} rows, {len(dataset.columns)} columns",
    )
    summaries = [s.to_dict() for s in summarize(dataset)]
    writer.write_table(
        ws,
        row,
        [(label, col_type) for _, label, col_type in SUMMARY_COLUMNS],
        [[s.get(key) for key, _, _ in SUMMARY_COLUMNS] for s in summaries],
    )

    result = page(dataset, start, limit)
    ws = writer.add_sheet("Data")
    last = result.start + len(result.rows) - 1
    row = writer.write_title(
        ws, "Data", f"Rows {result.start:,}–{last:,} of {result.total:,}" if result.rows else "No rows in range",
    )
    col_types = ["decimal" if c.inferred_type == ColumnType.NUMERIC else "text" for c in dataset.columns]
    writer.write_table(ws, row, list(zip(result.columns, col_types)), result.rows)
    return writer


def export_workbook(dataset: Dataset, path: str | Path | None = None, start=None, limit=None) -> Path | bytes:
    """Save the workbook to ``path``, or return its bytes when no path is given."""
    writer = build_workbook(dataset, start, limit)
    if path is None:
        return writer.to_bytes()
    return writer.save(path)
