"""
ExcelWriter — high-level helpers for building styled Excel workbooks.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from dataengine.excel.styles import TITLE_FONT, SUBTITLE_FONT
from dataengine.excel.formatters import (
    clean_text,
    format_header_row,
    format_data_cell,
    auto_column_width,
)


ColSpec = tuple[str, str]  # (label, col_type)


class ExcelWriter:
    """Fluent builder for styled Excel workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    # ------------------------------------------------------------------
    # Sheet management
    # ------------------------------------------------------------------

    def add_sheet(self, title: str) -> Worksheet:
        """Create a new worksheet (re-uses the default sheet for the first call)."""
        if self._first_sheet:
            ws = self.wb.active
            ws.title = title
            self._first_sheet = False
        else:
            ws = self.wb.create_sheet(title=title)
        return ws

    # ------------------------------------------------------------------
    # Title block
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str) -> int:
        """Write title + subtitle rows. Returns next available row."""
        ws.cell(row=1, column=1).value = clean_text(title)
        ws.cell(row=1, column=1).font = TITLE_FONT
        ws.cell(row=2, column=1).value = clean_text(subtitle)
        ws.cell(row=2, column=1).font = SUBTITLE_FONT
        return 4

    # ------------------------------------------------------------------
    # Data tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: Sequence[ColSpec],
        rows: Sequence[Sequence],
        freeze: bool = True,
    ) -> int:
        """Write a header row plus one row per entry of ``rows``.

        Returns the row number after the last data row.
        """
        for col_num, (label, _) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col_num).value = clean_text(label)
        format_header_row(ws, start_row, len(columns))

        row = start_row + 1
        for values in rows:
            for col_num, ((_, col_type), val) in enumerate(zip(columns, values), 1):
                format_data_cell(ws, row, col_num, val, col_type)
            row += 1

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = f"A{start_row + 1}"

        return row

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Save the workbook to disk."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path

    def to_bytes(self) -> bytes:
        """Serialize the workbook in memory (for HTTP responses)."""
        buf = io.BytesIO()
        self.wb.save(buf)
        return buf.getvalue()
