"""
CSV loading: parse a header + rows source into an immutable Dataset with inferred column types.
"""
from __future__ import annotations

import csv
import io
import math
import sys
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np
import pandas as pd

from dataengine.config import CSV_ENCODING, NULL_VALUES
from dataengine.data.errors import (
    CsvSyntaxError,
    DuplicateColumnError,
    MalformedRowError,
    SourceIOError,
)
from dataengine.data.schemas import Column, ColumnType, Dataset
from dataengine.logging_config import get_logger

logger = get_logger(__name__)

Source = Union[bytes, bytearray, BinaryIO]

# Lift the csv module's 128 KiB per-field cap; sys.maxsize overflows a C long on some platforms.
_field_limit = sys.maxsize
while True:
    try:
        csv.field_size_limit(_field_limit)
        break
    except OverflowError:
        _field_limit //= 10


# ---------------------------------------------------------------------------
# Reading & decoding
# ---------------------------------------------------------------------------

def _read_bytes(source: Source) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    try:
        return source.read()
    except OSError as exc:
        raise SourceIOError(f"failed to read CSV source: {exc}") from exc


def _decode(data: bytes) -> str:
    try:
        return data.decode(CSV_ENCODING)
    except UnicodeDecodeError as exc:
        raise CsvSyntaxError(f"source is not valid UTF-8 text ({exc.reason} at byte {exc.start})") from exc


def _parse_records(text: str) -> tuple[list[str], list[list[str]]]:
    """Split CSV text into (header, rows). Blank lines are skipped.

    Every row must have exactly as many fields as the header.
    """
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    rows: list[list[str]] = []
    try:
        header = next(reader, None)
        while header == []:
            header = next(reader, None)
        if header is None:
            return [], rows

        width = len(header)
        for record in reader:
            if not record:
                continue
            if len(record) != width:
                raise MalformedRowError(reader.line_num, width, len(record))
            rows.append(record)
    except csv.Error as exc:
        raise CsvSyntaxError(str(exc), line=reader.line_num) from exc
    return header, rows


def _check_header(header: list[str]) -> None:
    seen: set[str] = set()
    for name in header:
        if name in seen:
            raise DuplicateColumnError(name)
        seen.add(name)


# ---------------------------------------------------------------------------
# Type inference
# ---------------------------------------------------------------------------

def parse_number(token: str) -> float | None:
    """Parse a stripped cell as a finite number, or return None."""
    if "_" in token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _build_column(name: str, raw: tuple[str, ...] | list[str]) -> tuple[Column, pd.Series]:
    """Infer one column's type and build its storage series.

    A column is numeric iff every non-null cell parses as a number. A column
    with no non-null cells is numeric.
    """
    numbers: list[float] = []
    texts: list[str | None] = []
    numeric = True
    for cell in raw:
        token = cell.strip()
        if token in NULL_VALUES:
            numbers.append(np.nan)
            texts.append(None)
            continue
        texts.append(cell)
        if numeric:
            value = parse_number(token)
            if value is None:
                numeric = False
            else:
                numbers.append(value)

    if numeric:
        column = Column(name, ColumnType.NUMERIC)
        series = pd.Series(np.array(numbers, dtype=np.float64), name=name)
    else:
        column = Column(name, ColumnType.CATEGORICAL)
        series = pd.Series(texts, dtype=object, name=name)
    return column, series


# ---------------------------------------------------------------------------
# Public loaders
# ---------------------------------------------------------------------------

def load_csv(source: Source, source_name: str | None = None) -> Dataset:
    """Parse CSV bytes (or a binary stream) into a Dataset.

    An empty source gives a Dataset with no columns; a header-only source gives
    defined columns and zero rows. Raises a LoadError subclass on any failure,
    never a partial result.
    """
    text = _decode(_read_bytes(source))
    header, rows = _parse_records(text)
    _check_header(header)

    by_column = list(zip(*rows)) if rows else [() for _ in header]
    columns: list[Column] = []
    data: dict[str, pd.Series] = {}
    for name, raw in zip(header, by_column):
        column, series = _build_column(name, raw)
        columns.append(column)
        data[name] = series

    frame = pd.DataFrame(data, index=pd.RangeIndex(len(rows)))
    dataset = Dataset(columns=tuple(columns), frame=frame, source=source_name)

    numeric = sum(1 for c in columns if c.is_numeric)
    logger.info(
        "Loaded %s: %d rows x %d columns (%d numeric, %d categorical)",
        source_name or "<stream>", dataset.row_count, len(columns), numeric, len(columns) - numeric,
    )
    return dataset


def load_csv_path(path: str | Path) -> Dataset:
    """Read a CSV file from disk into a Dataset.

    Relative paths resolve against the server's working directory.
    """
    path = Path(path).expanduser()
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SourceIOError(f"failed to open {path}: {exc.strerror or exc}") from exc
    return load_csv(data, source_name=str(path))
