"""Data loading, table schemas, and the in-memory dataset store."""
from .errors import (
    DataEngineError, InvalidRequestError, NotLoadedError, LoadError,
    SourceIOError, CsvSyntaxError, MalformedRowError, DuplicateColumnError,
)
from .loader import load_csv, load_csv_path
from .schemas import Cell, Column, ColumnType, Dataset, PageResult, NumericSummary, CategoricalSummary, StoreInfo
from .store import DataStore, ReadWriteLock
