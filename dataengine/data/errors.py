"""
Data Engine exception hierarchy.

Each error carries a stable ``kind`` (reported to API clients) and the HTTP
status the adapter maps it to.
"""
from __future__ import annotations


class DataEngineError(Exception):
    """Base exception for all data engine failures."""

    kind = "DataEngineError"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(DataEngineError):
    """Raised for a malformed query or load payload."""

    kind = "InvalidRequest"
    status_code = 400


class NotLoadedError(DataEngineError):
    """Raised when data is queried before any successful load."""

    kind = "NotLoaded"
    status_code = 404

    def __init__(self, message: str = "No data loaded") -> None:
        super().__init__(message)


class LoadError(DataEngineError):
    """Base for CSV load failures. A failed load never touches the store."""

    kind = "LoadError"


class SourceIOError(LoadError):
    """Raised when the CSV source cannot be opened or read."""

    kind = "IOFailure"


class CsvSyntaxError(LoadError):
    """Raised for CSV text that cannot be parsed (bad quoting, bad encoding)."""

    kind = "SyntaxError"

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class MalformedRowError(LoadError):
    """Raised when a row's field count differs from the header's."""

    kind = "MalformedRow"

    def __init__(self, line: int, expected: int, actual: int) -> None:
        super().__init__(f"line {line}: expected {expected} fields, got {actual}")
        self.line = line
        self.expected = expected
        self.actual = actual


class DuplicateColumnError(LoadError):
    """Raised when the header names the same column twice."""

    kind = "DuplicateColumn"

    def __init__(self, name: str) -> None:
        super().__init__(f"duplicate column name: {name!r}")
        self.name = name
