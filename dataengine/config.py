"""
Data Engine — Configuration: server, pagination, parsing and export settings.
"""
from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Server — override with DATA_ENGINE_* env vars for deployment
# ---------------------------------------------------------------------------
HOST = os.environ.get("DATA_ENGINE_HOST", "0.0.0.0")
PORT = int(os.environ.get("DATA_ENGINE_PORT", "8080"))

# Optional CSV loaded into the store at startup
PRELOAD_CSV = os.environ.get("DATA_ENGINE_CSV") or None

LOG_LEVEL = os.environ.get("DATA_ENGINE_LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Pagination window
# ---------------------------------------------------------------------------
DEFAULT_PAGE_LIMIT = int(os.environ.get("DATA_ENGINE_DEFAULT_LIMIT", "100"))
MAX_PAGE_LIMIT = int(os.environ.get("DATA_ENGINE_MAX_LIMIT", "1000"))

# ---------------------------------------------------------------------------
# CSV parsing
# ---------------------------------------------------------------------------
# Cell tokens read as missing values (compared after stripping whitespace)
DEFAULT_NULL_VALUES = ("", "NA", "NaN", "<nil>")


def parse_null_values(raw: str | None) -> frozenset[str]:
    """Comma-separated null tokens, each stripped. The empty cell is always null."""
    if raw is None:
        return frozenset(DEFAULT_NULL_VALUES)
    return frozenset(t.strip() for t in raw.split(",")) | {""}


NULL_VALUES = parse_null_values(os.environ.get("DATA_ENGINE_NULL_VALUES"))

CSV_ENCODING = "utf-8-sig"

# ---------------------------------------------------------------------------
# Excel export
# ---------------------------------------------------------------------------
EXPORT_FOLDER = Path(os.environ.get("DATA_ENGINE_EXPORT_DIR", str(Path.cwd() / "exports")))
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
