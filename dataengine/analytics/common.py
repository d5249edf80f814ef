"""
Safe numeric helpers used by the pagination and summary engines.
"""
from __future__ import annotations

import math

import numpy as np


def parse_int(value, default: int | None = None) -> int | None:
    """Parse an int from an int or a string query value; default if unparsable."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, np.integer)):
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def finite_or_none(value) -> float | None:
    """Native float for finite numbers, None for NaN/inf/missing."""
    if value is None:
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None

