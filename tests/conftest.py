"""Pytest configuration: project root on sys.path, CSV fixtures.

This ensures that ``import dataengine`` works when tests are run from the
repository root or other locations.
"""

import os
import sys

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from dataengine.data.loader import load_csv  # noqa: E402

PEOPLE_CSV = "name,age\nAlice,30\nBob,\nCarol,25\n"


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a CSV file under tmp_path and return its path."""
    def _write(text: str, name: str = "data.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def people_csv(write_csv):
    return write_csv(PEOPLE_CSV, "people.csv")


@pytest.fixture
def people():
    return load_csv(PEOPLE_CSV.encode(), source_name="people.csv")
