"""
Logging setup shared by the loader, store and API layers.
"""
from __future__ import annotations

import logging

from dataengine.config import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger with a stream handler attached to the package root."""
    root = logging.getLogger("dataengine")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL)
        root.propagate = False
    return logging.getLogger(name)
