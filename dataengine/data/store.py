"""
DataStore — holds the single resident Dataset behind a read/write lock.

Loaded on demand, queried on every request. Readers take a snapshot (a
reference to the current Dataset) and work on it without further locking;
a load swaps the reference wholesale, so a reader's snapshot never changes
under it.
"""
from __future__ import annotations

import datetime as dt
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from dataengine.data.errors import NotLoadedError
from dataengine.data.loader import load_csv_path
from dataengine.data.schemas import Dataset, StoreInfo
from dataengine.logging_config import get_logger

logger = get_logger(__name__)


class ReadWriteLock:
    """Shared/exclusive lock with writer preference.

    Any number of readers may hold the lock together; a writer holds it alone.
    Once a writer is waiting, new readers queue behind it.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            except BaseException:
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class DataStore:
    """The current Dataset (or nothing, before the first successful load)."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._dataset: Optional[Dataset] = None
        self._generation = 0
        self._loaded_at: Optional[dt.datetime] = None

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def replace(self, dataset: Dataset) -> int:
        """Install ``dataset`` as the current one and return its generation.

        Snapshots taken after this returns see ``dataset`` (or a later one);
        snapshots taken before keep the previous Dataset.
        """
        with self._lock.write_locked():
            self._dataset = dataset
            self._generation += 1
            self._loaded_at = dt.datetime.now(dt.timezone.utc)
            generation = self._generation
        logger.info(
            "Installed dataset generation %d: %d rows from %s",
            generation, dataset.row_count, dataset.source or "<stream>",
        )
        return generation

    def load(self, path: str | Path) -> tuple[Dataset, int]:
        """Read a CSV from disk and install it. Returns the Dataset and its generation.

        File I/O and parsing happen before the lock is touched; on any
        LoadError the current Dataset stays in place.
        """
        dataset = load_csv_path(path)
        return dataset, self.replace(dataset)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def snapshot(self) -> Dataset:
        """Return the current Dataset, or raise NotLoadedError."""
        with self._lock.read_locked():
            dataset = self._dataset
        if dataset is None:
            raise NotLoadedError()
        return dataset

    def info(self) -> StoreInfo:
        with self._lock.read_locked():
            dataset = self._dataset
            generation = self._generation
            loaded_at = self._loaded_at
        if dataset is None:
            return StoreInfo(loaded=False)
        return StoreInfo(
            loaded=True,
            generation=generation,
            source=dataset.source,
            loaded_at=loaded_at,
            rows=dataset.row_count,
            columns=len(dataset.columns),
        )
