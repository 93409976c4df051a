"""Persistent storage for the last fetched exchange-rate document.

A rate cache holds raw bytes and reports how long ago they were written, so
the refresher can decide whether cached rates are still fresh.

Classes:
    RateCache: Protocol implemented by every cache.
    FileRateCache: Cache backed by a file in the per-user data directory.
    MemoryRateCache: In-process cache with an injectable clock.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from typing import Protocol

from measurekit.errors import ConversionFailure


class RateCache(Protocol):
    def read(self) -> bytes: ...

    def write(self, data: bytes) -> None: ...

    def age(self) -> timedelta: ...


class FileRateCache:
    """Exchange-rate document stored as a file.

    The file's modification time is the time of the last update. Writes go
    through a temporary file and an atomic replace, so readers never see a
    partially written document.

    Args:
        path: File holding the document; parent directories are created on
            first write.
        clock: Returns the current time in seconds since the epoch.
    """

    def __init__(self, path: Path | str, clock: Callable[[], float] = time.time):
        self.path = Path(path)
        self._clock = clock

    def read(self) -> bytes:
        """Return the cached document, or empty bytes if there is none.

        Raises:
            ConversionFailure: If the file exists but cannot be read.
        """
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return b""
        except OSError as exc:
            msg = f"cannot read rate cache {self.path}: {exc}"
            raise ConversionFailure(msg) from exc

    def write(self, data: bytes) -> None:
        """Replace the cached document.

        Raises:
            ConversionFailure: If the file cannot be written.
        """
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, self.path)
        except OSError as exc:
            msg = f"cannot write rate cache {self.path}: {exc}"
            raise ConversionFailure(msg) from exc

    def age(self) -> timedelta:
        """Time since the last write; ``timedelta.max`` if never written."""
        try:
            modified = self.path.stat().st_mtime
        except OSError:
            return timedelta.max
        return timedelta(seconds=max(0.0, self._clock() - modified))


class MemoryRateCache:
    """Rate cache kept in memory, mostly for tests and short-lived processes."""

    def __init__(self, data: bytes = b"", clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._data = data
        self._written_at = clock() if data else None

    def read(self) -> bytes:
        return self._data

    def write(self, data: bytes) -> None:
        self._data = data
        self._written_at = self._clock()

    def age(self) -> timedelta:
        if self._written_at is None:
            return timedelta.max
        return timedelta(seconds=max(0.0, self._clock() - self._written_at))
