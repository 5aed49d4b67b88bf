"""
Grid snapshot stores. One latest snapshot per store; load() with nothing saved hands
back a freshly built grid. That grid is kept until the next save or clear, so repeated
loads before the first save see the same grid. The JSON store keeps the snapshot as
{"width", "height", "cells": [...]} in a single file.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Callable, Protocol

from gasgrid import Grid, GasRegistry, InvalidGrid, UnknownKind

logger = logging.getLogger(__name__)


class StoreUnavailable(RuntimeError):
    """The backing store could not be read, written or cleared."""


class GridStore(Protocol):
    def load(self) -> Grid: ...

    def save(self, grid: Grid) -> None: ...

    def clear(self) -> None: ...


class MemoryGridStore:
    """Keeps the latest snapshot in process memory."""

    def __init__(self, factory: Callable[[], Grid]) -> None:
        self._factory = factory
        self._grid: Grid | None = None
        self._lock = threading.Lock()

    def load(self) -> Grid:
        with self._lock:
            if self._grid is None:
                self._grid = self._factory()
            return self._grid

    def save(self, grid: Grid) -> None:
        with self._lock:
            self._grid = grid

    def clear(self) -> None:
        with self._lock:
            self._grid = None


class JsonGridStore:
    """Snapshot in one JSON file. Saves go through a temp file + rename so a crash leaves the old one."""

    def __init__(self, path: Path | str, registry: GasRegistry, factory: Callable[[], Grid]) -> None:
        self.path = Path(path)
        self._registry = registry
        self._factory = factory
        # First-run grid, built once and not written until someone saves it.
        self._fresh: Grid | None = None

    def _first_run(self) -> Grid:
        if self._fresh is None:
            self._fresh = self._factory()
        return self._fresh

    def load(self) -> Grid:
        try:
            raw = self.path.read_text()
        except FileNotFoundError:
            logger.debug("No snapshot at %s; using a new grid", self.path)
            return self._first_run()
        except OSError as e:
            raise StoreUnavailable(f"cannot read {self.path}") from e
        try:
            return Grid.from_dict(json.loads(raw), self._registry)
        except (ValueError, InvalidGrid, UnknownKind) as e:
            logger.warning("Discarding unreadable snapshot %s: %s", self.path, e)
            return self._first_run()

    def save(self, grid: Grid) -> None:
        payload = json.dumps(grid.to_dict(self._registry))
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload)
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp.exists():
                tmp.unlink()
            raise StoreUnavailable(f"cannot write {self.path}") from e
        self._fresh = None
        logger.debug("Saved %dx%d snapshot to %s", grid.width, grid.height, self.path)

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StoreUnavailable(f"cannot remove {self.path}") from e
        self._fresh = None
        logger.info("Snapshot store cleared")
