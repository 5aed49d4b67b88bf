"""
Fetch / advance / reset on top of a grid store. One advance = load, step, diff, save.
Advances and resets are serialized per service so overlapping callers don't lose ticks.
"""

import logging
import threading
from typing import NamedTuple

from gasgrid import ChangedCell, Grid, GasRegistry, diff, step
from store import GridStore

logger = logging.getLogger(__name__)


class StepResult(NamedTuple):
    previous: Grid
    current: Grid
    changes: list[ChangedCell]

    @property
    def is_full(self) -> bool:
        """No changes to send, so the response is the whole grid."""
        return not self.changes

    @property
    def response(self) -> list[ChangedCell] | Grid:
        """Changed cells, or the pre-step grid when nothing changed."""
        return self.changes if self.changes else self.previous


class GridService:
    def __init__(self, store: GridStore, registry: GasRegistry) -> None:
        self.store = store
        self.registry = registry
        self._lock = threading.Lock()

    def fetch(self) -> Grid:
        return self.store.load()

    def advance(self) -> StepResult:
        with self._lock:
            grid = self.store.load()
            logger.debug("Simulating %dx%d grid", grid.width, grid.height)
            new_grid = step(grid, self.registry)
            changes = diff(grid, new_grid)
            self.store.save(new_grid)
        logger.info("Tick: %d changed cell(s)", len(changes))
        return StepResult(grid, new_grid, changes)

    def reset(self) -> None:
        with self._lock:
            self.store.clear()
