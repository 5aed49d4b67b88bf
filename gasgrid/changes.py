"""
Change detection between two snapshots. A change is (x, y, new kind id); the list
follows row-major scan order so it is stable for callers and tests.
"""

import logging
from typing import Iterable, NamedTuple

import numpy as np

from gasgrid.grid import Grid
from gasgrid.registry import GasRegistry

logger = logging.getLogger(__name__)


class ChangedCell(NamedTuple):
    x: int
    y: int
    kind: int


def full_changes(grid: Grid) -> list[ChangedCell]:
    """Every cell of grid as a change, row-major."""
    return [ChangedCell(int(x), int(y), int(k)) for (y, x), k in np.ndenumerate(grid.kinds)]


def diff(old: Grid, new: Grid) -> list[ChangedCell]:
    """
    Cells of new whose kind differs from old. Grids of different shape cannot be
    compared cell by cell, so the whole of new comes back instead. Empty list = no change.
    """
    if old.shape != new.shape:
        logger.info("Shape mismatch %s -> %s; returning full grid", old.shape, new.shape)
        return full_changes(new)
    ys, xs = np.nonzero(old.kinds != new.kinds)
    kinds = new.kinds[ys, xs]
    return [ChangedCell(int(x), int(y), int(k)) for y, x, k in zip(ys, xs, kinds)]


def apply_changes(grid: Grid, changes: Iterable[ChangedCell]) -> Grid:
    """New grid with changes written over grid. Re-applying the same changes is a no-op."""
    out = grid.kinds.copy()
    for x, y, kind in changes:
        out[y, x] = kind
    return Grid(out)


def changes_to_records(changes: Iterable[ChangedCell], registry: GasRegistry) -> list[dict]:
    """Coordinate-tagged wire form, same shape as Grid.to_records."""
    records = []
    for x, y, kind_id in changes:
        kind = registry.lookup(kind_id)
        records.append({"cell": {"gasName": kind.name, "gasColor": kind.color}, "x": x, "y": y})
    return records
