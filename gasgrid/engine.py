"""
Per-tick update: vertical density ordering. Lighter gas rises, denser gas sinks.

Every comparison reads the pre-step snapshot. Cells are visited in row-major order
(top row first) and each cell takes part in at most one swap per tick: the first
swap to claim a cell wins, later claims on it are dropped. For each unclaimed cell,
swapping up (denser gas above) is tried before swapping down (lighter gas below).
Columns never interact, so a whole row is decided at once with numpy masks; that
matches a cell-by-cell row-major scan exactly.
"""

import numpy as np

from gasgrid.constants import ABOVE, BELOW
from gasgrid.grid import Grid
from gasgrid.registry import GasRegistry


def _swap_rows(out: np.ndarray, src: np.ndarray, y: int, other: int, mask: np.ndarray) -> None:
    """Swap rows y and other in out (values from src) for columns where mask is set."""
    out[y, mask] = src[other, mask]
    out[other, mask] = src[y, mask]


def step(grid: Grid, registry: GasRegistry) -> Grid:
    """One tick. Returns a new Grid; the input is untouched."""
    src = grid.kinds
    height, width = src.shape
    out = src.copy()
    if height < 2 or width == 0:
        return Grid(out)
    density = registry.densities(src)
    claimed = np.zeros((height, width), dtype=bool)
    for y in range(height):
        d = density[y]
        free = ~claimed[y]
        up = y + ABOVE
        if up >= 0:
            rise = free & ~claimed[up] & (density[up] > d)
            _swap_rows(out, src, y, up, rise)
            claimed[y] |= rise
            claimed[up] |= rise
            free &= ~rise
        down = y + BELOW
        if down < height:
            sink = free & ~claimed[down] & (density[down] < d)
            _swap_rows(out, src, y, down, sink)
            claimed[y] |= sink
            claimed[down] |= sink
    return Grid(out)


def run(grid: Grid, registry: GasRegistry, ticks: int) -> Grid:
    for _ in range(ticks):
        grid = step(grid, registry)
    return grid


def is_settled(grid: Grid, registry: GasRegistry) -> bool:
    """True when another tick would change nothing."""
    return step(grid, registry) == grid
