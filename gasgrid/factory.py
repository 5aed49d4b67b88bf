"""Initial grids. Random content comes from a random.Random so a seed reproduces the same grid.
Seed -1 = new random seed each call."""

import random

import numpy as np

from gasgrid.grid import Grid
from gasgrid.registry import GasRegistry


def resolve_seed(seed: int) -> int:
    """Return seed, or a fresh one when seed == -1."""
    if seed == -1:
        return random.randint(0, 2**31 - 1)
    return seed


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"grid size must be positive, got {width}x{height}")


def create_grid(width: int, height: int, registry: GasRegistry, rng: random.Random | None = None) -> Grid:
    """Each position, row-major, gets a kind drawn uniformly from the registry."""
    _check_size(width, height)
    rng = rng or random.Random()
    kinds = np.empty((height, width), dtype=np.int32)
    for y in range(height):
        for x in range(width):
            kinds[y, x] = registry.random_kind(rng).id
    return Grid(kinds)


def filled_grid(width: int, height: int, kind_id: int) -> Grid:
    _check_size(width, height)
    return Grid(np.full((height, width), kind_id, dtype=np.int32))
