"""Tests for the step engine.

Validates:
- Vertical ordering: denser gas sinks, lighter gas rises
- First-claim-wins conflict rule in row-major scan order
- Determinism, cardinality preservation and input immutability
- Fixed points (uniform columns, all-empty grid)
- Boundary rows and degenerate shapes
- Unknown kinds ordered as density 0
"""

import random

import numpy as np
import pytest

from gasgrid import Grid, create_grid, default_registry, is_settled, run, step


@pytest.fixture
def registry():
    return default_registry()


def _column(*kinds: int) -> Grid:
    """Single-column grid, kinds listed top to bottom. Default kind ids equal their densities."""
    return Grid([[k] for k in kinds])


class TestOrdering:
    """Single-tick swap decisions."""

    def test_dense_over_light_then_settling(self, registry):
        """[5, 1, 3] top to bottom: 5 swaps down with 1; 3 is blocked because 5 already moved."""
        new = step(_column(5, 1, 3), registry)
        assert new.column(0) == [1, 5, 3]

    def test_second_tick_continues_sinking(self, registry):
        """[1, 5, 3] -> [1, 3, 5], which is settled."""
        new = step(_column(1, 5, 3), registry)
        assert new.column(0) == [1, 3, 5]
        assert is_settled(new, registry)

    def test_empty_rises(self, registry):
        """Empty (density 0) under a gas trades places with it."""
        assert step(_column(3, 0), registry).column(0) == [0, 3]

    def test_sorted_column_is_fixed(self, registry):
        g = _column(0, 1, 2, 3, 4, 5)
        assert step(g, registry) == g

    def test_first_claim_wins(self, registry):
        """[3, 2, 1]: the top pair swaps; the middle cell is then taken and 1 stays put."""
        assert step(_column(3, 2, 1), registry).column(0) == [2, 3, 1]

    def test_lower_pair_swaps_when_upper_is_ordered(self, registry):
        assert step(_column(1, 3, 2), registry).column(0) == [1, 2, 3]

    def test_columns_are_independent(self, registry):
        g = Grid([[5, 0, 2], [1, 0, 4], [3, 0, 4]])
        new = step(g, registry)
        assert new.column(0) == [1, 5, 3]
        assert new.column(1) == [0, 0, 0]
        assert new.column(2) == [2, 4, 4]

    def test_equal_densities_never_swap(self, registry):
        """A uniform column is a fixed point."""
        g = _column(4, 4, 4, 4)
        assert step(g, registry) == g


class TestInvariants:
    """Properties that hold for every grid."""

    def _random_grid(self, registry, seed=7, width=12, height=9):
        return create_grid(width, height, registry, random.Random(seed))

    def test_deterministic(self, registry):
        g = self._random_grid(registry)
        assert step(g, registry) == step(g, registry)

    def test_shape_preserved(self, registry):
        g = self._random_grid(registry)
        new = step(g, registry)
        assert new.shape == g.shape
        assert new.size == g.size

    def test_columns_keep_their_gases(self, registry):
        """Swaps are vertical, so every column keeps the same multiset of kinds."""
        g = self._random_grid(registry)
        new = step(g, registry)
        for x in range(g.width):
            assert sorted(new.column(x)) == sorted(g.column(x))

    def test_input_not_modified(self, registry):
        g = self._random_grid(registry)
        before = g.kinds.copy()
        step(g, registry)
        assert np.array_equal(g.kinds, before)

    def test_all_empty_grid_unchanged(self, registry):
        g = Grid(np.zeros((10, 10), dtype=np.int32))
        assert step(g, registry) == g

    def test_converges_to_sorted_columns(self, registry):
        """Repeated ticks leave every column with density non-decreasing downward."""
        g = run(self._random_grid(registry, height=10), registry, 100)
        assert is_settled(g, registry)
        dens = registry.densities(g.kinds)
        assert np.all(np.diff(dens, axis=0) >= 0)


class TestBoundaries:
    """Edge rows and degenerate shapes never read out of bounds."""

    def test_single_row(self, registry):
        g = Grid([[5, 0, 3]])
        assert step(g, registry) == g

    def test_single_cell(self, registry):
        g = Grid([[2]])
        assert step(g, registry) == g

    def test_two_rows(self, registry):
        assert step(_column(5, 0), registry).column(0) == [0, 5]

    def test_bottom_row_only_looks_up(self, registry):
        """Heaviest gas already at the bottom stays there."""
        assert step(_column(0, 0, 5), registry).column(0) == [0, 0, 5]


class TestUnknownKinds:
    """Ids missing from the registry order as density 0."""

    def test_unknown_below_dense_gas_rises(self, registry):
        assert step(_column(2, 9), registry).column(0) == [9, 2]

    def test_unknown_and_empty_do_not_swap(self, registry):
        g = _column(9, 0)
        assert step(g, registry) == g
