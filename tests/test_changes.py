"""Tests for change detection between snapshots.

Covers:
- Soundness: a position is reported iff its kind differs
- Row-major ordering of reported changes
- Full-grid fallback on shape mismatch
- apply_changes idempotence and wire records
"""

import random

import numpy as np

from gasgrid import ChangedCell, Grid, apply_changes, create_grid, default_registry, diff, step
from gasgrid.changes import changes_to_records, full_changes


def _random_pair(seed=3, width=8, height=6):
    registry = default_registry()
    g1 = create_grid(width, height, registry, random.Random(seed))
    g2 = create_grid(width, height, registry, random.Random(seed + 1))
    return g1, g2


class TestDiff:
    """diff() on grids of equal shape."""

    def test_same_grid_no_changes(self):
        g, _ = _random_pair()
        assert diff(g, g) == []

    def test_soundness(self):
        """Reported positions are exactly the positions whose kinds differ."""
        g1, g2 = _random_pair()
        changes = diff(g1, g2)
        reported = {(c.x, c.y) for c in changes}
        expected = {
            (x, y) for x, y in g1.positions() if g1.get_cell(x, y) != g2.get_cell(x, y)
        }
        assert reported == expected
        for c in changes:
            assert c.kind == g2.get_cell(c.x, c.y)

    def test_row_major_order(self):
        g1 = Grid([[0, 0], [0, 0]])
        g2 = Grid([[1, 0], [2, 3]])
        assert diff(g1, g2) == [ChangedCell(0, 0, 1), ChangedCell(0, 1, 2), ChangedCell(1, 1, 3)]

    def test_step_diff(self):
        registry = default_registry()
        g = Grid([[5], [1], [3]])
        assert diff(g, step(g, registry)) == [ChangedCell(0, 0, 1), ChangedCell(0, 1, 5)]

    def test_all_empty_step_diff_empty(self):
        registry = default_registry()
        g = Grid(np.zeros((10, 10), dtype=np.int32))
        assert diff(g, step(g, registry)) == []


class TestShapeMismatch:
    """Grids that cannot be compared cell by cell."""

    def test_different_cardinality_returns_full_new_grid(self):
        g1 = Grid([[1, 2], [3, 4]])
        g2 = Grid([[1, 2, 0], [3, 4, 0]])
        changes = diff(g1, g2)
        assert changes == full_changes(g2)
        assert len(changes) == 6

    def test_same_cardinality_other_dimensions(self):
        g1 = Grid([[1, 2, 3], [4, 5, 0]])
        g2 = Grid([[1, 2], [3, 4], [5, 0]])
        assert diff(g1, g2) == full_changes(g2)


class TestApplyChanges:
    """Partial updates as consumed by a renderer."""

    def test_apply_diff_reproduces_new(self):
        g1, g2 = _random_pair()
        assert apply_changes(g1, diff(g1, g2)) == g2

    def test_idempotent(self):
        g1, g2 = _random_pair()
        changes = diff(g1, g2)
        once = apply_changes(g1, changes)
        assert apply_changes(once, changes) == once

    def test_original_untouched(self):
        g = Grid([[0, 0]])
        apply_changes(g, [ChangedCell(1, 0, 4)])
        assert g.get_cell(1, 0) == 0


def test_changes_to_records():
    registry = default_registry()
    records = changes_to_records([ChangedCell(2, 1, 3)], registry)
    assert records == [{"cell": {"gasName": "Gas 3", "gasColor": "#ff0000"}, "x": 2, "y": 1}]
