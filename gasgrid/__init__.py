"""Gas grid: registry, grid snapshots, tick-driven vertical ordering and change detection."""

from gasgrid.registry import GasKind, GasRegistry, UnknownKind, default_registry
from gasgrid.grid import Grid, InvalidGrid
from gasgrid.engine import step, run, is_settled
from gasgrid.changes import ChangedCell, diff, apply_changes
from gasgrid.factory import create_grid, filled_grid, resolve_seed
from gasgrid.constants import DEFAULT_WIDTH, DEFAULT_HEIGHT, EMPTY_ID, UNKNOWN_DENSITY

__all__ = [
    "GasKind", "GasRegistry", "UnknownKind", "default_registry",
    "Grid", "InvalidGrid",
    "step", "run", "is_settled",
    "ChangedCell", "diff", "apply_changes",
    "create_grid", "filled_grid", "resolve_seed",
    "DEFAULT_WIDTH", "DEFAULT_HEIGHT", "EMPTY_ID", "UNKNOWN_DENSITY",
]
