"""
Gas kinds and the registry that resolves them. Built once at startup and passed to
whatever needs densities or colors; never mutated afterwards.
"""

import logging
import random
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Iterator

import numpy as np

from gasgrid.constants import UNKNOWN_DENSITY

logger = logging.getLogger(__name__)


class UnknownKind(KeyError):
    """Raised when a kind id or name is not in the registry."""


@dataclass(frozen=True)
class GasKind:
    id: int
    name: str
    density: int | float | Fraction
    color: str


DEFAULT_GAS_KINDS = (
    GasKind(0, "Empty", 0, "#ffffff"),
    GasKind(1, "Gas 1", 1, "#0000ff"),
    GasKind(2, "Gas 2", 2, "#00ff00"),
    GasKind(3, "Gas 3", 3, "#ff0000"),
    GasKind(4, "Gas 4", 4, "#00ffff"),
    GasKind(5, "Gas 5", 5, "#ff00ff"),
)


class GasRegistry:
    """Fixed table of gas kinds, looked up by id or by name."""

    __slots__ = ("_by_id", "_by_name", "_order", "_density_table", "empty")

    def __init__(self, kinds: Iterable[GasKind]) -> None:
        self._order = tuple(kinds)
        if not self._order:
            raise ValueError("registry needs at least one gas kind")
        self._by_id: dict[int, GasKind] = {}
        self._by_name: dict[str, GasKind] = {}
        for kind in self._order:
            if kind.id < 0:
                raise ValueError(f"gas kind id must be non-negative, got {kind.id}")
            if kind.density < 0:
                raise ValueError(f"gas kind {kind.name!r} has negative density")
            if kind.id in self._by_id:
                raise ValueError(f"duplicate gas kind id {kind.id}")
            if kind.name in self._by_name:
                raise ValueError(f"duplicate gas kind name {kind.name!r}")
            self._by_id[kind.id] = kind
            self._by_name[kind.name] = kind
        empties = [k for k in self._order if k.density == 0]
        if len(empties) != 1:
            raise ValueError(f"registry needs exactly one kind of density 0, got {len(empties)}")
        self.empty = empties[0]
        # Index = kind id; gaps in the id range hold the unknown-kind default.
        table = np.full(max(self._by_id) + 1, float(UNKNOWN_DENSITY), dtype=np.float64)
        for kind in self._order:
            table[kind.id] = float(kind.density)
        table.flags.writeable = False
        self._density_table = table

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[GasKind]:
        return iter(self._order)

    def __contains__(self, kind: object) -> bool:
        if isinstance(kind, GasKind):
            return self._by_id.get(kind.id) == kind
        if isinstance(kind, str):
            return kind in self._by_name
        if isinstance(kind, (int, np.integer)):
            return int(kind) in self._by_id
        return False

    def __repr__(self) -> str:
        return f"GasRegistry({', '.join(k.name for k in self._order)})"

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(k.id for k in self._order)

    def lookup(self, kind_id: int) -> GasKind:
        try:
            return self._by_id[int(kind_id)]
        except KeyError:
            raise UnknownKind(kind_id) from None

    def by_name(self, name: str) -> GasKind:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownKind(name) from None

    def density_of(self, kind: int | str | GasKind, strict: bool = False) -> int | float | Fraction:
        """
        Density of a kind given as id, name or GasKind. An unregistered kind raises
        UnknownKind when strict, otherwise it counts as UNKNOWN_DENSITY (same as Empty).
        """
        try:
            if isinstance(kind, GasKind):
                resolved = self.lookup(kind.id)
            elif isinstance(kind, str):
                resolved = self.by_name(kind)
            else:
                resolved = self.lookup(kind)
        except UnknownKind:
            if strict:
                raise
            logger.warning("Unknown gas kind %r; using density %s", kind, UNKNOWN_DENSITY)
            return UNKNOWN_DENSITY
        return resolved.density

    def densities(self, kind_ids: np.ndarray) -> np.ndarray:
        """Vectorized density lookup, same shape as kind_ids. Unregistered ids get UNKNOWN_DENSITY."""
        ids = np.asarray(kind_ids, dtype=np.int64)
        table = self._density_table
        in_range = (ids >= 0) & (ids < table.size)
        registered = np.isin(ids, np.fromiter(self._by_id, dtype=np.int64))
        if not registered.all():
            logger.warning(
                "%d cell(s) hold unknown gas kinds %s; using density %s",
                int((~registered).sum()), sorted(set(ids[~registered].tolist())), UNKNOWN_DENSITY,
            )
        # Gaps inside the table already hold the default; only out-of-range ids need masking.
        return np.where(in_range, table[np.where(in_range, ids, 0)], float(UNKNOWN_DENSITY))

    def random_kind(self, rng: random.Random | None = None) -> GasKind:
        """Uniform over all registered kinds, Empty included."""
        return (rng or random).choice(self._order)


def default_registry() -> GasRegistry:
    return GasRegistry(DEFAULT_GAS_KINDS)
