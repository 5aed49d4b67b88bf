"""2D grid of gas kind ids. Shape (height, width), indexed [y, x]; read-only once built."""

from typing import Iterable, Iterator

import numpy as np

from gasgrid.registry import GasRegistry, UnknownKind


class InvalidGrid(ValueError):
    """Grid data that cannot form a full rectangle of cells."""


class Grid:
    """One snapshot. Kind ids in a read-only int32 array; a step returns a new Grid."""

    __slots__ = ("kinds",)

    def __init__(self, kinds: np.ndarray | Iterable[Iterable[int]]) -> None:
        arr = np.array(kinds, dtype=np.int32)
        if arr.ndim != 2:
            raise InvalidGrid(f"grid must be 2D (height, width), got shape {arr.shape}")
        arr.flags.writeable = False
        self.kinds = arr

    @property
    def shape(self) -> tuple[int, int]:
        return self.kinds.shape

    @property
    def height(self) -> int:
        return self.kinds.shape[0]

    @property
    def width(self) -> int:
        return self.kinds.shape[1]

    @property
    def size(self) -> int:
        return int(self.kinds.size)

    def get_cell(self, x: int, y: int) -> int:
        return int(self.kinds[y, x])

    def positions(self) -> Iterator[tuple[int, int]]:
        """(x, y) in row-major scan order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def column(self, x: int) -> list[int]:
        """Kind ids of one column, top to bottom."""
        return self.kinds[:, x].tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.kinds, other.kinds))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    def validate(self, registry: GasRegistry) -> None:
        """Raise UnknownKind for the first cell whose id is not registered."""
        for kind_id in np.unique(self.kinds).tolist():
            if kind_id not in registry:
                raise UnknownKind(kind_id)

    # Sparse (coordinate-tagged) form: [{"cell": {"gasName", "gasColor"}, "x", "y"}, ...]

    def to_records(self, registry: GasRegistry) -> list[dict]:
        records = []
        for (y, x), kind_id in np.ndenumerate(self.kinds):
            kind = registry.lookup(kind_id)
            records.append({"cell": {"gasName": kind.name, "gasColor": kind.color}, "x": int(x), "y": int(y)})
        return records

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict],
        registry: GasRegistry,
        width: int | None = None,
        height: int | None = None,
    ) -> "Grid":
        """
        Build a dense grid from coordinate-tagged cells. Width/height default to the
        coordinate extent. Duplicates, gaps and out-of-range cells raise InvalidGrid;
        a gas name the registry does not know raises UnknownKind.
        """
        cells: dict[tuple[int, int], int] = {}
        for rec in records:
            try:
                x, y = int(rec["x"]), int(rec["y"])
                name = rec["cell"]["gasName"]
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidGrid(f"malformed cell record {rec!r}") from e
            if (x, y) in cells:
                raise InvalidGrid(f"duplicate cell at ({x}, {y})")
            cells[(x, y)] = registry.by_name(name).id
        if not cells:
            raise InvalidGrid("no cells")
        if width is None:
            width = max(x for x, _ in cells) + 1
        if height is None:
            height = max(y for _, y in cells) + 1
        if any(not (0 <= x < width and 0 <= y < height) for x, y in cells):
            raise InvalidGrid(f"cell outside {width}x{height}")
        if len(cells) != width * height:
            raise InvalidGrid(f"expected {width * height} cells for {width}x{height}, got {len(cells)}")
        arr = np.empty((height, width), dtype=np.int32)
        for (x, y), kind_id in cells.items():
            arr[y, x] = kind_id
        return cls(arr)

    # Snapshot form persisted by stores: {"width", "height", "cells": records}

    def to_dict(self, registry: GasRegistry) -> dict:
        return {"width": self.width, "height": self.height, "cells": self.to_records(registry)}

    @classmethod
    def from_dict(cls, data: dict, registry: GasRegistry) -> "Grid":
        try:
            width, height, records = int(data["width"]), int(data["height"]), data["cells"]
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidGrid("snapshot needs width, height and cells") from e
        return cls.from_records(records, registry, width=width, height=height)
