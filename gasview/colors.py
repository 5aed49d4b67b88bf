"""
Display colors. Each gas kind carries a "#rrggbb" color; the palette is a lookup
table indexed by kind id so a whole grid maps to RGB in one numpy take.
"""

import numpy as np

from gasgrid import GasRegistry


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """"#rrggbb" (or "rrggbb", or "#rgb") to an (r, g, b) tuple."""
    s = color.strip().lstrip("#")
    if len(s) == 3:
        s = "".join(c * 2 for c in s)
    if len(s) != 6:
        raise ValueError(f"not a hex color: {color!r}")
    return int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)


def build_palette(registry: GasRegistry) -> np.ndarray:
    """
    (max_id + 2, 3) uint8. Row i = color of kind i; the extra last row and any id
    gaps hold the empty color, so unregistered ids draw as empty.
    """
    size = max(registry.ids) + 2
    palette = np.empty((size, 3), dtype=np.uint8)
    palette[:] = hex_to_rgb(registry.empty.color)
    for kind in registry:
        palette[kind.id] = hex_to_rgb(kind.color)
    return palette


def kinds_to_rgb(kinds: np.ndarray, palette: np.ndarray) -> np.ndarray:
    """(h, w) kind ids -> (h, w, 3) uint8. Out-of-range ids use the palette's last (empty) row."""
    ids = np.asarray(kinds, dtype=np.int64)
    ids = np.where((ids >= 0) & (ids < len(palette)), ids, len(palette) - 1)
    return palette[ids]
