"""View: gas palette and grid panel."""

from gasview.grid_view import GridView
from gasview.colors import build_palette, hex_to_rgb, kinds_to_rgb

__all__ = ["GridView", "build_palette", "hex_to_rgb", "kinds_to_rgb"]
