"""Grid panel: RGB buffer of the current grid, updated in full or by changed cells, drawn with a thin grey border."""

import numpy as np
import pygame

from gasgrid import ChangedCell, Grid, GasRegistry
from gasview.colors import build_palette, kinds_to_rgb

BORDER_COLOR = (80, 80, 80)
BORDER_PX = 1


class GridView:
    """Display state only. Holds (h, w, 3) uint8 colors; knows nothing about stepping."""

    def __init__(self, registry: GasRegistry) -> None:
        self.palette = build_palette(registry)
        self.rgb = np.zeros((0, 0, 3), dtype=np.uint8)

    @property
    def shape(self) -> tuple[int, int]:
        return self.rgb.shape[0], self.rgb.shape[1]

    def show(self, grid: Grid) -> None:
        """Replace the whole buffer."""
        self.rgb = kinds_to_rgb(grid.kinds, self.palette)

    def apply_changes(self, changes: list[ChangedCell]) -> None:
        """Overwrite changed cells. Cells outside the current buffer are ignored."""
        if not changes:
            return
        arr = np.asarray(changes, dtype=np.int64).reshape(-1, 3)
        xs, ys, kinds = arr[:, 0], arr[:, 1], arr[:, 2]
        h, w = self.shape
        inside = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
        self.rgb[ys[inside], xs[inside]] = kinds_to_rgb(kinds[inside], self.palette)

    def apply(self, response: Grid | list[ChangedCell]) -> None:
        """Full grid or change list, as returned by an advance. Idempotent."""
        if isinstance(response, Grid):
            self.show(response)
        else:
            self.apply_changes(response)

    def draw(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        """Blit the buffer scaled to rect (nearest neighbor, cells stay crisp)."""
        h, w = self.shape
        if h == 0 or w == 0:
            return
        img = pygame.image.frombytes(np.ascontiguousarray(self.rgb).tobytes(), (w, h), "RGB")
        surface.blit(pygame.transform.scale(img, (rect.width, rect.height)), rect.topleft)
        pygame.draw.rect(surface, BORDER_COLOR, rect, BORDER_PX)
