from __future__ import annotations

"""Camera math for looking at the tile grid: panning, zoom and visible tile ranges."""

import math
from typing import Tuple

MIN_ZOOM = 0.5
MAX_ZOOM = 2.0

TileRange = Tuple[int, int, int, int]


class Camera:
    """
    Tracks the world-pixel position of a view's top-left corner plus a zoom
    factor. ``view_width``/``view_height`` are the screen size of the view.
    """

    def __init__(
        self,
        view_width: float = 700.0,
        view_height: float = 550.0,
        *,
        tile_size: int = 32,
        max_tiles_wide: int = 40,
        max_tiles_high: int = 30,
    ) -> None:
        self.view_width = view_width
        self.view_height = view_height
        self.tile_size = tile_size
        self.max_tiles_wide = max_tiles_wide
        self.max_tiles_high = max_tiles_high
        self.x = 0.0
        self.y = 0.0
        self.zoom = 1.0

    @classmethod
    def for_settings(cls, settings, view_width: float = 700.0, view_height: float = 550.0) -> "Camera":
        return cls(
            view_width,
            view_height,
            tile_size=settings.tile_size,
            max_tiles_wide=settings.max_tiles_wide,
            max_tiles_high=settings.max_tiles_high,
        )

    def pan(self, dx: float, dy: float) -> None:
        """Move the view by a screen-space delta."""
        self.x -= dx / self.zoom
        self.y -= dy / self.zoom

    def change_zoom(self, delta: float) -> None:
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom + delta))

    def screen_to_tile(self, sx: float, sy: float) -> Tuple[int, int]:
        """Tile under a point given in view-local screen coordinates."""
        wx = sx / self.zoom + self.x
        wy = sy / self.zoom + self.y
        return int(math.floor(wx / self.tile_size)), int(math.floor(wy / self.tile_size))

    def tile_to_screen(self, tx: int, ty: int) -> Tuple[float, float]:
        """View-local screen position of a tile's top-left corner."""
        return (
            (tx * self.tile_size - self.x) * self.zoom,
            (ty * self.tile_size - self.y) * self.zoom,
        )

    def visible_tile_range(self) -> TileRange:
        """
        Half-open (start_x, start_y, end_x, end_y) tile range covering the
        view, clipped to ``max_tiles_wide`` × ``max_tiles_high``.
        """
        start_x = int(math.floor(self.x / self.tile_size))
        start_y = int(math.floor(self.y / self.tile_size))
        end_x = int(math.ceil((self.x + self.view_width / self.zoom) / self.tile_size))
        end_y = int(math.ceil((self.y + self.view_height / self.zoom) / self.tile_size))
        end_x = min(end_x, start_x + self.max_tiles_wide)
        end_y = min(end_y, start_y + self.max_tiles_high)
        return start_x, start_y, end_x, end_y

    def center_chunk(self, chunk_size: int) -> Tuple[int, int]:
        """Chunk containing the tile at the middle of the view."""
        tx, ty = self.screen_to_tile(self.view_width / 2, self.view_height / 2)
        return tx // chunk_size, ty // chunk_size


__all__ = ["Camera", "MAX_ZOOM", "MIN_ZOOM", "TileRange"]
