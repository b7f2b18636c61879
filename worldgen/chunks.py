from __future__ import annotations

"""
chunks.py

Lazy, chunked tile storage for an effectively infinite world.

- Tiles are a pure function of (world_x, world_y, seed); chunks are only a cache.
- Chunk coordinates use floor division so negative world coordinates land in
  negative chunks (world_x = -1 → chunk -1, local 15 with 16-tile chunks).
- Cached chunks live in an OrderedDict so an optional LRU cap can evict the
  oldest entry, and ``unload_distant`` drops chunks far from a focus point.
"""

import logging
import math
from collections import OrderedDict
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

from .noise import NoiseField
from .settings import WorldSettings
from .terrain import DEFAULT_TILE, Tile, classify

logger = logging.getLogger("civsim.worldgen")
logger.addHandler(logging.NullHandler())

ChunkCoord = Tuple[int, int]


@dataclass(frozen=True)
class Chunk:
    """A ``size × size`` block of tiles, indexed ``tiles[local_y][local_x]``."""

    cx: int
    cy: int
    size: int
    tiles: Tuple[Tuple[Tile, ...], ...]

    def tile(self, local_x: int, local_y: int) -> Tile:
        if 0 <= local_y < len(self.tiles) and 0 <= local_x < len(self.tiles[local_y]):
            return self.tiles[local_y][local_x]
        return DEFAULT_TILE

    def __iter__(self) -> Iterator[Tile]:
        for row in self.tiles:
            yield from row


class ChunkStore:
    __slots__ = (
        "settings",
        "chunks",
        "_elevation",
        "_moisture",
        "_temperature",
    )

    def __init__(self, seed: Optional[int] = None, *, settings: Optional[WorldSettings] = None) -> None:
        """
        Create a store that generates chunks on first access.

        Args:
            seed (int, optional): World seed; overrides ``settings.seed`` when given.
            settings (WorldSettings, optional): Generation parameters. Defaults are used if None.
        """
        base = settings if settings is not None else WorldSettings()
        # Private copy; replace() re-runs WorldSettings validation
        self.settings: WorldSettings = replace(base) if seed is None else replace(base, seed=seed)
        # Loaded chunks: OrderedDict[(cx, cy), Chunk], oldest first
        self.chunks: OrderedDict[ChunkCoord, Chunk] = OrderedDict()
        self._build_fields()

    def _build_fields(self) -> None:
        s = self.settings
        self._elevation = NoiseField(s.seed)
        self._moisture = NoiseField(s.seed + s.moisture_seed_offset)
        self._temperature = NoiseField(s.seed + s.temperature_seed_offset)

    # Convenience accessors -------------------------------------------------
    @property
    def seed(self) -> int:
        return self.settings.seed

    @property
    def chunk_size(self) -> int:
        return self.settings.chunk_size

    def __len__(self) -> int:
        return len(self.chunks)

    def __contains__(self, coord: ChunkCoord) -> bool:
        """True if the chunk at ``coord`` is currently cached."""
        return coord in self.chunks

    # ─────────────────────────────────────────────────────────────────────────
    # == COORDINATES ==

    def locate(self, world_x: int, world_y: int) -> Tuple[int, int, int, int]:
        """
        Split a world coordinate into (chunk_x, chunk_y, local_x, local_y).
        Uses floor division, so negative coordinates resolve correctly.
        """
        size = self.settings.chunk_size
        cx, local_x = divmod(world_x, size)
        cy, local_y = divmod(world_y, size)
        return cx, cy, local_x, local_y

    # ─────────────────────────────────────────────────────────────────────────
    # == GENERATION ==

    def generate_tile(self, world_x: int, world_y: int) -> Tile:
        """Generate the tile at (world_x, world_y) without touching the cache."""
        s = self.settings
        x = world_x * s.scale
        y = world_y * s.scale
        elevation = self._elevation.octave_sample(
            x, y, s.elevation_octaves, s.elevation_persistence
        )
        moisture = self._moisture.octave_sample(
            x * s.moisture_frequency,
            y * s.moisture_frequency,
            s.moisture_octaves,
            s.moisture_persistence,
        )
        temperature = self._temperature.octave_sample(
            x * s.temperature_frequency,
            y * s.temperature_frequency,
            s.temperature_octaves,
            s.temperature_persistence,
        )
        return classify(elevation, moisture, temperature, s)

    def _generate_chunk(self, cx: int, cy: int) -> Chunk:
        size = self.settings.chunk_size
        base_x = cx * size
        base_y = cy * size
        rows = tuple(
            tuple(self.generate_tile(base_x + lx, base_y + ly) for lx in range(size))
            for ly in range(size)
        )
        chunk = Chunk(cx=cx, cy=cy, size=size, tiles=rows)
        self.chunks[(cx, cy)] = chunk
        logger.debug("Generated chunk (%d, %d) for seed %d", cx, cy, self.settings.seed)

        limit = self.settings.max_active_chunks
        while limit is not None and len(self.chunks) > limit:
            old_key, _ = self.chunks.popitem(last=False)
            logger.debug("Evicted least recently used chunk %s", old_key)
        return chunk

    def get_chunk(self, cx: int, cy: int) -> Chunk:
        """Return the chunk at chunk coordinates (cx, cy), generating it on first use."""
        key = (cx, cy)
        chunk = self.chunks.get(key)
        if chunk is None:
            return self._generate_chunk(cx, cy)
        # Mark chunk as recently used
        self.chunks.move_to_end(key)
        return chunk

    def get_tile(self, world_x: float, world_y: float) -> Tile:
        """
        Retrieve the tile at world coordinates. Never fails: fractional
        coordinates are floored and a missing cell yields ``DEFAULT_TILE``.
        """
        cx, cy, local_x, local_y = self.locate(int(math.floor(world_x)), int(math.floor(world_y)))
        return self.get_chunk(cx, cy).tile(local_x, local_y)

    def tiles_in_rect(self, x0: int, y0: int, x1: int, y1: int) -> Iterator[Tuple[int, int, Tile]]:
        """
        Yield (x, y, tile) for the half-open rectangle [x0, x1) × [y0, y1),
        row by row. The rectangle is clipped to ``max_tiles_wide`` ×
        ``max_tiles_high`` tiles from its top-left corner.
        """
        s = self.settings
        if x1 - x0 > s.max_tiles_wide or y1 - y0 > s.max_tiles_high:
            logger.warning(
                "Tile query %dx%d clipped to %dx%d",
                x1 - x0,
                y1 - y0,
                s.max_tiles_wide,
                s.max_tiles_high,
            )
            x1 = min(x1, x0 + s.max_tiles_wide)
            y1 = min(y1, y0 + s.max_tiles_high)
        for y in range(y0, y1):
            for x in range(x0, x1):
                yield x, y, self.get_tile(x, y)

    # ─────────────────────────────────────────────────────────────────────────
    # == CAPACITY MANAGEMENT ==

    @staticmethod
    def visible_chunks(center_cx: int, center_cy: int, radius: int = 2) -> List[ChunkCoord]:
        """Chunk coordinates within ``radius`` of a center chunk, row by row."""
        return [
            (center_cx + dx, center_cy + dy)
            for dy in range(-radius, radius + 1)
            for dx in range(-radius, radius + 1)
        ]

    def unload_distant(self, center_cx: int, center_cy: int, max_distance: int = 5) -> int:
        """
        Drop cached chunks whose Chebyshev distance from the center chunk
        exceeds ``max_distance``. Returns how many were dropped.
        """
        doomed = [
            key
            for key in self.chunks
            if max(abs(key[0] - center_cx), abs(key[1] - center_cy)) > max_distance
        ]
        for key in doomed:
            del self.chunks[key]
        if doomed:
            logger.debug(
                "Unloaded %d chunks farther than %d from (%d, %d)",
                len(doomed),
                max_distance,
                center_cx,
                center_cy,
            )
        return len(doomed)

    def regenerate(self, new_seed: int) -> None:
        """Switch to a new seed and discard every cached chunk."""
        self.settings = replace(self.settings, seed=new_seed)
        self._build_fields()
        self.chunks.clear()
        logger.debug("World regenerated with seed %d", new_seed)


__all__ = ["Chunk", "ChunkCoord", "ChunkStore"]
