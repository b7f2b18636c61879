from __future__ import annotations

from .chunks import Chunk, ChunkStore
from .noise import NoiseField
from .settings import WorldSettings
from .terrain import (
    DEFAULT_TILE,
    TERRAIN_BONUSES,
    TerrainBonus,
    TerrainType,
    Tile,
    classify,
    determine_terrain,
)
from .viewport import Camera

__all__ = [
    "Camera",
    "Chunk",
    "ChunkStore",
    "DEFAULT_TILE",
    "NoiseField",
    "TERRAIN_BONUSES",
    "TerrainBonus",
    "TerrainType",
    "Tile",
    "WorldSettings",
    "classify",
    "determine_terrain",
]
