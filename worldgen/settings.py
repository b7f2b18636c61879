from __future__ import annotations

"""Configuration dataclass for world generation."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WorldSettings:
    seed: int = 12345
    chunk_size: int = 16
    scale: float = 0.05
    # Per-field noise tuning
    elevation_octaves: int = 4
    elevation_persistence: float = 0.5
    moisture_octaves: int = 3
    moisture_persistence: float = 0.6
    moisture_frequency: float = 1.5
    moisture_seed_offset: int = 1000
    temperature_octaves: int = 2
    temperature_persistence: float = 0.7
    temperature_frequency: float = 0.8
    temperature_seed_offset: int = 2000
    # Terrain thresholds, checked in this order
    water_elev: float = 0.35
    mountain_elev: float = 0.75
    hill_elev: float = 0.60
    desert_moisture: float = 0.3
    desert_temp: float = 0.6
    forest_moisture: float = 0.55
    # None keeps every generated chunk until unload_distant() is called
    max_active_chunks: Optional[int] = None
    max_tiles_wide: int = 40
    max_tiles_high: int = 30
    tile_size: int = 32

    def __post_init__(self) -> None:
        if self.seed < 0:
            raise ValueError("seed must be an unsigned integer")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if self.max_active_chunks is not None and self.max_active_chunks <= 0:
            raise ValueError("max_active_chunks must be positive or None")


__all__ = ["WorldSettings"]
