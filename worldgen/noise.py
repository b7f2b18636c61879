from __future__ import annotations

"""Seeded coherent (Perlin) noise with multi-octave sampling."""

import math
import random
from typing import List, Tuple

PERMUTATION_SIZE = 256


def _stable_hash(*args: int) -> int:
    """
    Deterministic 64-bit hash used for RNG seeding.
    Combines integer inputs into a reproducible 64-bit result.
    """
    x = 0x345678ABCDEF1234
    for a in args:
        a &= 0xFFFFFFFFFFFFFFFF
        a ^= a >> 33
        a = (a * 0xFF51AFD7ED558CCD) & 0xFFFFFFFFFFFFFFFF
        a ^= a >> 33
        x ^= a
        x = (x * 0xC4CEB9FE1A85EC53) & 0xFFFFFFFFFFFFFFFF
    return x


def _fade(t: float) -> float:
    """Fade function for Perlin noise interpolation (6t^5 - 15t^4 + 10t^3)."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b by t."""
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    """
    Dot product of (x, y) with one of the gradient directions picked by the
    low four bits of ``hash_value``.
    """
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h in (12, 14):
        v = x
    else:
        v = 0.0
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


def build_permutation(seed: int) -> Tuple[int, ...]:
    """
    Shuffle 0..255 with a seed-driven RNG and duplicate the table to 512
    entries so corner hashing never has to wrap.
    """
    table: List[int] = list(range(PERMUTATION_SIZE))
    rng = random.Random(_stable_hash(seed, 0x9E3779B9))
    rng.shuffle(table)
    return tuple(table + table)


class NoiseField:
    """2D gradient noise sampled in [0, 1], fully determined by ``seed``."""

    __slots__ = ("seed", "_perm")

    def __init__(self, seed: int = 0) -> None:
        self.seed = seed
        self._perm = build_permutation(seed)

    def __repr__(self) -> str:
        return f"NoiseField(seed={self.seed})"

    def sample(self, x: float, y: float) -> float:
        """Single-octave noise at (x, y), normalized to [0, 1]."""
        perm = self._perm
        fx = math.floor(x)
        fy = math.floor(y)
        xi = int(fx) & 255
        yi = int(fy) & 255
        x -= fx
        y -= fy

        u = _fade(x)
        v = _fade(y)

        a = perm[xi] + yi
        aa = perm[a]
        ab = perm[a + 1]
        b = perm[xi + 1] + yi
        ba = perm[b]
        bb = perm[b + 1]

        value = _lerp(
            _lerp(_grad(perm[aa], x, y), _grad(perm[ba], x - 1, y), u),
            _lerp(_grad(perm[ab], x, y - 1), _grad(perm[bb], x - 1, y - 1), u),
            v,
        )
        # Shift from [-1,1] to [0,1]
        return max(0.0, min(1.0, (value + 1.0) / 2.0))

    def octave_sample(
        self,
        x: float,
        y: float,
        octaves: int = 4,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
    ) -> float:
        """
        Fractal noise: sum ``octaves`` samples at growing frequency and
        shrinking amplitude, divided by the total amplitude so the result
        stays in [0, 1].
        """
        total = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_amplitude = 0.0

        for _ in range(octaves):
            total += self.sample(x * frequency, y * frequency) * amplitude
            max_amplitude += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return total / max_amplitude if max_amplitude > 0 else 0.0


__all__ = ["NoiseField", "build_permutation", "PERMUTATION_SIZE"]
