"""Multi-octave fractal Brownian motion (fBm) noise on the sphere."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Sequence

_F4 = (math.sqrt(5.0) - 1.0) / 4.0
_G4 = (5.0 - math.sqrt(5.0)) / 20.0
_OCTAVE_SEED_STEP = 31337

_GRAD4 = (
    (0, 1, 1, 1), (0, 1, 1, -1), (0, 1, -1, 1), (0, 1, -1, -1),
    (0, -1, 1, 1), (0, -1, 1, -1), (0, -1, -1, 1), (0, -1, -1, -1),
    (1, 0, 1, 1), (1, 0, 1, -1), (1, 0, -1, 1), (1, 0, -1, -1),
    (-1, 0, 1, 1), (-1, 0, 1, -1), (-1, 0, -1, 1), (-1, 0, -1, -1),
    (1, 1, 0, 1), (1, 1, 0, -1), (1, -1, 0, 1), (1, -1, 0, -1),
    (-1, 1, 0, 1), (-1, 1, 0, -1), (-1, -1, 0, 1), (-1, -1, 0, -1),
    (1, 1, 1, 0), (1, 1, -1, 0), (1, -1, 1, 0), (1, -1, -1, 0),
    (-1, 1, 1, 0), (-1, 1, -1, 0), (-1, -1, 1, 0), (-1, -1, -1, 0),
)


@dataclass
class FractalNoiseConfig:
    """Parameters for multi-octave fractal noise."""

    octaves: int = 6
    frequency: float = 2.0
    lacunarity: float = 2.0
    persistence: float = 0.5
    seed: int = 42

    @classmethod
    def with_seed(cls, seed: int) -> FractalNoiseConfig:
        """Default configuration with the given seed."""
        return cls(seed=seed)

    @classmethod
    def earth_like(cls, seed: int) -> FractalNoiseConfig:
        """Configuration tuned for Earth-like terrain."""
        return cls(octaves=8, frequency=1.5, lacunarity=2.1, persistence=0.55, seed=seed)

    @classmethod
    def moon_like(cls, seed: int) -> FractalNoiseConfig:
        """Smoother, moon-like configuration."""
        return cls(octaves=4, frequency=3.0, lacunarity=2.0, persistence=0.4, seed=seed)


def _wrap_i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


@lru_cache(maxsize=64)
def _permutation(seed: int) -> tuple[int, ...]:
    table = list(range(256))
    random.Random(seed).shuffle(table)
    return tuple(table + table)


def simplex_4d(x: float, y: float, z: float, w: float, seed: int) -> float:
    """Seeded 4D simplex noise, roughly in [-1, 1]."""
    perm = _permutation(seed)

    s = (x + y + z + w) * _F4
    i = math.floor(x + s)
    j = math.floor(y + s)
    k = math.floor(z + s)
    l = math.floor(w + s)
    t = (i + j + k + l) * _G4
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)
    w0 = w - (l - t)

    rank = [0, 0, 0, 0]
    coords = (x0, y0, z0, w0)
    for a in range(4):
        for b in range(a + 1, 4):
            if coords[a] > coords[b]:
                rank[a] += 1
            else:
                rank[b] += 1

    offsets = [(0, 0, 0, 0)]
    offsets.extend(tuple(int(r >= threshold) for r in rank) for threshold in (3, 2, 1))
    offsets.append((1, 1, 1, 1))

    ii, jj, kk, ll = i & 255, j & 255, k & 255, l & 255
    total = 0.0
    for n, (a, b, c, d) in enumerate(offsets):
        cx = x0 - a + n * _G4
        cy = y0 - b + n * _G4
        cz = z0 - c + n * _G4
        cw = w0 - d + n * _G4
        falloff = 0.6 - cx * cx - cy * cy - cz * cz - cw * cw
        if falloff <= 0.0:
            continue
        g = _GRAD4[perm[ii + a + perm[jj + b + perm[kk + c + perm[ll + d]]]] % 32]
        falloff *= falloff
        total += falloff * falloff * (g[0] * cx + g[1] * cy + g[2] * cz + g[3] * cw)
    return 27.0 * total


def _octave_params(config: FractalNoiseConfig) -> Iterable[tuple[int, float, float]]:
    amplitude = 1.0
    frequency = config.frequency
    for octave in range(config.octaves):
        yield _wrap_i32(config.seed + octave * _OCTAVE_SEED_STEP), frequency, amplitude
        amplitude *= config.persistence
        frequency *= config.lacunarity


def sample_fractal_noise(pos: Sequence[float], config: FractalNoiseConfig) -> float:
    """Sample fractal noise at a 3D position, normalised to about [-1, 1].

    Uses 4D simplex noise with w = 0 for seamless sampling on the sphere.
    """
    x, y, z = pos
    total = 0.0
    max_amplitude = 0.0
    for seed, frequency, amplitude in _octave_params(config):
        total += simplex_4d(x * frequency, y * frequency, z * frequency, 0.0, seed) * amplitude
        max_amplitude += amplitude
    if max_amplitude == 0.0:
        return math.nan
    return total / max_amplitude


def sample_fractal_noise_batch(
    positions: Sequence[Sequence[float]], config: FractalNoiseConfig
) -> list[float]:
    """Sample fractal noise for every position in order."""
    return [sample_fractal_noise(pos, config) for pos in positions]