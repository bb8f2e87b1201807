"""
Seeded gradient noise and the per-cell terrain fields (NumPy-accelerated).

The noise function is a fixed 2-D Perlin implementation driven by a
256-entry permutation drawn from numpy's legacy RandomState stream, which
numpy keeps frozen across releases, so identical seeds give bit-identical
values on every platform and numpy version. Library-default noise is never
used.

Three base fields are read from the same noise function: height, moisture
and settlement propensity. Each field shifts the sample position by its own
large constant offset, which decorrelates the fields despite the shared seed.
A fourth, higher-frequency detail field drives the nature clustering pass.
"""

from typing import Dict, Iterable, NamedTuple, Tuple

import numpy as np

from hexworld.maps.coordinates import HexCoordinate


# ============================================================================
# PERLIN NOISE
# ============================================================================

_GRADIENTS = np.array([
    (1.0, 1.0), (-1.0, 1.0), (1.0, -1.0), (-1.0, -1.0),
    (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0),
], dtype=np.float64)


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def permutation_table(seed: int, size: int = 256) -> np.ndarray:
    """
    Seeded shuffle of range(size).

    RandomState accepts seeds in [0, 2**32); other integers are reduced
    modulo 2**32 so every int seed is usable.
    """
    return np.random.RandomState(int(seed) % 2 ** 32).permutation(size).astype(np.int64)


class PerlinNoise:
    """
    2-D Perlin noise normalized to [0, 1].

    Args:
        seed: Integer seed for the permutation table
        permutation: Optional explicit 256-entry table replacing the seeded one
    """

    def __init__(self, seed: int, permutation=None):
        self.seed = int(seed)
        if permutation is None:
            perm = permutation_table(self.seed)
        else:
            perm = np.asarray(permutation, dtype=np.int64)
            if perm.shape != (256,) or set(perm.tolist()) != set(range(256)):
                raise ValueError("permutation must be a shuffle of range(256)")
        self._perm = np.concatenate([perm, perm])

    def _grad(self, hashes: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        g = _GRADIENTS[hashes & 7]
        return g[..., 0] * x + g[..., 1] * y

    def sample_many(self, xs, ys) -> np.ndarray:
        """Evaluate noise at arrays of positions. Returns a float64 array in [0, 1]."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)

        x0 = np.floor(xs)
        y0 = np.floor(ys)
        xf = xs - x0
        yf = ys - y0
        xi = x0.astype(np.int64) & 255
        yi = y0.astype(np.int64) & 255

        perm = self._perm
        aa = perm[perm[xi] + yi]
        ab = perm[perm[xi] + yi + 1]
        ba = perm[perm[xi + 1] + yi]
        bb = perm[perm[xi + 1] + yi + 1]

        u = _fade(xf)
        v = _fade(yf)

        n00 = self._grad(aa, xf, yf)
        n10 = self._grad(ba, xf - 1.0, yf)
        n01 = self._grad(ab, xf, yf - 1.0)
        n11 = self._grad(bb, xf - 1.0, yf - 1.0)

        value = _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v)
        # Shift from [-1,1] to [0,1]
        return np.clip((value + 1.0) / 2.0, 0.0, 1.0)

    def sample(self, x: float, y: float) -> float:
        return float(self.sample_many([x], [y])[0])

    def fractal_many(self, xs, ys, octaves: int = 1, persistence: float = 0.5,
                     lacunarity: float = 2.0) -> np.ndarray:
        """Multi-octave noise normalized by total amplitude, range [0, 1]."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        result = np.zeros(xs.shape, dtype=np.float64)
        amplitude = 1.0
        frequency = 1.0
        total_amp = 0.0

        for _ in range(max(1, int(octaves))):
            result += self.sample_many(xs * frequency, ys * frequency) * amplitude
            total_amp += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return result / total_amp


# ============================================================================
# TERRAIN FIELDS
# ============================================================================

class FieldSample(NamedTuple):
    height: float
    moisture: float
    settlement: float


class TerrainField:
    """
    Height, moisture and settlement-propensity sampling per coordinate.

    Args:
        config: MapConfig supplying seed, hex size, frequencies and offsets
    """

    def __init__(self, config):
        self.config = config
        self.noise = PerlinNoise(config.seed)

    def _positions(self, coords) -> Tuple[np.ndarray, np.ndarray]:
        world = [c.to_world_position(self.config.hex_size) for c in coords]
        if not world:
            return np.zeros(0), np.zeros(0)
        pts = np.array(world, dtype=np.float64)
        return pts[:, 0], pts[:, 1]

    def sample_all(self, coords: Iterable[HexCoordinate]) -> Dict[HexCoordinate, FieldSample]:
        """Sample all three base fields for every coordinate in one vectorized pass."""
        coords = list(coords)
        xs, ys = self._positions(coords)
        cfg = self.config
        sx = xs * cfg.noise_scale
        sy = ys * cfg.noise_scale

        def field(offset, factor=1.0):
            return self.noise.fractal_many(
                (sx + offset) * factor, (sy + offset) * factor,
                octaves=cfg.noise_octaves,
                persistence=cfg.noise_persistence,
                lacunarity=cfg.noise_lacunarity,
            )

        heights = field(cfg.elevation_offset)
        moistures = field(cfg.moisture_offset)
        settlement = field(cfg.settlement_offset, cfg.settlement_noise_scale)

        return {
            c: FieldSample(float(h), float(m), float(s))
            for c, h, m, s in zip(coords, heights, moistures, settlement)
        }

    def sample(self, coord: HexCoordinate) -> FieldSample:
        return self.sample_all([coord])[coord]

    def detail_all(self, coords: Iterable[HexCoordinate]) -> Dict[HexCoordinate, float]:
        """Higher-frequency detail noise used by the nature clustering pass."""
        coords = list(coords)
        xs, ys = self._positions(coords)
        scale = self.config.forest_clump_scale
        offset = self.config.nature_offset
        values = self.noise.sample_many(xs * scale + offset, ys * scale + offset)
        return {c: float(v) for c, v in zip(coords, values)}

    def detail(self, coord: HexCoordinate) -> float:
        return self.detail_all([coord])[coord]
