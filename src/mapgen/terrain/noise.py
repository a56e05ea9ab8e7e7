"""Noise generation functions for map generation.

Provides seeded gradient (Perlin) noise with fractal and ridged variants,
plus the smoothstep easing used for all thresholding. Every function is
vectorised over numpy coordinate arrays and also accepts plain floats.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

PERMUTATION_SIZE = 256

# 8 gradient directions: axis-aligned and diagonal unit vectors
_GRADIENTS = np.array(
    [
        [1.0, 0.0],
        [-1.0, 0.0],
        [0.0, 1.0],
        [0.0, -1.0],
        [0.7071, 0.7071],
        [-0.7071, 0.7071],
        [0.7071, -0.7071],
        [-0.7071, -0.7071],
    ],
    dtype=np.float64,
)


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
    t: NDArray[np.float64],
) -> NDArray[np.float64]:
    return a + t * (b - a)


def _output(values: NDArray[np.float64]) -> NDArray[np.float64] | float:
    """Return plain floats for scalar input, arrays otherwise."""
    if values.ndim == 0:
        return float(values)
    return values


class PerlinNoise:
    """Seeded 2D gradient noise.

    The permutation table is shuffled once from the seed and reused for every
    lookup, so output is a pure function of (seed, x, y).
    """

    def __init__(self, seed: int):
        self.seed = seed
        # Negative seeds wrap to their unsigned 64-bit value
        rng = np.random.default_rng(seed % 2**64)
        perm = rng.permutation(PERMUTATION_SIZE).astype(np.int64)
        # Doubled so hashed lookups never need to wrap
        self.perm = np.concatenate([perm, perm])

    def noise(self, x: ArrayLike, y: ArrayLike) -> NDArray[np.float64] | float:
        """Sample base noise.

        Args:
            x: X coordinates in noise space.
            y: Y coordinates in noise space.

        Returns:
            Noise values in [0, 1], same shape as the broadcast inputs.
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        x_floor = np.floor(x)
        y_floor = np.floor(y)
        xf = x - x_floor
        yf = y - y_floor
        xi = x_floor.astype(np.int64) & (PERMUTATION_SIZE - 1)
        yi = y_floor.astype(np.int64) & (PERMUTATION_SIZE - 1)

        u = _fade(xf)
        v = _fade(yf)

        perm = self.perm
        aa = perm[perm[xi] + yi]
        ab = perm[perm[xi] + yi + 1]
        ba = perm[perm[xi + 1] + yi]
        bb = perm[perm[xi + 1] + yi + 1]

        x1 = _lerp(self._grad(aa, xf, yf), self._grad(ba, xf - 1.0, yf), u)
        x2 = _lerp(self._grad(ab, xf, yf - 1.0), self._grad(bb, xf - 1.0, yf - 1.0), u)

        return _output((_lerp(x1, x2, v) + 1.0) / 2.0)

    def fractal(
        self,
        x: ArrayLike,
        y: ArrayLike,
        octaves: int = 6,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> NDArray[np.float64] | float:
        """Multi-octave fractal noise.

        Sums octaves at increasing frequency and decreasing amplitude,
        normalised by the total amplitude.

        Args:
            x: X coordinates in noise space.
            y: Y coordinates in noise space.
            octaves: Number of noise layers to sum. Zero yields all zeros.
            lacunarity: Frequency multiplier between octaves.
            persistence: Amplitude multiplier between octaves.

        Returns:
            Noise values in [0, 1].
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)

        frequency = 1.0
        amplitude = 1.0
        max_value = 0.0

        for _ in range(octaves):
            total += self.noise(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        if max_value == 0.0:
            return _output(total)
        return _output(total / max_value)

    def ridged(
        self,
        x: ArrayLike,
        y: ArrayLike,
        octaves: int = 4,
    ) -> NDArray[np.float64] | float:
        """Ridged noise for mountain ranges.

        Each octave is folded with 1 - |2n - 1| and squared to sharpen
        crests; amplitude halves and frequency doubles per octave.

        Returns:
            Noise values in [0, 1]. Zero octaves yields all zeros.
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)

        frequency = 1.0
        amplitude = 1.0
        max_value = 0.0

        for _ in range(octaves):
            n = self.noise(x * frequency, y * frequency)
            n = 1.0 - np.abs(n * 2.0 - 1.0)
            n = n * n
            total += n * amplitude
            max_value += amplitude
            amplitude *= 0.5
            frequency *= 2.0

        if max_value == 0.0:
            return _output(total)
        return _output(total / max_value)

    @staticmethod
    def _grad(
        hash_values: NDArray[np.int64],
        x: NDArray[np.float64],
        y: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        g = _GRADIENTS[hash_values & 7]
        return g[..., 0] * x + g[..., 1] * y


def coordinate_grid(
    width: int,
    height: int,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Tile coordinate arrays of shape (height, width).

    Returns:
        Tuple of (xs, ys) where xs[y, x] == x and ys[y, x] == y.
    """
    x_coords = np.arange(width, dtype=np.float64)
    y_coords = np.arange(height, dtype=np.float64)
    xx, yy = np.meshgrid(x_coords, y_coords)
    return xx, yy


def smoothstep(edge0: float, edge1: float, x: ArrayLike) -> NDArray[np.float64] | float:
    """Smooth Hermite interpolation between 0 and 1.

    Computes t = clamp((x - edge0) / (edge1 - edge0), 0, 1) and returns
    t * t * (3 - 2t). Equal edges give a hard step at edge0.

    Args:
        edge0: Lower edge of transition.
        edge1: Upper edge of transition.
        x: Input values.

    Returns:
        Smoothly interpolated values in [0, 1].
    """
    x = np.asarray(x, dtype=np.float64)
    if edge1 == edge0:
        return _output(np.where(x >= edge0, 1.0, 0.0))
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return _output(t * t * (3.0 - 2.0 * t))
