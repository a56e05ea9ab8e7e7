"""Scalar field generation: elevation and moisture."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from ..exceptions import GridAllocationError
from .config import ElevationConfig, MoistureConfig
from .noise import PerlinNoise, coordinate_grid, smoothstep


@dataclass
class ScalarFields:
    """Intermediate elevation and moisture fields of one generation call."""

    elevation: NDArray[np.float32] | None = None
    moisture: NDArray[np.float32] | None = None

    def release(self) -> None:
        self.elevation = None
        self.moisture = None


@contextmanager
def scratch_fields() -> Iterator[ScalarFields]:
    """Hold the scalar fields for the duration of a generation call.

    The fields are released on every exit path. Running out of memory
    inside the block is reported as GridAllocationError.
    """
    fields = ScalarFields()
    try:
        yield fields
    except MemoryError as e:
        raise GridAllocationError("Out of memory while generating the map") from e
    finally:
        fields.release()


def make_elevation(
    noise: PerlinNoise,
    width: int,
    height: int,
    config: ElevationConfig,
) -> NDArray[np.float32]:
    """Generate elevation field.

    Blends large-scale fractal noise with ridged noise. Ridges are weighted
    in by smoothstep only where the base terrain is already high, so
    mountains grow out of highlands.

    Args:
        noise: Seeded noise source.
        width: Map width in tiles.
        height: Map height in tiles.
        config: Elevation generation parameters.

    Returns:
        2D elevation array, roughly in [0, 1].
    """
    xs, ys = coordinate_grid(width, height)
    scale = config.terrain_scale
    ridge_scale = scale * config.ridge_scale_factor

    base = noise.fractal(
        xs / scale,
        ys / scale,
        octaves=config.octaves,
        lacunarity=config.lacunarity,
        persistence=config.persistence,
    )
    ridges = noise.ridged(xs / ridge_scale, ys / ridge_scale, octaves=config.ridged_octaves)

    # Ridge influence only kicks in above the configured midpoint
    ridge_influence = smoothstep(config.ridge_start, config.ridge_end, base)
    weight = ridge_influence * config.ridge_weight
    elevation = base * (1.0 - weight) + ridges * weight

    return np.asarray(elevation, dtype=np.float32)


def make_moisture(
    noise: PerlinNoise,
    elevation: NDArray[np.float32],
    config: MoistureConfig,
    water_level: float,
) -> NDArray[np.float32]:
    """Generate moisture field.

    Independent fractal noise sampled at offset coordinates, raised toward
    a wetter baseline wherever elevation is near the water level.

    Args:
        noise: Seeded noise source.
        elevation: Elevation field (defines shape and coastal band).
        config: Moisture generation parameters.
        water_level: Classification water level.

    Returns:
        2D moisture array in [0, 1].
    """
    height, width = elevation.shape
    xs, ys = coordinate_grid(width, height)
    scale = config.moisture_scale

    moisture = noise.fractal(
        xs / scale + config.offset,
        ys / scale + config.offset,
        octaves=config.octaves,
        lacunarity=config.lacunarity,
        persistence=config.persistence,
    )
    moisture = np.asarray(moisture, dtype=np.float32)

    # Moisture rises near coastlines
    coastal = elevation < water_level + config.coast_band
    moisture[coastal] = moisture[coastal] * 0.5 + 0.5

    return np.clip(moisture, 0.0, 1.0).astype(np.float32)
