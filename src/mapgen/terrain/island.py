"""Continent shaping: radial falloff, spawn corner boosts, river valleys."""

import numpy as np
from numpy.typing import NDArray

from .config import IslandConfig, RiverConfig
from .noise import PerlinNoise, coordinate_grid, smoothstep


def apply_radial_falloff(
    elevation: NDArray[np.float32],
    config: IslandConfig,
) -> NDArray[np.float32]:
    """Apply centered radial falloff to create an island silhouette.

    Distance is normalised per axis, so the falloff is elliptical on
    non-square maps and reaches 1.0 at the middle of each edge.

    Args:
        elevation: Input elevation field.
        config: Island shaping parameters.

    Returns:
        Elevation multiplied by the falloff.
    """
    height, width = elevation.shape
    xx, yy = coordinate_grid(width, height)

    cx, cy = width / 2.0, height / 2.0
    dx = (xx - cx) / cx
    dy = (yy - cy) / cy
    dist = np.sqrt(dx**2 + dy**2)

    falloff = 1.0 - smoothstep(config.falloff_start, config.falloff_end, dist)

    return (elevation * falloff).astype(np.float32)


def apply_spawn_boost(
    elevation: NDArray[np.float32],
    corners: list[tuple[float, float]],
    config: IslandConfig,
) -> NDArray[np.float32]:
    """Raise land near the grid corners used as spawn anchors.

    Args:
        elevation: Input elevation field.
        corners: Anchor corners in unit coordinates, e.g. (0, 0) for the
            top-left and (1, 1) for the bottom-right corner.
        config: Island shaping parameters.

    Returns:
        Elevation with the strongest corner boost added per tile.
    """
    height, width = elevation.shape
    if not corners:
        return elevation.copy()

    xx, yy = coordinate_grid(width, height)
    fw, fh = float(width), float(height)

    boost = np.zeros((height, width), dtype=np.float64)
    for ux, uy in corners:
        corner_dist = np.sqrt((xx - ux * fw) ** 2 + (yy - uy * fh) ** 2) / fw
        corner_boost = (
            1.0 - smoothstep(0.0, config.spawn_boost_radius, corner_dist)
        ) * config.spawn_boost
        boost = np.maximum(boost, corner_boost)

    return (elevation + boost).astype(np.float32)


def shape_continent(
    elevation: NDArray[np.float32],
    corners: list[tuple[float, float]],
    config: IslandConfig,
) -> NDArray[np.float32]:
    """Island falloff followed by spawn corner boosts."""
    elevation = apply_radial_falloff(elevation, config)
    return apply_spawn_boost(elevation, corners, config)


def carve_river_valleys(
    elevation: NDArray[np.float32],
    moisture: NDArray[np.float32],
    noise: PerlinNoise,
    config: RiverConfig,
) -> tuple[NDArray[np.float32], NDArray[np.float32]]:
    """Carve two domain-warped river valleys crossing the map centre.

    A horizontal and a vertical band, both offset by low-frequency noise,
    lower elevation and raise moisture along their course.

    Args:
        elevation: Elevation field.
        moisture: Moisture field.
        noise: Seeded noise source for the warp.
        config: River carving parameters.

    Returns:
        Tuple of (elevation, moisture) with valleys applied.
    """
    if not config.enabled:
        return elevation.copy(), moisture.copy()

    height, width = elevation.shape
    xx, yy = coordinate_grid(width, height)

    warp = noise.noise(xx / config.warp_scale, yy / config.warp_scale) * config.warp_amplitude

    river_h_dist = np.abs(yy - height * 0.5 + warp)
    river_h = 1.0 - smoothstep(0.0, config.half_width, river_h_dist)

    river_v_dist = np.abs(xx - width * 0.5 + warp)
    river_v = 1.0 - smoothstep(0.0, config.half_width, river_v_dist)

    river = np.maximum(river_h, river_v)

    carved = elevation - river * config.depth
    wetted = np.minimum(1.0, moisture + river * config.moisture_gain)

    return carved.astype(np.float32), wetted.astype(np.float32)
