"""Randomised terrain detail: forest spread and foothills."""

import numpy as np
from numpy.typing import NDArray

from ..terrain_types import TerrainType, terrain_value
from .coastal import count_neighbors
from .config import DetailConfig

_GRASS = terrain_value(TerrainType.GRASS)
_FOREST = terrain_value(TerrainType.FOREST)
_HILLS = terrain_value(TerrainType.HILLS)
_MOUNTAINS = terrain_value(TerrainType.MOUNTAINS)


def add_terrain_details(
    terrain: NDArray[np.uint8],
    rng: np.random.Generator,
    config: DetailConfig,
) -> NDArray[np.uint8]:
    """Grow forests into grassland and put hills at the foot of mountains.

    Neighbour counts come from the input snapshot. Each rule draws its own
    uniform sample per tile from ``rng``; where both fire, hills win.

    Args:
        terrain: Terrain value array.
        rng: Generator random stream.
        config: Detail pass parameters.

    Returns:
        New terrain array.
    """
    grass = terrain == _GRASS
    forest_neighbors = count_neighbors(terrain == _FOREST)
    mountain_neighbors = count_neighbors(terrain == _MOUNTAINS)

    forest_draw = rng.random(terrain.shape)
    hills_draw = rng.random(terrain.shape)

    to_forest = (
        grass
        & (forest_neighbors >= config.forest_min_neighbors)
        & (forest_draw < config.forest_spread_chance)
    )
    to_hills = grass & (mountain_neighbors >= 1) & (hills_draw < config.hills_chance)

    result = terrain.copy()
    result[to_forest] = _FOREST
    result[to_hills] = _HILLS
    return result
