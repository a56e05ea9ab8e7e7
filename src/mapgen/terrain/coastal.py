"""Neighbourhood smoothing: coastlines and majority-neighbour cleanup.

All passes read a snapshot of the grid and write a new array, so sweep
order never biases the result.
"""

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..terrain_types import TerrainType, terrain_value

# 3x3 kernel for counting neighbours: 8-connected, exclude center
NEIGHBOR_KERNEL = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.int32)

_DEEP = terrain_value(TerrainType.DEEP_WATER)
_SHALLOW = terrain_value(TerrainType.SHALLOW_WATER)
_GRASS = terrain_value(TerrainType.GRASS)
_MOUNTAINS = terrain_value(TerrainType.MOUNTAINS)


def count_neighbors(mask: NDArray[np.bool_]) -> NDArray[np.int32]:
    """Count True cells in each cell's 8-neighbourhood.

    Cells outside the grid count as False.
    """
    if mask.size == 0:
        return np.zeros(mask.shape, dtype=np.int32)
    return ndimage.convolve(mask.astype(np.int32), NEIGHBOR_KERNEL, mode="constant", cval=0)


def smooth_coastlines(terrain: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Turn deep water touching land into shallow water.

    Afterwards no deep water tile is 8-adjacent to anything but water.

    Args:
        terrain: Terrain value array.

    Returns:
        New terrain array.
    """
    land = (terrain != _DEEP) & (terrain != _SHALLOW)
    touches_land = count_neighbors(land) > 0

    result = terrain.copy()
    result[(terrain == _DEEP) & touches_land] = _SHALLOW
    return result


def majority_smooth(
    terrain: NDArray[np.uint8],
    iterations: int = 2,
    grass_threshold: int = 5,
    mountain_threshold: int = 6,
) -> NDArray[np.uint8]:
    """Remove isolated specks of terrain.

    A tile matching at most one of its 8 neighbours, other than grass or
    mountains, becomes grass when enough neighbours are grass. Grass
    walled in by mountains becomes mountains.

    Args:
        terrain: Terrain value array.
        iterations: Number of smoothing passes.
        grass_threshold: Grass neighbours needed to absorb an isolated tile.
        mountain_threshold: Mountain neighbours needed to absorb grass.

    Returns:
        Smoothed terrain array.
    """
    result = terrain.copy()

    for _ in range(iterations):
        same_count = np.zeros(result.shape, dtype=np.int32)
        for value in np.unique(result):
            is_value = result == value
            same_count[is_value] = count_neighbors(is_value)[is_value]

        grass_count = count_neighbors(result == _GRASS)
        mountain_count = count_neighbors(result == _MOUNTAINS)

        isolated = (
            (same_count <= 1)
            & (result != _GRASS)
            & (result != _MOUNTAINS)
            & (grass_count >= grass_threshold)
        )
        walled_in = (result == _GRASS) & (mountain_count >= mountain_threshold)

        result = result.copy()
        result[isolated] = _GRASS
        result[walled_in] = _MOUNTAINS

    return result
