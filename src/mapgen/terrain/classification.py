"""Biome classification: (elevation, moisture) -> terrain type."""

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from ..terrain_types import TerrainType, terrain_value
from .config import ClassificationConfig


class BiomeType(str, Enum):
    """Intermediate biome categories produced by classification."""

    OCEAN = "ocean"
    BEACH = "beach"
    GRASSLAND = "grassland"
    FOREST = "forest"
    DENSE_FOREST = "dense_forest"
    HILLS = "hills"
    MOUNTAINS = "mountains"
    SNOW_PEAKS = "snow_peaks"
    DESERT = "desert"
    WETLAND = "wetland"


BIOME_TERRAIN: dict[BiomeType, TerrainType] = {
    BiomeType.OCEAN: TerrainType.DEEP_WATER,
    BiomeType.BEACH: TerrainType.SAND,
    BiomeType.GRASSLAND: TerrainType.GRASS,
    BiomeType.FOREST: TerrainType.FOREST,
    BiomeType.DENSE_FOREST: TerrainType.FOREST,
    BiomeType.HILLS: TerrainType.HILLS,
    BiomeType.MOUNTAINS: TerrainType.MOUNTAINS,
    BiomeType.SNOW_PEAKS: TerrainType.MOUNTAINS,
    BiomeType.DESERT: TerrainType.SAND,
    BiomeType.WETLAND: TerrainType.SHALLOW_WATER,
}


def biome_to_terrain(biome: BiomeType) -> TerrainType:
    return BIOME_TERRAIN[biome]


def classify_biome(
    elevation: float,
    moisture: float,
    config: ClassificationConfig,
) -> BiomeType:
    """Classify a single tile. Rules are checked in order, first match wins."""
    if elevation < config.water_level:
        return BiomeType.OCEAN
    if elevation < config.water_level + config.beach_width:
        return BiomeType.BEACH

    if elevation > config.peak_threshold:
        return BiomeType.SNOW_PEAKS
    if elevation > config.mountain_threshold:
        return BiomeType.MOUNTAINS
    if elevation > config.mountain_threshold - config.hills_band:
        return BiomeType.HILLS

    # Mid elevations: moisture decides
    if moisture < config.desert_moisture:
        return BiomeType.DESERT
    if moisture > config.forest_moisture + config.dense_forest_offset:
        return BiomeType.DENSE_FOREST
    if moisture > config.forest_moisture:
        return BiomeType.FOREST
    if (
        moisture > config.forest_moisture - config.wetland_band
        and elevation < config.water_level + config.wetland_elevation_band
    ):
        return BiomeType.WETLAND

    return BiomeType.GRASSLAND


def _biome_rules(
    elevation: NDArray[np.float32],
    moisture: NDArray[np.float32],
    config: ClassificationConfig,
) -> list[tuple[NDArray[np.bool_], BiomeType]]:
    """Vectorised form of classify_biome, in the same priority order."""
    return [
        (elevation < config.water_level, BiomeType.OCEAN),
        (elevation < config.water_level + config.beach_width, BiomeType.BEACH),
        (elevation > config.peak_threshold, BiomeType.SNOW_PEAKS),
        (elevation > config.mountain_threshold, BiomeType.MOUNTAINS),
        (elevation > config.mountain_threshold - config.hills_band, BiomeType.HILLS),
        (moisture < config.desert_moisture, BiomeType.DESERT),
        (
            moisture > config.forest_moisture + config.dense_forest_offset,
            BiomeType.DENSE_FOREST,
        ),
        (moisture > config.forest_moisture, BiomeType.FOREST),
        (
            (moisture > config.forest_moisture - config.wetland_band)
            & (elevation < config.water_level + config.wetland_elevation_band),
            BiomeType.WETLAND,
        ),
    ]


def classify_terrain(
    elevation: NDArray[np.float32],
    moisture: NDArray[np.float32],
    config: ClassificationConfig,
) -> NDArray[np.uint8]:
    """Classify every cell into a terrain type.

    Args:
        elevation: Elevation field.
        moisture: Moisture field [0, 1].
        config: Classification thresholds.

    Returns:
        2D array of terrain storage values as uint8.
    """
    rules = _biome_rules(elevation, moisture, config)
    conditions = [condition for condition, _ in rules]
    choices = [terrain_value(biome_to_terrain(biome)) for _, biome in rules]

    # np.select takes the first matching condition, like classify_biome
    floor = np.select(
        conditions,
        choices,
        default=terrain_value(biome_to_terrain(BiomeType.GRASSLAND)),
    )
    return floor.astype(np.uint8)
