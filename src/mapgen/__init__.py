"""Procedural, symmetric skirmish map generation."""

from .exceptions import (
    GridAllocationError,
    GridReleasedError,
    MapGenError,
    TileOutOfBoundsError,
)
from .grid import TileGrid
from .terrain import (
    GenerationResult,
    MapConfig,
    generate,
    generate_map,
    generate_symmetric,
    load_config,
)
from .terrain_types import (
    IMPASSABLE_COST,
    ResourceType,
    TerrainType,
    is_walkable,
    movement_cost,
)
from .types import Position, Tile

__all__ = [
    # Types
    "Position",
    "Tile",
    "TerrainType",
    "ResourceType",
    "IMPASSABLE_COST",
    "is_walkable",
    "movement_cost",
    # Grid
    "TileGrid",
    # Generation
    "GenerationResult",
    "MapConfig",
    "generate",
    "generate_map",
    "generate_symmetric",
    "load_config",
    # Exceptions
    "MapGenError",
    "GridAllocationError",
    "GridReleasedError",
    "TileOutOfBoundsError",
]
