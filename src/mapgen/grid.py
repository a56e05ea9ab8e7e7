"""Array-backed tile grid returned by map generation."""

from collections import Counter

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, PrivateAttr

from .exceptions import GridAllocationError, GridReleasedError, TileOutOfBoundsError
from .terrain_types import (
    NO_RESOURCE,
    ResourceType,
    TerrainType,
    resource_from_value,
    resource_value,
    terrain_from_value,
    terrain_value,
)
from .types import Position, Tile


class TileGrid(BaseModel):
    """Dense width x height grid of tiles.

    Terrain and resources are stored as two uint8 arrays of shape
    (height, width), indexed [y, x]. Tile objects are created on demand.
    """

    width: int
    height: int

    _terrain: NDArray[np.uint8] | None = PrivateAttr(default=None)
    _resources: NDArray[np.uint8] | None = PrivateAttr(default=None)
    _released: bool = PrivateAttr(default=False)

    @classmethod
    def allocate(cls, width: int, height: int) -> "TileGrid":
        """Allocate a grid filled with deep water and no resources.

        Raises:
            GridAllocationError: If dimensions are negative or memory
                cannot be reserved.
        """
        if width < 0 or height < 0:
            raise GridAllocationError(
                f"Grid dimensions must be non-negative, got {width}x{height}"
            )
        try:
            terrain = np.zeros((height, width), dtype=np.uint8)
            resources = np.zeros((height, width), dtype=np.uint8)
        except MemoryError as e:
            raise GridAllocationError(
                f"Cannot allocate {width}x{height} tile grid"
            ) from e

        grid = cls(width=width, height=height)
        grid._terrain = terrain
        grid._resources = resources
        return grid

    @property
    def terrain(self) -> NDArray[np.uint8]:
        """Terrain storage values, shape (height, width). Mutable during generation."""
        self._check_alive()
        return self._terrain

    @property
    def resources(self) -> NDArray[np.uint8]:
        """Resource storage values (0 = none), shape (height, width)."""
        self._check_alive()
        return self._resources

    @property
    def released(self) -> bool:
        return self._released

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if a coordinate lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        """Get the tile at (x, y).

        Raises:
            TileOutOfBoundsError: If (x, y) is outside the grid.
            GridReleasedError: If the grid storage was released.
        """
        self._check_alive()
        self._check_bounds(x, y)
        return Tile(
            position=Position(x=x, y=y),
            terrain=terrain_from_value(self._terrain[y, x]),
            resource=resource_from_value(self._resources[y, x]),
        )

    def terrain_at(self, x: int, y: int) -> TerrainType:
        self._check_alive()
        self._check_bounds(x, y)
        return terrain_from_value(self._terrain[y, x])

    def resource_at(self, x: int, y: int) -> ResourceType | None:
        self._check_alive()
        self._check_bounds(x, y)
        return resource_from_value(self._resources[y, x])

    def set_terrain(self, x: int, y: int, terrain: TerrainType) -> None:
        self._check_alive()
        self._check_bounds(x, y)
        self._terrain[y, x] = terrain_value(terrain)

    def set_resource(self, x: int, y: int, resource: ResourceType | None) -> None:
        self._check_alive()
        self._check_bounds(x, y)
        self._resources[y, x] = resource_value(resource)

    def is_walkable(self, x: int, y: int) -> bool:
        """Check walkability without creating a Tile object."""
        return self.terrain_at(x, y).walkable

    def movement_cost(self, x: int, y: int) -> float:
        return self.terrain_at(x, y).movement_cost

    def walkable_mask(self) -> NDArray[np.bool_]:
        """Boolean mask of walkable tiles."""
        self._check_alive()
        walkable = np.array(
            [terrain_from_value(v).walkable for v in range(len(TerrainType))]
        )
        return walkable[self._terrain]

    def count_terrain(self) -> dict[TerrainType, int]:
        """Number of tiles per terrain type (types with zero tiles omitted)."""
        self._check_alive()
        values, counts = np.unique(self._terrain, return_counts=True)
        return {terrain_from_value(v): int(c) for v, c in zip(values, counts)}

    def count_resources(self) -> Counter[ResourceType]:
        """Number of resource nodes per resource type."""
        self._check_alive()
        placed = self._resources[self._resources != NO_RESOURCE]
        return Counter(resource_from_value(v) for v in placed)

    def release(self) -> None:
        """Drop the row storage. Further tile access raises GridReleasedError."""
        self._terrain = None
        self._resources = None
        self._released = True

    def _check_alive(self) -> None:
        if self._released:
            raise GridReleasedError("Tile grid storage has been released")

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise TileOutOfBoundsError(
                f"Tile ({x}, {y}) outside {self.width}x{self.height} grid"
            )
