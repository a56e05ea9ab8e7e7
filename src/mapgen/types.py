"""Core value types for generated maps."""

from pydantic import BaseModel

from .terrain_types import ResourceType, TerrainType


class Position(BaseModel, frozen=True):
    """Immutable 2D tile coordinate."""

    x: int
    y: int

    def distance_squared(self, other: "Position") -> int:
        """Squared Euclidean distance to another position."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def __hash__(self) -> int:
        return hash((self.x, self.y))


class Tile(BaseModel, frozen=True):
    """Immutable view of one grid cell."""

    position: Position
    terrain: TerrainType
    resource: ResourceType | None = None

    @property
    def walkable(self) -> bool:
        return self.terrain.walkable

    @property
    def movement_cost(self) -> float:
        return self.terrain.movement_cost

