"""Terrain and resource types and their static properties."""

from enum import Enum

# Movement cost used for terrain that cannot be crossed at all
IMPASSABLE_COST = 999.0


class TerrainType(str, Enum):
    """Terrain categories with walkability and movement cost properties."""

    DEEP_WATER = "deep_water"
    SHALLOW_WATER = "shallow_water"
    SAND = "sand"
    GRASS = "grass"
    FOREST = "forest"
    HILLS = "hills"
    MOUNTAINS = "mountains"

    @property
    def walkable(self) -> bool:
        """Whether units can walk on or build over this terrain."""
        return self in _WALKABLE_TYPES

    @property
    def movement_cost(self) -> float:
        """Movement cost multiplier (>= 1.0, IMPASSABLE_COST if blocked)."""
        return _MOVEMENT_COSTS.get(self, IMPASSABLE_COST)

    @property
    def color(self) -> tuple[int, int, int]:
        """RGB display color."""
        return _TERRAIN_COLORS[self]


class ResourceType(str, Enum):
    """Resource nodes that can sit on a tile."""

    GOLD = "gold"
    IRON = "iron"
    WOOD = "wood"
    STONE = "stone"
    COINS = "coins"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def color(self) -> tuple[int, int, int]:
        """RGB display color."""
        return _RESOURCE_COLORS[self]


# Define sets for O(1) lookup
_WALKABLE_TYPES = frozenset({
    TerrainType.SAND,
    TerrainType.GRASS,
    TerrainType.FOREST,
    TerrainType.HILLS,
})

_MOVEMENT_COSTS: dict[TerrainType, float] = {
    TerrainType.SAND: 1.2,
    TerrainType.GRASS: 1.0,
    TerrainType.FOREST: 1.5,
    TerrainType.HILLS: 2.0,
}

_TERRAIN_COLORS: dict[TerrainType, tuple[int, int, int]] = {
    TerrainType.DEEP_WATER: (20, 60, 120),
    TerrainType.SHALLOW_WATER: (60, 120, 180),
    TerrainType.SAND: (210, 180, 140),
    TerrainType.GRASS: (80, 150, 60),
    TerrainType.FOREST: (40, 100, 40),
    TerrainType.HILLS: (120, 100, 80),
    TerrainType.MOUNTAINS: (150, 150, 150),
}

_RESOURCE_COLORS: dict[ResourceType, tuple[int, int, int]] = {
    ResourceType.GOLD: (255, 215, 0),
    ResourceType.IRON: (105, 105, 105),
    ResourceType.WOOD: (139, 69, 19),
    ResourceType.STONE: (128, 128, 128),
    ResourceType.COINS: (255, 223, 0),
}

# Compact uint8 codes used by the grid arrays. 0 means "no resource".
_TERRAIN_CODES: dict[TerrainType, int] = {t: i for i, t in enumerate(TerrainType)}
_TERRAIN_BY_CODE: dict[int, TerrainType] = {i: t for t, i in _TERRAIN_CODES.items()}
_RESOURCE_CODES: dict[ResourceType, int] = {
    r: i + 1 for i, r in enumerate(ResourceType)
}
_RESOURCE_BY_CODE: dict[int, ResourceType] = {i: r for r, i in _RESOURCE_CODES.items()}

NO_RESOURCE = 0


def terrain_value(terrain: TerrainType) -> int:
    """Convert TerrainType to its uint8 storage value."""
    return _TERRAIN_CODES[terrain]


def terrain_from_value(value: int) -> TerrainType:
    """Convert a uint8 storage value back to TerrainType.

    Unknown values decode to GRASS.
    """
    return _TERRAIN_BY_CODE.get(int(value), TerrainType.GRASS)


def resource_value(resource: ResourceType | None) -> int:
    """Convert ResourceType (or None) to its uint8 storage value."""
    if resource is None:
        return NO_RESOURCE
    return _RESOURCE_CODES[resource]


def resource_from_value(value: int) -> ResourceType | None:
    """Convert a uint8 storage value back to ResourceType (0 -> None)."""
    return _RESOURCE_BY_CODE.get(int(value))


def walkable_values() -> frozenset[int]:
    """Storage values of all walkable terrain types."""
    return frozenset(_TERRAIN_CODES[t] for t in _WALKABLE_TYPES)


def is_walkable(terrain: TerrainType) -> bool:
    return terrain.walkable


def movement_cost(terrain: TerrainType) -> float:
    return terrain.movement_cost
