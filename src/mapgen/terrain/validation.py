"""Post-generation validation of map invariants."""

import numpy as np
import structlog

from ..grid import TileGrid
from ..terrain_types import NO_RESOURCE, TerrainType, terrain_value
from ..types import Position
from .coastal import count_neighbors
from .resources import SpawnResourceReport

logger = structlog.get_logger()


class ValidationResult:
    """Result of map validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_map(
    grid: TileGrid,
    spawns: list[Position],
    clear_radius: int,
    reports: list[SpawnResourceReport] | None = None,
) -> ValidationResult:
    """Validate a generated grid against the map invariants.

    Errors are broken invariants (deep water touching land, resources on
    unwalkable terrain, obstructed spawns). Starting resource shortfalls
    are only warnings.

    Args:
        grid: Generated tile grid.
        spawns: Active spawn positions.
        clear_radius: Spawn clearing radius used during generation.
        reports: Spawn resource reports, if available.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    if not grid.is_empty:
        _check_coastline(grid, result)
        _check_resource_placement(grid, result)
        _check_spawn_clearance(grid, spawns, clear_radius // 2, result)
    _check_spawn_resources(reports or [], result)

    if result.passed:
        logger.debug("map_validation_passed", warnings=len(result.warnings))
    else:
        logger.warning(
            "map_validation_failed",
            errors=result.errors,
            warnings=result.warnings,
        )

    return result


def _check_coastline(grid: TileGrid, result: ValidationResult) -> None:
    """Check that no deep water touches land."""
    terrain = grid.terrain
    deep = terrain == terrain_value(TerrainType.DEEP_WATER)
    shallow = terrain == terrain_value(TerrainType.SHALLOW_WATER)
    land = ~deep & ~shallow

    exposed = np.count_nonzero(deep & (count_neighbors(land) > 0))
    if exposed > 0:
        result.add_error(f"{exposed} deep water tiles border land")


def _check_resource_placement(grid: TileGrid, result: ValidationResult) -> None:
    """Check resources sit on walkable terrain."""
    has_resource = grid.resources != NO_RESOURCE
    invalid = np.count_nonzero(has_resource & ~grid.walkable_mask())
    if invalid > 0:
        result.add_error(f"{invalid} resources on unwalkable terrain")


def _check_spawn_clearance(
    grid: TileGrid,
    spawns: list[Position],
    inner_radius: int,
    result: ValidationResult,
) -> None:
    """Check each spawn's inner circle is plain grass."""
    grass = terrain_value(TerrainType.GRASS)
    ys, xs = np.ogrid[: grid.height, : grid.width]

    for spawn in spawns:
        inner = (xs - spawn.x) ** 2 + (ys - spawn.y) ** 2 < inner_radius * inner_radius
        blocked = np.count_nonzero(inner & (grid.terrain != grass))
        occupied = np.count_nonzero(inner & (grid.resources != NO_RESOURCE))
        if blocked or occupied:
            result.add_error(
                f"Spawn ({spawn.x}, {spawn.y}) has {blocked} non-grass and "
                f"{occupied} occupied tiles in its clear zone"
            )


def _check_spawn_resources(
    reports: list[SpawnResourceReport],
    result: ValidationResult,
) -> None:
    """Warn about spawns that missed their starting resource targets."""
    for report in reports:
        if not report.targets_met:
            missing = {
                kind.value: target - report.placed.get(kind, 0)
                for kind, target in report.targets.items()
                if report.placed.get(kind, 0) < target
            }
            result.add_warning(
                f"Spawn ({report.spawn.x}, {report.spawn.y}) short of "
                f"starting resources: {missing}"
            )
