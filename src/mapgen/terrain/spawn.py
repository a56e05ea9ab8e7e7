"""Spawn positions and spawn area clearing."""

import numpy as np
import structlog

from ..grid import TileGrid
from ..terrain_types import NO_RESOURCE, TerrainType, terrain_value, walkable_values
from ..types import Position
from .coastal import smooth_coastlines

logger = structlog.get_logger()

MAX_PLAYERS = 4

# Spawn corners in unit coordinates, in slot order:
# top-left, bottom-right, top-right, bottom-left
SPAWN_CORNERS: tuple[tuple[int, int], ...] = ((0, 0), (1, 1), (1, 0), (0, 1))


def active_player_count(player_count: int) -> int:
    """Clamp a requested player count to the supported spawn slots."""
    return max(0, min(player_count, MAX_PLAYERS))


def spawn_corners(player_count: int) -> list[tuple[int, int]]:
    """Unit-coordinate corners of the active spawn slots."""
    return list(SPAWN_CORNERS[: active_player_count(player_count)])


def spawn_positions(
    width: int,
    height: int,
    player_count: int,
    margin: int,
) -> list[Position]:
    """Starting tile of each active player.

    Spawns sit in the grid corners, inset by ``margin``. The margin is
    clamped to a quarter of each dimension so spawns never cross over on
    small maps.

    Args:
        width: Map width in tiles.
        height: Map height in tiles.
        player_count: Requested number of players (0-4 spawns are active).
        margin: Inset from the corners in tiles.

    Returns:
        Active spawn positions in slot order.
    """
    if width <= 0 or height <= 0:
        return []

    margin = max(0, min(margin, width // 4, height // 4))
    positions = []
    for ux, uy in spawn_corners(player_count):
        x = margin if ux == 0 else width - margin - 1
        y = margin if uy == 0 else height - margin - 1
        positions.append(Position(x=x, y=y))
    return positions


def clear_spawn_areas(grid: TileGrid, spawns: list[Position], radius: int) -> None:
    """Guarantee open ground around every spawn.

    Tiles within ``radius // 2`` become grass with no resource. Tiles within
    ``radius`` that cannot be walked on become grass, keeping any resource.
    The coastline is re-sealed afterwards so cleared ground never touches
    deep water.

    Args:
        grid: Tile grid, modified in place.
        spawns: Active spawn positions.
        radius: Outer clearing radius in tiles.
    """
    inner_radius = radius // 2
    grass = terrain_value(TerrainType.GRASS)
    walkable = np.array(sorted(walkable_values()), dtype=np.uint8)
    terrain = grid.terrain
    resources = grid.resources

    for spawn in spawns:
        # Only the bounding window of the circle can change
        x0, x1 = max(0, spawn.x - radius), min(grid.width, spawn.x + radius + 1)
        y0, y1 = max(0, spawn.y - radius), min(grid.height, spawn.y + radius + 1)
        if x0 >= x1 or y0 >= y1:
            continue

        ys, xs = np.ogrid[y0:y1, x0:x1]
        dist_sq = (xs - spawn.x) ** 2 + (ys - spawn.y) ** 2

        window_terrain = terrain[y0:y1, x0:x1]
        window_resources = resources[y0:y1, x0:x1]

        inner = dist_sq < inner_radius * inner_radius
        outer = (dist_sq < radius * radius) & ~inner
        blocked = ~np.isin(window_terrain, walkable)

        window_terrain[inner] = grass
        window_resources[inner] = NO_RESOURCE
        window_terrain[outer & blocked] = grass

    terrain[:] = smooth_coastlines(terrain)

    logger.debug("spawn_areas_cleared", spawns=len(spawns), radius=radius)
