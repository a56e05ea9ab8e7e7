"""Resource placement: noise-biased scatter, zones, and spawn guarantees."""

import math
from collections import Counter
from dataclasses import dataclass, field

import numpy as np
import structlog
from numpy.typing import NDArray

from ..grid import TileGrid
from ..terrain_types import (
    NO_RESOURCE,
    ResourceType,
    TerrainType,
    resource_value,
    terrain_value,
)
from ..types import Position
from .coastal import count_neighbors
from .config import ResourceConfig, ResourceZoneConfig
from .noise import PerlinNoise, coordinate_grid

logger = structlog.get_logger()


@dataclass
class SpawnResourceReport:
    """Outcome of the starting resource guarantee for one spawn."""

    spawn: Position
    targets: dict[ResourceType, int]
    placed: dict[ResourceType, int] = field(default_factory=dict)
    attempts: int = 0

    @property
    def targets_met(self) -> bool:
        return all(self.placed.get(kind, 0) >= n for kind, n in self.targets.items())


def resource_affinity(
    noise: PerlinNoise,
    width: int,
    height: int,
    config: ResourceConfig,
) -> NDArray[np.float64]:
    """Clustering noise that biases where resources appear, in [0, 1]."""
    xs, ys = coordinate_grid(width, height)
    return noise.noise(
        xs / config.noise_scale + config.noise_offset,
        ys / config.noise_scale + config.noise_offset,
    )


def place_resources(
    grid: TileGrid,
    noise: PerlinNoise,
    rng: np.random.Generator,
    config: ResourceConfig,
) -> Counter[ResourceType]:
    """Scatter resources over walkable tiles.

    Rules are tried in order and the first that fires wins: gold near the
    map centre, iron on hills or next to mountains, stone on hills, wood in
    forests. Every rule draws its own uniform sample per tile. Existing
    resources are never overwritten.

    Args:
        grid: Tile grid, modified in place.
        noise: Seeded noise source for the affinity field.
        rng: Generator random stream.
        config: Resource placement parameters.

    Returns:
        Number of resources placed per type.
    """
    terrain = grid.terrain
    height, width = terrain.shape
    affinity = resource_affinity(noise, width, height, config)

    xs, ys = coordinate_grid(width, height)
    center_dist = np.sqrt((xs - width / 2) ** 2 + (ys - height / 2) ** 2) / max(width, 1)

    hills = terrain == terrain_value(TerrainType.HILLS)
    forest = terrain == terrain_value(TerrainType.FOREST)
    near_mountains = count_neighbors(terrain == terrain_value(TerrainType.MOUNTAINS)) > 0

    richness = config.richness
    rules: list[tuple[ResourceType, NDArray[np.bool_], float, float]] = [
        (
            ResourceType.GOLD,
            center_dist < config.gold_center_radius,
            config.gold_noise_threshold,
            config.gold_chance,
        ),
        (
            ResourceType.IRON,
            hills | near_mountains,
            config.iron_noise_threshold,
            config.iron_chance,
        ),
        (ResourceType.STONE, hills, config.stone_noise_threshold, config.stone_chance),
        (ResourceType.WOOD, forest, config.wood_noise_threshold, config.wood_chance),
    ]

    free = grid.walkable_mask() & (grid.resources == NO_RESOURCE)
    placed: Counter[ResourceType] = Counter()

    for kind, allowed, noise_threshold, chance in rules:
        draw = rng.random(terrain.shape)
        hit = free & allowed & (affinity > noise_threshold) & (draw < chance * richness)
        grid.resources[hit] = resource_value(kind)
        free &= ~hit
        placed[kind] += int(np.count_nonzero(hit))

    logger.debug("resources_scattered", **{k.value: v for k, v in placed.items()})
    return placed


def _try_place(grid: TileGrid, x: int, y: int, kind: ResourceType) -> bool:
    if not grid.in_bounds(x, y):
        return False
    if not grid.is_walkable(x, y) or grid.resource_at(x, y) is not None:
        return False
    grid.set_resource(x, y, kind)
    return True


def place_resource_zone(
    grid: TileGrid,
    rng: np.random.Generator,
    kind: ResourceType,
    center: Position,
    radius: float,
    count: int,
    attempts_per_resource: int = 50,
) -> int:
    """Place up to ``count`` resources within ``radius`` of ``center``.

    Rejection sampling: a random angle and distance are drawn and the tile
    is accepted if it is in bounds, walkable and free. Gives up after
    ``count * attempts_per_resource`` draws.

    Returns:
        Number of resources actually placed.
    """
    placed = 0
    max_attempts = count * attempts_per_resource

    for _ in range(max_attempts):
        if placed >= count:
            break
        angle = rng.random() * math.pi * 2.0
        dist = rng.random() * radius
        x = center.x + int(math.cos(angle) * dist)
        y = center.y + int(math.sin(angle) * dist)
        if _try_place(grid, x, y, kind):
            placed += 1

    if placed < count:
        logger.debug(
            "resource_zone_short",
            kind=kind.value,
            center=(center.x, center.y),
            placed=placed,
            requested=count,
        )
    return placed


def place_zones(
    grid: TileGrid,
    rng: np.random.Generator,
    zones: list[ResourceZoneConfig],
    spawns: list[Position],
    attempts_per_resource: int = 50,
) -> Counter[ResourceType]:
    """Place every configured resource zone.

    A zone anchored at "center" is placed once around the map centre; one
    anchored at "spawns" is placed around each active spawn.
    """
    placed: Counter[ResourceType] = Counter()
    map_center = Position(x=grid.width // 2, y=grid.height // 2)

    for zone in zones:
        anchors = [map_center] if zone.anchor == "center" else spawns
        for anchor in anchors:
            placed[zone.kind] += place_resource_zone(
                grid,
                rng,
                zone.kind,
                anchor,
                zone.radius,
                zone.count,
                attempts_per_resource,
            )
    return placed


def _spawn_targets(config: ResourceConfig) -> dict[ResourceType, int]:
    return {
        ResourceType.WOOD: config.spawn_wood,
        ResourceType.STONE: config.spawn_stone,
        ResourceType.GOLD: config.spawn_gold,
    }


def _inside_inner_circle(pos: Position, spawns: list[Position], half: int) -> bool:
    return any(pos.distance_squared(spawn) < half * half for spawn in spawns)


def ensure_spawn_resources(
    grid: TileGrid,
    rng: np.random.Generator,
    spawns: list[Position],
    radius: int,
    config: ResourceConfig,
) -> list[SpawnResourceReport]:
    """Best-effort starting resources around each spawn.

    Samples an annulus from ``radius // 2`` out to ``radius`` and fills, in
    order of preference, wood on forest, stone on hills or grass and gold
    on grass. Tiles inside any spawn's inner circle are skipped because
    spawn clearing empties them afterwards. Stops when all targets are met
    or after ``config.spawn_attempts`` draws; a shortfall is logged, not
    raised.

    Args:
        grid: Tile grid, modified in place.
        rng: Generator random stream.
        spawns: Active spawn positions.
        radius: Spawn clearing radius.
        config: Resource placement parameters.

    Returns:
        One report per spawn.
    """
    forest = TerrainType.FOREST
    grass = TerrainType.GRASS
    hills = TerrainType.HILLS
    half = radius // 2

    reports = []
    for spawn in spawns:
        targets = _spawn_targets(config)
        report = SpawnResourceReport(spawn=spawn, targets=targets)
        placed = Counter()

        for _ in range(config.spawn_attempts):
            if report.targets_met:
                break
            report.attempts += 1

            angle = rng.random() * math.pi * 2.0
            dist = half + rng.random() * half
            x = spawn.x + int(math.cos(angle) * dist)
            y = spawn.y + int(math.sin(angle) * dist)

            if not grid.in_bounds(x, y):
                continue
            if _inside_inner_circle(Position(x=x, y=y), spawns, half):
                continue
            if not grid.is_walkable(x, y) or grid.resource_at(x, y) is not None:
                continue

            terrain = grid.terrain_at(x, y)
            if placed[ResourceType.WOOD] < targets[ResourceType.WOOD] and terrain == forest:
                kind = ResourceType.WOOD
            elif placed[ResourceType.STONE] < targets[ResourceType.STONE] and terrain in (
                hills,
                grass,
            ):
                kind = ResourceType.STONE
            elif placed[ResourceType.GOLD] < targets[ResourceType.GOLD] and terrain == grass:
                kind = ResourceType.GOLD
            else:
                continue

            grid.set_resource(x, y, kind)
            placed[kind] += 1
            report.placed = dict(placed)

        if not report.targets_met:
            logger.warning(
                "spawn_resources_short",
                spawn=(spawn.x, spawn.y),
                placed={k.value: v for k, v in placed.items()},
                attempts=report.attempts,
            )
        reports.append(report)

    return reports
