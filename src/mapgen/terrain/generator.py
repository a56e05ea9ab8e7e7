"""Main map generation orchestration."""

import time

import numpy as np
import structlog

from ..grid import TileGrid
from ..terrain_types import TerrainType
from ..types import Position
from .classification import classify_terrain
from .coastal import majority_smooth, smooth_coastlines
from .config import MapConfig
from .details import add_terrain_details
from .fields import make_elevation, make_moisture, scratch_fields
from .island import carve_river_valleys, shape_continent
from .noise import PerlinNoise
from .resources import (
    SpawnResourceReport,
    ensure_spawn_resources,
    place_resources,
    place_zones,
)
from .spawn import clear_spawn_areas, spawn_corners, spawn_positions
from .symmetry import SymmetryMode, enforce_symmetry
from .validation import ValidationResult, validate_map

logger = structlog.get_logger()

# Golden-ratio multiplier decorrelating the random stream from the noise seed
RANDOM_STREAM_MULTIPLIER = 0x9E3779B97F4A7C15


class GenerationResult:
    """Result of map generation: the grid plus what was decided along the way."""

    def __init__(
        self,
        grid: TileGrid,
        spawns: list[Position],
        symmetry: SymmetryMode,
        spawn_reports: list[SpawnResourceReport],
        validation: ValidationResult | None,
        config: MapConfig,
    ):
        self.grid = grid
        self.spawns = spawns
        self.symmetry = symmetry
        self.spawn_reports = spawn_reports
        self.validation = validation
        self.config = config


def random_stream(seed: int) -> np.random.Generator:
    """Random generator for detail passes and placement, derived from the seed."""
    return np.random.default_rng((seed * RANDOM_STREAM_MULTIPLIER) % 2**64)


def generate_map(
    width: int,
    height: int,
    player_count: int,
    seed: int,
    config: MapConfig | None = None,
) -> GenerationResult:
    """Generate a complete map from a seed.

    The same (width, height, player_count, seed, config) always yields the
    same grid. Scalar fields are released before returning.

    Args:
        width: Map width in tiles.
        height: Map height in tiles.
        player_count: Number of players; up to four spawns are active.
        seed: Seed for noise and placement.
        config: Generation parameters (defaults if None).

    Returns:
        GenerationResult with the tile grid and spawn data.

    Raises:
        GridAllocationError: If dimensions are negative or memory runs out.
    """
    config = config or MapConfig()
    start_time = time.perf_counter()

    logger.info(
        "map_generation_started",
        width=width,
        height=height,
        players=player_count,
        seed=seed,
    )

    grid = TileGrid.allocate(width, height)
    if grid.is_empty:
        logger.info("map_generation_finished", width=width, height=height, empty=True)
        return GenerationResult(
            grid=grid,
            spawns=[],
            symmetry=SymmetryMode.NONE,
            spawn_reports=[],
            validation=None,
            config=config,
        )

    noise = PerlinNoise(seed)
    rng = random_stream(seed)
    spawns = spawn_positions(width, height, player_count, config.spawn.effective_margin)

    with scratch_fields() as fields:
        # Stage A: scalar fields
        fields.elevation = make_elevation(noise, width, height, config.elevation)
        fields.moisture = make_moisture(
            noise,
            fields.elevation,
            config.moisture,
            config.classification.water_level,
        )
        logger.debug("fields_generated", width=width, height=height)

        # Stage B: continent shaping
        fields.elevation = shape_continent(
            fields.elevation, spawn_corners(player_count), config.island
        )
        fields.elevation, fields.moisture = carve_river_valleys(
            fields.elevation, fields.moisture, noise, config.rivers
        )

        # Stage C: symmetry
        fields.elevation, fields.moisture, symmetry = enforce_symmetry(
            fields.elevation, fields.moisture, player_count
        )
        logger.debug("symmetry_applied", mode=symmetry.value, players=player_count)

        # Stage D: classification
        terrain = classify_terrain(fields.elevation, fields.moisture, config.classification)

    logger.debug("terrain_classified")

    # Stage E: post-processing
    if config.details.majority_smoothing:
        terrain = majority_smooth(terrain, iterations=config.details.majority_iterations)
    terrain = smooth_coastlines(terrain)
    terrain = add_terrain_details(terrain, rng, config.details)
    grid.terrain[:] = terrain

    # Stage F: resources
    placed = place_resources(grid, noise, rng, config.resources)
    placed.update(
        place_zones(
            grid,
            rng,
            config.resources.zones,
            spawns,
            config.resources.zone_attempts_per_resource,
        )
    )
    reports = ensure_spawn_resources(
        grid, rng, spawns, config.spawn.clear_radius, config.resources
    )
    logger.info("resources_placed", **{k.value: v for k, v in placed.items()})

    # Stage G: spawn clearing
    clear_spawn_areas(grid, spawns, config.spawn.clear_radius)

    validation = None
    if config.validate_output:
        validation = validate_map(grid, spawns, config.spawn.clear_radius, reports)

    _log_terrain_stats(grid)
    logger.info(
        "map_generation_finished",
        width=width,
        height=height,
        symmetry=symmetry.value,
        spawns=len(spawns),
        elapsed_s=round(time.perf_counter() - start_time, 3),
    )

    return GenerationResult(
        grid=grid,
        spawns=spawns,
        symmetry=symmetry,
        spawn_reports=reports,
        validation=validation,
        config=config,
    )


def generate_symmetric(
    width: int,
    height: int,
    player_count: int,
    seed: int,
    config: MapConfig | None = None,
) -> TileGrid:
    """Generate a fair map for ``player_count`` players and return its grid."""
    return generate_map(width, height, player_count, seed, config).grid


def generate(
    width: int,
    height: int,
    seed: int,
    config: MapConfig | None = None,
) -> TileGrid:
    """Two-player shortcut for generate_symmetric."""
    return generate_symmetric(width, height, 2, seed, config)


def _log_terrain_stats(grid: TileGrid) -> None:
    """Log terrain generation statistics."""
    total = grid.width * grid.height
    counts = grid.count_terrain()

    stats = {
        terrain.value: round(counts.get(terrain, 0) / total * 100, 1)
        for terrain in TerrainType
    }
    logger.debug("terrain_stats", tiles=total, percent=stats)
