"""Shared test fixtures for map generation tests."""

from typing import Callable

import numpy as np
import pytest

from mapgen.grid import TileGrid
from mapgen.terrain.config import DetailConfig, MapConfig
from mapgen.terrain_types import TerrainType, terrain_value


@pytest.fixture
def make_grid() -> Callable[..., TileGrid]:
    """Factory for a grid filled with one terrain type."""

    def _make(width: int, height: int, terrain: TerrainType = TerrainType.GRASS) -> TileGrid:
        grid = TileGrid.allocate(width, height)
        grid.terrain[:] = terrain_value(terrain)
        return grid

    return _make


@pytest.fixture
def grass_grid(make_grid: Callable[..., TileGrid]) -> TileGrid:
    """32x32 grid of plain grass."""
    return make_grid(32, 32)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random stream."""
    return np.random.default_rng(1234)


@pytest.fixture
def symmetric_config() -> MapConfig:
    """Config with the random detail passes disabled.

    Terrain then depends only on the folded fields and spawn clearing, so
    the final grid is exactly symmetric.
    """
    return MapConfig(details=DetailConfig(forest_spread_chance=0.0, hills_chance=0.0))
