"""Tests for terrain detail passes."""

import numpy as np

from mapgen.terrain.config import DetailConfig
from mapgen.terrain.details import add_terrain_details
from mapgen.terrain_types import TerrainType, terrain_value

GRASS = terrain_value(TerrainType.GRASS)
FOREST = terrain_value(TerrainType.FOREST)
HILLS = terrain_value(TerrainType.HILLS)
MOUNTAINS = terrain_value(TerrainType.MOUNTAINS)
SAND = terrain_value(TerrainType.SAND)


class TestForestSpread:
    """Tests for forest growth into grassland."""

    def test_grass_between_forest_becomes_forest(self, rng: np.random.Generator) -> None:
        """Grass flanked by forest becomes forest."""
        terrain = np.full((5, 5), GRASS, dtype=np.uint8)
        terrain[:, 0] = FOREST
        terrain[:, 2] = FOREST
        config = DetailConfig(forest_spread_chance=1.0, hills_chance=0.0)

        result = add_terrain_details(terrain, rng, config)
        assert np.all(result[:, 1] == FOREST)

    def test_needs_minimum_forest_neighbors(self, rng: np.random.Generator) -> None:
        """A single forest tile does not spread."""
        terrain = np.full((5, 5), GRASS, dtype=np.uint8)
        terrain[2, 2] = FOREST
        config = DetailConfig(forest_spread_chance=1.0, hills_chance=0.0)

        result = add_terrain_details(terrain, rng, config)
        np.testing.assert_array_equal(result, terrain)

    def test_single_pass_does_not_cascade(self, rng: np.random.Generator) -> None:
        """Neighbour counts come from the input, so growth moves one ring per pass."""
        terrain = np.full((6, 6), GRASS, dtype=np.uint8)
        terrain[:, 0] = FOREST
        config = DetailConfig(
            forest_spread_chance=1.0, forest_min_neighbors=1, hills_chance=0.0
        )

        result = add_terrain_details(terrain, rng, config)
        assert np.all(result[:, 1] == FOREST)
        assert np.all(result[:, 2] == GRASS)

    def test_only_grass_converted(self, rng: np.random.Generator) -> None:
        """Sand never becomes forest or hills."""
        terrain = np.full((5, 5), SAND, dtype=np.uint8)
        terrain[:, 0] = FOREST
        config = DetailConfig(
            forest_spread_chance=1.0, forest_min_neighbors=1, hills_chance=1.0
        )
        np.testing.assert_array_equal(add_terrain_details(terrain, rng, config), terrain)


class TestFoothills:
    """Tests for hills at the foot of mountains."""

    def test_grass_next_to_mountains_becomes_hills(self, rng: np.random.Generator) -> None:
        """Grass around a mountain becomes hills."""
        terrain = np.full((5, 5), GRASS, dtype=np.uint8)
        terrain[2, 2] = MOUNTAINS
        config = DetailConfig(forest_spread_chance=0.0, hills_chance=1.0)

        result = add_terrain_details(terrain, rng, config)
        assert np.all(result[1:4, 1:4][np.arange(9).reshape(3, 3) != 4] == HILLS)
        assert result[0, 0] == GRASS

    def test_hills_win_over_forest(self, rng: np.random.Generator) -> None:
        """Where both rules fire, the tile becomes hills."""
        terrain = np.full((3, 3), GRASS, dtype=np.uint8)
        terrain[0, :] = FOREST
        terrain[2, 2] = MOUNTAINS
        config = DetailConfig(
            forest_spread_chance=1.0, forest_min_neighbors=1, hills_chance=1.0
        )

        result = add_terrain_details(terrain, rng, config)
        assert result[1, 1] == HILLS
        assert result[1, 0] == FOREST


class TestDetailRandomness:
    """Tests for the random draws."""

    def test_zero_chances_unchanged(self, rng: np.random.Generator) -> None:
        """Zero chances leave the terrain alone."""
        terrain = np.random.default_rng(2).choice([GRASS, FOREST, MOUNTAINS], (20, 20))
        terrain = terrain.astype(np.uint8)
        config = DetailConfig(forest_spread_chance=0.0, hills_chance=0.0)
        np.testing.assert_array_equal(add_terrain_details(terrain, rng, config), terrain)

    def test_same_stream_same_result(self) -> None:
        """The same random stream gives the same details."""
        terrain = np.random.default_rng(2).choice([GRASS, FOREST, MOUNTAINS], (20, 20))
        terrain = terrain.astype(np.uint8)
        config = DetailConfig()

        result1 = add_terrain_details(terrain, np.random.default_rng(5), config)
        result2 = add_terrain_details(terrain, np.random.default_rng(5), config)
        np.testing.assert_array_equal(result1, result2)

    def test_input_not_modified(self, rng: np.random.Generator) -> None:
        """The input array is left as it was."""
        terrain = np.full((4, 4), GRASS, dtype=np.uint8)
        terrain[0, :] = MOUNTAINS
        original = terrain.copy()
        add_terrain_details(terrain, rng, DetailConfig(hills_chance=1.0))
        np.testing.assert_array_equal(terrain, original)
