"""Tests for neighbourhood smoothing passes."""

import numpy as np

from mapgen.terrain.coastal import count_neighbors, majority_smooth, smooth_coastlines
from mapgen.terrain_types import TerrainType, terrain_value

DEEP = terrain_value(TerrainType.DEEP_WATER)
SHALLOW = terrain_value(TerrainType.SHALLOW_WATER)
SAND = terrain_value(TerrainType.SAND)
GRASS = terrain_value(TerrainType.GRASS)
MOUNTAINS = terrain_value(TerrainType.MOUNTAINS)


class TestCountNeighbors:
    """Tests for 8-neighbourhood counting."""

    def test_interior_cell(self) -> None:
        """An interior cell in a full mask has eight neighbours."""
        mask = np.ones((3, 3), dtype=bool)
        counts = count_neighbors(mask)
        assert counts[1, 1] == 8

    def test_edges_count_outside_as_false(self) -> None:
        """Cells beyond the border count as empty."""
        mask = np.ones((3, 3), dtype=bool)
        counts = count_neighbors(mask)
        assert counts[0, 0] == 3
        assert counts[0, 1] == 5

    def test_center_excluded(self) -> None:
        """A cell never counts itself."""
        mask = np.zeros((3, 3), dtype=bool)
        mask[1, 1] = True
        counts = count_neighbors(mask)
        assert counts[1, 1] == 0
        assert counts[0, 0] == 1

    def test_empty_mask(self) -> None:
        assert count_neighbors(np.zeros((0, 4), dtype=bool)).shape == (0, 4)


class TestSmoothCoastlines:
    """Tests for coastline smoothing."""

    def test_deep_water_next_to_land_becomes_shallow(self) -> None:
        """Deep water touching land turns shallow; land is untouched."""
        terrain = np.full((7, 7), DEEP, dtype=np.uint8)
        terrain[3, 3] = GRASS
        result = smooth_coastlines(terrain)

        assert result[3, 3] == GRASS
        assert np.all(result[2:5, 2:5][np.arange(9).reshape(3, 3) != 4] == SHALLOW)
        assert result[0, 0] == DEEP

    def test_diagonal_contact_counts(self) -> None:
        """Diagonal contact with land is enough."""
        terrain = np.full((3, 3), DEEP, dtype=np.uint8)
        terrain[0, 0] = SAND
        assert smooth_coastlines(terrain)[1, 1] == SHALLOW

    def test_shallow_water_is_not_land(self) -> None:
        """Shallow water does not trigger the pass."""
        terrain = np.full((5, 5), DEEP, dtype=np.uint8)
        terrain[2, 2] = SHALLOW
        np.testing.assert_array_equal(smooth_coastlines(terrain), terrain)

    def test_no_deep_water_touches_land_after(self) -> None:
        """No deep water borders land after one pass."""
        rng = np.random.default_rng(8)
        terrain = rng.choice([DEEP, SHALLOW, GRASS], size=(30, 30)).astype(np.uint8)
        result = smooth_coastlines(terrain)

        land = (result != DEEP) & (result != SHALLOW)
        assert not np.any((result == DEEP) & (count_neighbors(land) > 0))

    def test_input_not_modified(self) -> None:
        """The input array is left as it was."""
        terrain = np.full((3, 3), DEEP, dtype=np.uint8)
        terrain[1, 1] = GRASS
        original = terrain.copy()
        smooth_coastlines(terrain)
        np.testing.assert_array_equal(terrain, original)


class TestMajoritySmooth:
    """Tests for majority-neighbour smoothing."""

    def test_isolated_tile_absorbed(self) -> None:
        """A lone tile takes the type of its surroundings."""
        terrain = np.full((5, 5), GRASS, dtype=np.uint8)
        terrain[2, 2] = SAND
        result = majority_smooth(terrain, iterations=1)
        assert result[2, 2] == GRASS

    def test_grass_walled_in_by_mountains(self) -> None:
        """Enclosed grass becomes mountains."""
        terrain = np.full((5, 5), MOUNTAINS, dtype=np.uint8)
        terrain[2, 2] = GRASS
        result = majority_smooth(terrain, iterations=1)
        assert result[2, 2] == MOUNTAINS

    def test_solid_regions_unchanged(self) -> None:
        """Large uniform regions keep their type."""
        terrain = np.full((10, 10), GRASS, dtype=np.uint8)
        terrain[:, 5:] = SAND
        np.testing.assert_array_equal(majority_smooth(terrain), terrain)

    def test_zero_iterations_is_copy(self) -> None:
        """Zero iterations returns an equal copy."""
        terrain = np.full((4, 4), SAND, dtype=np.uint8)
        result = majority_smooth(terrain, iterations=0)
        np.testing.assert_array_equal(result, terrain)
        assert result is not terrain
