"""Tests for the map generation pipeline."""

import numpy as np
import pytest

from mapgen.exceptions import GridAllocationError, GridReleasedError
from mapgen.terrain.coastal import count_neighbors
from mapgen.terrain.config import MapConfig, ResourceConfig, ResourceZoneConfig, SpawnConfig
from mapgen.terrain.generator import (
    generate,
    generate_map,
    generate_symmetric,
    random_stream,
)
from mapgen.terrain.symmetry import SymmetryMode
from mapgen.terrain_types import ResourceType, TerrainType, terrain_value
from mapgen.types import Position

DEEP = terrain_value(TerrainType.DEEP_WATER)
SHALLOW = terrain_value(TerrainType.SHALLOW_WATER)
GRASS = terrain_value(TerrainType.GRASS)


class TestDeterminism:
    """Same inputs, same map."""

    def test_same_seed_same_grid(self) -> None:
        """Same seed, same terrain and resources."""
        grid1 = generate_symmetric(64, 64, 2, 42)
        grid2 = generate_symmetric(64, 64, 2, 42)
        np.testing.assert_array_equal(grid1.terrain, grid2.terrain)
        np.testing.assert_array_equal(grid1.resources, grid2.resources)

    def test_different_seed_different_grid(self) -> None:
        """A different seed changes the map."""
        grid1 = generate_symmetric(64, 64, 2, 42)
        grid2 = generate_symmetric(64, 64, 2, 43)
        assert not (
            np.array_equal(grid1.terrain, grid2.terrain)
            and np.array_equal(grid1.resources, grid2.resources)
        )

    def test_generate_is_two_player_shortcut(self) -> None:
        """generate matches generate_symmetric with two players."""
        grid1 = generate(48, 48, 9)
        grid2 = generate_symmetric(48, 48, 2, 9)
        np.testing.assert_array_equal(grid1.terrain, grid2.terrain)

    def test_random_stream_differs_from_noise_seed(self) -> None:
        """The placement stream is decorrelated from the noise seed."""
        stream = random_stream(42).random(4)
        assert not np.array_equal(stream, np.random.default_rng(42).random(4))
        np.testing.assert_array_equal(stream, random_stream(42).random(4))


class TestSymmetry:
    """Terrain fairness between spawns."""

    def test_two_players_diagonal(self, symmetric_config: MapConfig) -> None:
        """Two players on a square map get a transpose-symmetric map."""
        result = generate_map(64, 64, 2, 42, symmetric_config)
        assert result.symmetry == SymmetryMode.DIAGONAL
        terrain = result.grid.terrain
        np.testing.assert_array_equal(terrain, terrain.T)

    def test_two_players_rectangular_point(self, symmetric_config: MapConfig) -> None:
        """Two players on a rectangle get a 180 degree rotation."""
        result = generate_map(80, 48, 2, 5, symmetric_config)
        assert result.symmetry == SymmetryMode.POINT
        terrain = result.grid.terrain
        np.testing.assert_array_equal(terrain, terrain[::-1, ::-1])

    def test_four_players_quadrant(self, symmetric_config: MapConfig) -> None:
        """Four players get a map mirrored on both axes."""
        result = generate_map(64, 64, 4, 17, symmetric_config)
        assert result.symmetry == SymmetryMode.QUADRANT
        terrain = result.grid.terrain
        np.testing.assert_array_equal(terrain, terrain[:, ::-1])
        np.testing.assert_array_equal(terrain, terrain[::-1, :])

    def test_three_players_no_fold(self) -> None:
        """Three players get no symmetry."""
        assert generate_map(48, 48, 3, 1).symmetry == SymmetryMode.NONE


class TestInvariants:
    """Invariants that hold for every generated map."""

    @pytest.mark.parametrize(("players", "seed"), [(2, 42), (4, 7), (1, 99), (3, 5)])
    def test_coastline(self, players: int, seed: int) -> None:
        """Deep water never touches land."""
        terrain = generate_symmetric(64, 64, players, seed).terrain
        land = (terrain != DEEP) & (terrain != SHALLOW)
        assert not np.any((terrain == DEEP) & (count_neighbors(land) > 0))

    @pytest.mark.parametrize(("players", "seed"), [(2, 42), (4, 7)])
    def test_resources_on_walkable_terrain(self, players: int, seed: int) -> None:
        """Resources only sit on walkable tiles."""
        grid = generate_symmetric(64, 64, players, seed)
        has_resource = grid.resources != 0
        assert np.all(grid.walkable_mask()[has_resource])

    @pytest.mark.parametrize(("players", "seed"), [(2, 42), (4, 7)])
    def test_spawn_inner_circle_clear(self, players: int, seed: int) -> None:
        """Each spawn's inner circle is bare grass."""
        result = generate_map(64, 64, players, seed)
        grid = result.grid
        inner = result.config.spawn.inner_radius
        ys, xs = np.ogrid[:64, :64]

        assert len(result.spawns) == players
        for spawn in result.spawns:
            circle = (xs - spawn.x) ** 2 + (ys - spawn.y) ** 2 < inner * inner
            assert np.all(grid.terrain[circle] == GRASS)
            assert not grid.resources[circle].any()

    def test_validation_passes(self) -> None:
        """A default map passes validation."""
        result = generate_map(64, 64, 2, 42)
        assert result.validation is not None
        assert result.validation.passed, result.validation.errors

    def test_spawn_reports_soft_guarantee(self) -> None:
        """Each spawn either met its targets or used every attempt."""
        result = generate_map(96, 96, 4, 3)
        attempts = result.config.resources.spawn_attempts
        assert len(result.spawn_reports) == 4
        for report in result.spawn_reports:
            assert report.targets_met or report.attempts == attempts


class TestSpawns:
    """Spawn placement through the pipeline."""

    def test_two_player_spawns(self) -> None:
        """Two spawns sit in opposite corners."""
        result = generate_map(64, 64, 2, 42)
        assert result.spawns == [Position(x=16, y=16), Position(x=47, y=47)]

    def test_player_count_capped(self) -> None:
        """At most four spawns are active."""
        result = generate_map(64, 64, 6, 42)
        assert len(result.spawns) == 4

    def test_zero_players(self) -> None:
        """No players means no spawns and no reports."""
        result = generate_map(32, 32, 0, 42)
        assert result.spawns == []
        assert result.spawn_reports == []


class TestConfigEffects:
    """Configuration changes reach the output."""

    def test_resource_zones_placed(self) -> None:
        """Configured zones are the only resources when everything else is off."""
        config = MapConfig(
            resources=ResourceConfig(
                richness=0.0,
                spawn_wood=0,
                spawn_stone=0,
                spawn_gold=0,
                zones=[ResourceZoneConfig(kind=ResourceType.COINS, anchor="center", count=4)],
            ),
            spawn=SpawnConfig(clear_radius=4),
        )
        grid = generate_symmetric(64, 64, 2, 42, config)
        counts = grid.count_resources()
        assert counts[ResourceType.COINS] <= 4
        assert set(counts) <= {ResourceType.COINS}

    @pytest.mark.parametrize(("players", "seed"), [(2, 42), (2, 0), (2, 11), (4, 7), (4, 3)])
    def test_zero_richness_only_spawn_resources(self, players: int, seed: int) -> None:
        """Spawn reports count exactly the resources left on the finished map."""
        config = MapConfig(resources=ResourceConfig(richness=0.0))
        result = generate_map(64, 64, players, seed, config)
        placed = sum(sum(r.placed.values()) for r in result.spawn_reports)
        assert sum(result.grid.count_resources().values()) == placed

    def test_majority_smoothing_runs(self) -> None:
        """The optional majority smoothing pass runs."""
        config = MapConfig.model_validate({"details": {"majority_smoothing": True}})
        grid = generate_symmetric(48, 48, 2, 42, config)
        assert grid.terrain.shape == (48, 48)

    def test_validation_can_be_skipped(self) -> None:
        """Validation is skipped when disabled."""
        result = generate_map(32, 32, 2, 42, MapConfig(validate_output=False))
        assert result.validation is None


class TestEdgeCases:
    """Degenerate sizes and grid ownership."""

    @pytest.mark.parametrize(("width", "height"), [(0, 0), (0, 10), (10, 0)])
    def test_zero_size_empty_grid(self, width: int, height: int) -> None:
        """A zero dimension yields an empty grid."""
        grid = generate_symmetric(width, height, 2, 1)
        assert grid.is_empty
        assert (grid.width, grid.height) == (width, height)

    def test_negative_size_raises(self) -> None:
        """Negative dimensions raise GridAllocationError."""
        with pytest.raises(GridAllocationError):
            generate_symmetric(-5, 10, 2, 1)

    def test_tiny_map(self) -> None:
        """Maps smaller than a spawn radius still generate."""
        grid = generate_symmetric(3, 3, 2, 1)
        assert grid.terrain.shape == (3, 3)

    def test_release(self) -> None:
        """A released grid refuses tile access."""
        grid = generate_symmetric(32, 32, 2, 1)
        grid.release()
        with pytest.raises(GridReleasedError):
            grid.tile(0, 0)

    def test_tiles_queryable(self) -> None:
        """Tiles come back as typed values."""
        grid = generate_symmetric(32, 32, 2, 1)
        tile = grid.tile(31, 0)
        assert tile.position == Position(x=31, y=0)
        assert isinstance(tile.terrain, TerrainType)
