"""Tests for TerrainType and ResourceType."""

import pytest

from mapgen.terrain_types import (
    IMPASSABLE_COST,
    NO_RESOURCE,
    ResourceType,
    TerrainType,
    is_walkable,
    movement_cost,
    resource_from_value,
    resource_value,
    terrain_from_value,
    terrain_value,
    walkable_values,
)


class TestTerrainWalkability:
    """Test walkability property of terrain types."""

    def test_deep_water_not_walkable(self) -> None:
        assert not TerrainType.DEEP_WATER.walkable

    def test_shallow_water_not_walkable(self) -> None:
        assert not TerrainType.SHALLOW_WATER.walkable

    def test_mountains_not_walkable(self) -> None:
        assert not TerrainType.MOUNTAINS.walkable

    @pytest.mark.parametrize(
        "terrain",
        [TerrainType.SAND, TerrainType.GRASS, TerrainType.FOREST, TerrainType.HILLS],
    )
    def test_land_walkable(self, terrain: TerrainType) -> None:
        """Every land type is walkable."""
        assert terrain.walkable
        assert is_walkable(terrain)

    def test_walkable_values_match_types(self) -> None:
        """Walkable storage codes match the walkable types."""
        expected = {terrain_value(t) for t in TerrainType if t.walkable}
        assert walkable_values() == expected


class TestMovementCost:
    """Test movement cost of terrain types."""

    def test_known_costs(self) -> None:
        """Land types have their fixed costs."""
        assert TerrainType.GRASS.movement_cost == 1.0
        assert TerrainType.SAND.movement_cost == 1.2
        assert TerrainType.FOREST.movement_cost == 1.5
        assert TerrainType.HILLS.movement_cost == 2.0

    def test_blocked_terrain_impassable(self) -> None:
        """Blocked terrain costs IMPASSABLE_COST."""
        for terrain in TerrainType:
            if not terrain.walkable:
                assert movement_cost(terrain) == IMPASSABLE_COST

    def test_walkable_costs_at_least_one(self) -> None:
        """Walkable costs are at least 1 and below the impassable cost."""
        for terrain in TerrainType:
            if terrain.walkable:
                assert 1.0 <= terrain.movement_cost < IMPASSABLE_COST


class TestStorageValues:
    """Test compact uint8 encoding of terrain and resources."""

    def test_terrain_codes_in_declaration_order(self) -> None:
        """Terrain codes follow declaration order."""
        assert [terrain_value(t) for t in TerrainType] == list(range(7))
        assert terrain_value(TerrainType.DEEP_WATER) == 0
        assert terrain_value(TerrainType.MOUNTAINS) == 6

    def test_terrain_code_decodes(self) -> None:
        """Every terrain survives encoding."""
        for terrain in TerrainType:
            assert terrain_from_value(terrain_value(terrain)) == terrain

    def test_unknown_terrain_code_is_grass(self) -> None:
        """Codes outside the table decode to grass."""
        assert terrain_from_value(200) == TerrainType.GRASS

    def test_no_resource_is_zero(self) -> None:
        """Code 0 means no resource."""
        assert resource_value(None) == NO_RESOURCE == 0
        assert resource_from_value(0) is None

    def test_resource_codes_start_at_one(self) -> None:
        """Resource codes start at 1 in declaration order."""
        assert [resource_value(r) for r in ResourceType] == [1, 2, 3, 4, 5]
        assert resource_from_value(3) == ResourceType.WOOD

    def test_display_name(self) -> None:
        """Display names are title case."""
        assert ResourceType.GOLD.display_name == "Gold"
        assert ResourceType.COINS.display_name == "Coins"

    def test_colors_are_rgb(self) -> None:
        """Every colour is an RGB triple."""
        for terrain in TerrainType:
            assert len(terrain.color) == 3
        for resource in ResourceType:
            assert all(0 <= c <= 255 for c in resource.color)
