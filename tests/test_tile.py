"""Tests for tiles and biomes."""

import pytest

from py_terra.core.exceptions import FrozenTileError, InvalidArgumentError
from py_terra.core.hex_point import Direction, HexPoint, RiverConnection
from py_terra.core.tile import BIOME_NAMES, Biome, Tile
from py_terra.utils.ranges import IntRange


class TestBiome:
    """Test biome classification helpers."""

    def test_water_biomes(self):
        assert {b for b in Biome if b.is_water} == {Biome.OCEAN, Biome.COAST, Biome.LAKE}

    def test_every_biome_has_name_and_color(self):
        for biome in Biome:
            assert biome.display_name == BIOME_NAMES[biome]
            assert len(biome.color) == 3


class TestTile:
    """Test tile state and water bookkeeping."""

    @pytest.fixture
    def tile(self):
        return Tile(HexPoint.ZERO)

    def test_defaults(self, tile):
        assert tile.pos == HexPoint.ZERO
        assert tile.biome is Biome.NONE
        assert tile.elevation == 0
        assert tile.water_level == 0.0
        assert not tile.is_river

    def test_elevation_is_clamped(self, tile):
        tile.elevation = 1000
        assert tile.elevation == 50
        tile.elevation = -1000
        assert tile.elevation == -25

    def test_custom_elevation_range(self):
        tile = Tile(HexPoint.ZERO, elevation=99, elevation_range=IntRange(0, 10))
        assert tile.elevation == 10

    def test_position_is_read_only(self, tile):
        with pytest.raises(AttributeError):
            tile.pos = HexPoint(1, -1, 0)

    def test_add_water_on_land(self, tile):
        tile.elevation = 4
        assert tile.add_water(1.5) == 1.5
        assert tile.water_level == 1.5
        assert tile.water_elevation == pytest.approx(5.5)
        assert tile.water_traversed == 1.5

    def test_water_biomes_absorb_water(self, tile):
        tile.biome = Biome.OCEAN
        assert tile.add_water(2.0) == 0.0
        assert tile.water_level == 0.0

    def test_negative_water_rejected(self, tile):
        with pytest.raises(InvalidArgumentError):
            tile.add_water(-1.0)

    def test_clear_water_keeps_traversed(self, tile):
        tile.add_water(2.0)
        assert tile.clear_water() == 2.0
        assert tile.water_level == 0.0

        tile.add_water(1.0)
        assert tile.clear_water() == 1.0
        assert tile.water_traversed == 3.0

    def test_river_connections(self, tile):
        tile.add_river_connection(Direction.NORTH, RiverConnection.ENTRY)
        tile.add_river_connection(Direction.SOUTH, RiverConnection.EXIT)
        assert tile.is_river
        assert tile.get_river_connection(Direction.NORTH) is RiverConnection.ENTRY
        assert tile.get_river_connection(Direction.NORTHEAST) is None
        assert tile.to_dict()["river_connections"] == {"NORTH": "ENTRY", "SOUTH": "EXIT"}

    def test_copy_is_independent(self, tile):
        tile.add_water(1.0)
        copy = tile.copy()
        copy.elevation = 10
        copy.add_water(1.0)
        assert tile.elevation == 0
        assert tile.water_level == 1.0
        assert copy.water_level == 2.0

    def test_equality_uses_position_biome_and_elevation(self):
        assert Tile(HexPoint.ZERO) == Tile(HexPoint.ZERO)
        assert Tile(HexPoint.ZERO) != Tile(HexPoint.ZERO, biome=Biome.PLAINS)
        assert hash(Tile(HexPoint.ZERO)) == hash(Tile(HexPoint.ZERO, elevation=3))


class TestFrozenTile:
    """Test that frozen tiles reject every write."""

    @pytest.fixture
    def frozen(self):
        tile = Tile(HexPoint.ZERO, biome=Biome.PLAINS, elevation=5)
        tile.add_river_connection(Direction.NORTH, RiverConnection.EXIT)
        return tile.freeze()

    def test_attribute_writes(self, frozen):
        with pytest.raises(FrozenTileError):
            frozen.elevation = 3
        with pytest.raises(FrozenTileError):
            frozen.biome = Biome.LAKE
        assert frozen.elevation == 5
        assert frozen.biome is Biome.PLAINS

    def test_frozen_error_is_attribute_error(self, frozen):
        with pytest.raises(AttributeError):
            frozen.elevation = 3

    def test_water_writes(self, frozen):
        with pytest.raises(FrozenTileError):
            frozen.add_water(1.0)
        with pytest.raises(FrozenTileError):
            frozen.clear_water()

    def test_river_connection_writes(self, frozen):
        with pytest.raises(FrozenTileError):
            frozen.add_river_connection(Direction.SOUTH, RiverConnection.ENTRY)
        with pytest.raises(TypeError):
            frozen.river_connections[Direction.SOUTH] = RiverConnection.ENTRY
        assert frozen.get_river_connection(Direction.NORTH) is RiverConnection.EXIT

    def test_copy_of_frozen_tile_is_mutable(self, frozen):
        copy = frozen.copy()
        copy.elevation = 7
        assert copy.elevation == 7
        assert frozen.elevation == 5
