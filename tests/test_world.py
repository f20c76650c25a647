"""Tests for world assembly and the read-only world."""

import pytest

from py_terra.config import GenerationSettings
from py_terra.core.biomes import BiomeGenerator
from py_terra.core.exceptions import (
    FrozenTileError,
    GenerationCancelledError,
    InvalidArgumentError,
)
from py_terra.core.hex_point import HexPoint
from py_terra.core.hydrology import Hydrology
from py_terra.core.peaks import PeakGenerator
from py_terra.core.tile import Biome
from py_terra.core.world import (
    World,
    WorldBuilder,
    build_stages,
    canonical_stages,
    generate_world,
    terrain_stages,
)


def snapshot(world):
    return [tile.to_dict() for tile in world.all_tiles()]


class TestWorldBuilder:
    """Test the generation driver."""

    def test_tile_count(self):
        world = WorldBuilder(radius=6, seed=1).build()
        assert len(world) == 3 * 6 * 7 + 1

    def test_radius_zero(self):
        world = WorldBuilder(radius=0, seed=1).build()
        assert len(world) == 1
        assert world.tile_at(HexPoint.ZERO) is not None

    def test_negative_radius(self):
        with pytest.raises(InvalidArgumentError):
            WorldBuilder(radius=-1)

    def test_builder_is_single_use(self):
        builder = WorldBuilder(radius=2, seed=1)
        builder.build()
        with pytest.raises(RuntimeError):
            builder.build()

    def test_seed_is_resolved(self):
        assert WorldBuilder(radius=1, seed="42").seed == 42
        assert isinstance(WorldBuilder(radius=1).seed, int)

    def test_no_stages_leaves_default_tiles(self):
        world = WorldBuilder(radius=3, seed=1, stages=[]).build()
        assert all(tile.biome is Biome.NONE for tile in world)
        assert all(tile.elevation == 0 for tile in world)
        assert world.stage_names == ()

    def test_stages_run_in_order(self):
        stages = [PeakGenerator(), BiomeGenerator(), Hydrology()]
        world = WorldBuilder(radius=8, seed=3, stages=stages).build()

        assert world.stage_names == ("PeakGenerator", "BiomeGenerator", "Hydrology")
        for pos in stages[0].peaks:
            assert world.tile_at(pos).biome in (Biome.MOUNTAIN, Biome.LAKE)

    def test_cancel_before_first_stage(self):
        builder = WorldBuilder(radius=3, seed=1, should_cancel=lambda: True)
        with pytest.raises(GenerationCancelledError):
            builder.build()

    def test_cancel_between_stages(self):
        calls = []

        def should_cancel():
            calls.append(1)
            return len(calls) > 1

        stages = [PeakGenerator(), BiomeGenerator(), Hydrology()]
        with pytest.raises(GenerationCancelledError):
            WorldBuilder(radius=5, seed=1, stages=stages, should_cancel=should_cancel).build()
        assert stages[0].peaks
        assert stages[2].passes == []


class TestReproducibility:
    """Same seed and settings, same world."""

    @pytest.mark.parametrize("pipeline", ["canonical", "terrain"])
    def test_same_seed_same_world(self, pipeline):
        settings = GenerationSettings(radius=8, seed=42, pipeline=pipeline)
        first = generate_world(settings)
        second = generate_world(settings)
        assert snapshot(first) == snapshot(second)
        assert [river.tiles for river in first.rivers] == [river.tiles for river in second.rivers]

    def test_string_seed(self):
        first = generate_world(GenerationSettings(radius=6, seed="hello world"))
        second = generate_world(GenerationSettings(radius=6, seed="hello world"))
        assert first.seed == second.seed
        assert snapshot(first) == snapshot(second)

    def test_numeric_string_matches_integer(self):
        as_text = generate_world(GenerationSettings(radius=5, seed="1234"))
        as_int = generate_world(GenerationSettings(radius=5, seed=1234))
        assert snapshot(as_text) == snapshot(as_int)

    def test_different_seeds_differ(self):
        first = generate_world(GenerationSettings(radius=10, seed=1, pipeline="terrain"))
        second = generate_world(GenerationSettings(radius=10, seed=2, pipeline="terrain"))
        assert snapshot(first) != snapshot(second)


class TestWorld:
    """Test the finished world."""

    @pytest.fixture
    def world(self):
        return generate_world(GenerationSettings(radius=8, seed=7))

    def test_tiles_are_frozen(self, world):
        tile = world.tile_at(HexPoint.ZERO)
        with pytest.raises(FrozenTileError):
            tile.elevation = 12
        with pytest.raises(FrozenTileError):
            world.tiles.remove_position(HexPoint.ZERO)

    def test_every_tile_has_a_biome(self, world):
        assert all(tile.biome is not Biome.NONE for tile in world)

    def test_iteration_order_is_stable(self, world):
        assert [t.pos for t in world] == [t.pos for t in world.all_tiles()]

    def test_tile_at_outside_board(self, world):
        assert world.tile_at(HexPoint(9, -9, 0)) is None

    def test_screen_point_lookup(self, world):
        for tile in world:
            x, y = world.screen_position(tile.pos)
            assert world.tile_containing_screen_point(x, y) == tile.pos
        assert world.tile_containing_screen_point(1e6, 1e6) is None

    def test_canonical_world_is_one_continent(self, world):
        land = sum(1 for tile in world if tile.biome.is_land)
        assert len(world.continents) == 1
        assert len(world.continents[0]) == land

    def test_summary(self, world):
        summary = world.summary()
        assert summary["seed"] == 7
        assert summary["radius"] == 8
        assert summary["tile_count"] == len(world)
        assert sum(summary["biomes"].values()) == len(world)
        assert summary["rivers"] == len(world.rivers)

    def test_wrapping_mutable_tiles_freezes_them(self):
        tiles = WorldBuilder(radius=1, seed=1, stages=[]).build().tiles.copy()
        world = World(tiles, seed=1, radius=1)
        assert world.tiles.frozen
        assert not tiles.frozen


class TestPipelines:
    """Test stage list construction."""

    def test_canonical_stage_names(self):
        assert [stage.name for stage in canonical_stages()] == [
            "PeakGenerator",
            "BiomeGenerator",
            "Hydrology",
        ]

    def test_terrain_stage_names(self):
        assert [stage.name for stage in terrain_stages()] == [
            "NoiseElevationGenerator",
            "PeakGenerator",
            "OceanGenerator",
            "BiomeGenerator",
            "BeachGenerator",
            "Hydrology",
        ]

    def test_build_stages_follows_settings(self):
        stages = build_stages(GenerationSettings(pipeline="terrain"))
        assert stages[0].name == "NoiseElevationGenerator"

    def test_settings_reach_the_stages(self):
        stages = canonical_stages(GenerationSettings(min_peaks=2, max_peaks=3, rainfall=0.1))
        assert stages[0].options.min_peaks == 2
        assert stages[0].options.max_peaks == 3
        assert stages[2].options.rainfall == 0.1

    def test_heavy_rainfall_completes(self):
        world = generate_world(
            GenerationSettings(radius=15, seed=3, pipeline="terrain", rainfall=1e9, runoff_iterations=20)
        )
        assert len(world) == 3 * 15 * 16 + 1

    def test_terrain_world_uses_water_biomes(self):
        world = generate_world(
            GenerationSettings(
                radius=12,
                seed="coastline",
                pipeline="terrain",
                min_possible_ocean_size=1,
                min_ocean_size=5,
            )
        )
        biomes = {tile.biome for tile in world}
        assert Biome.NONE not in biomes
        assert biomes & {Biome.OCEAN, Biome.COAST}
