"""
World assembly.

``WorldBuilder`` allocates the board, runs the generation stages in order
with one shared random source, and freezes the result into a ``World``.
"""

import time
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import structlog

from ..config.generation_settings import GenerationSettings
from ..utils.random import SeedInput, create_prng, resolve_seed
from ..utils.ranges import IntRange
from .biomes import BeachGenerator, BiomeGenerator, BiomeOptions
from .cluster import Cluster
from .exceptions import GenerationCancelledError, InvalidArgumentError
from .generator import Generator
from .geometry import TileLayout
from .hex_point import HexPoint
from .hydrology import Hydrology, HydrologyOptions, River
from .noise import NoiseElevationGenerator, NoiseOptions
from .oceans import OceanGenerator, OceanOptions
from .peaks import PeakGenerator, PeakOptions
from .tile import Biome, Tile
from .tile_set import TileSet

logger = structlog.get_logger()

CANONICAL_PIPELINE = (PeakGenerator, BiomeGenerator, Hydrology)
TERRAIN_PIPELINE = (
    NoiseElevationGenerator,
    PeakGenerator,
    OceanGenerator,
    BiomeGenerator,
    BeachGenerator,
    Hydrology,
)


class World:
    """
    A finished, read-only world.

    Wraps the frozen tiles together with generation metadata and the
    features derived from them: continents, lakes and rivers.
    """

    def __init__(
        self,
        tiles: TileSet,
        seed: int,
        radius: int,
        stage_names: Sequence[str] = (),
        generation_time: float = 0.0,
        rivers: Sequence[River] = (),
        layout: Optional[TileLayout] = None,
    ):
        self._tiles = tiles if tiles.frozen else tiles.immutable_copy()
        self.seed = seed
        self.radius = radius
        self.stage_names = tuple(stage_names)
        self.generation_time = generation_time
        self.layout = layout or TileLayout()
        self._rivers = tuple(rivers)

        self._continents = tuple(self._tiles.cluster(lambda tile: tile.biome.is_land))
        self._lakes = tuple(self._tiles.cluster(lambda tile: tile.biome is Biome.LAKE))

    @property
    def tiles(self) -> TileSet:
        return self._tiles

    @property
    def continents(self) -> Tuple[Cluster, ...]:
        return self._continents

    @property
    def lakes(self) -> Tuple[Cluster, ...]:
        return self._lakes

    @property
    def rivers(self) -> Tuple[River, ...]:
        return self._rivers

    def tile_at(self, point: HexPoint) -> Optional[Tile]:
        return self._tiles.get_by_position(point)

    def all_tiles(self) -> Iterator[Tile]:
        """All tiles, in the same order for the lifetime of the world."""
        return iter(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def tile_containing_screen_point(self, x: float, y: float) -> Optional[HexPoint]:
        """Position of the world tile under a screen point, or None off the board."""
        point = self.layout.pixel_to_hex(x, y)
        return point if self._tiles.contains_position(point) else None

    def screen_position(self, point: HexPoint) -> Tuple[float, float]:
        return self.layout.hex_to_pixel(point)

    def biome_counts(self) -> dict:
        counts = {}
        for tile in self._tiles:
            counts[tile.biome.name] = counts.get(tile.biome.name, 0) + 1
        return counts

    def summary(self) -> dict:
        return {
            "seed": self.seed,
            "radius": self.radius,
            "tile_count": len(self._tiles),
            "stages": list(self.stage_names),
            "generation_time": self.generation_time,
            "biomes": self.biome_counts(),
            "continents": len(self._continents),
            "lakes": len(self._lakes),
            "rivers": len(self._rivers),
        }


class WorldBuilder:
    """
    Runs a list of generation stages over a fresh board.

    Each builder produces exactly one world; stages keep per-run state and
    must not be reused either.
    """

    def __init__(
        self,
        radius: int,
        seed: SeedInput = None,
        stages: Optional[Sequence[Generator]] = None,
        elevation_range: Optional[IntRange] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
        layout: Optional[TileLayout] = None,
    ):
        if radius < 0:
            raise InvalidArgumentError(f"Radius must be non-negative, got {radius}")

        self.radius = radius
        self.seed = resolve_seed(seed)
        self.stages: List[Generator] = list(stages) if stages is not None else canonical_stages()
        self.elevation_range = (elevation_range or IntRange(-25, 50)).validate()
        self.should_cancel = should_cancel
        self.layout = layout
        self._built = False

    def build(self) -> World:
        """
        Generate the world.

        Returns:
            Frozen World

        Raises:
            GenerationCancelledError: If ``should_cancel`` returned True between stages
        """
        if self._built:
            raise RuntimeError("WorldBuilder can only build one world")
        self._built = True

        logger.info(
            "Starting world generation",
            seed=self.seed,
            radius=self.radius,
            stages=[stage.name for stage in self.stages],
        )
        start = time.perf_counter()

        tiles = TileSet.init_by_radius(self.radius, self.elevation_range)
        random = create_prng(self.seed)

        for stage in self.stages:
            if self.should_cancel is not None and self.should_cancel():
                logger.warning("World generation cancelled", before_stage=stage.name)
                raise GenerationCancelledError(f"Generation cancelled before {stage.name}")

            stage_start = time.perf_counter()
            stage.generate(tiles, random)
            logger.info(
                "Stage completed",
                stage=stage.name,
                duration=round(time.perf_counter() - stage_start, 4),
            )

        rivers = []
        for stage in self.stages:
            if isinstance(stage, Hydrology):
                rivers.extend(stage.rivers)

        elapsed = time.perf_counter() - start
        world = World(
            tiles.immutable_copy(),
            seed=self.seed,
            radius=self.radius,
            stage_names=[stage.name for stage in self.stages],
            generation_time=elapsed,
            rivers=rivers,
            layout=self.layout,
        )

        logger.info(
            "World generation completed",
            seed=self.seed,
            tiles=len(world),
            duration=round(elapsed, 4),
            random_calls=random.call_count,
        )
        return world


def canonical_stages(settings: Optional[GenerationSettings] = None) -> List[Generator]:
    """Peaks, then biomes, then hydrology."""
    settings = settings or GenerationSettings()
    return [
        PeakGenerator(_peak_options(settings, smooth_slopes=False)),
        BiomeGenerator(BiomeOptions(mountain_elevation=settings.mountain_elevation)),
        Hydrology(_hydrology_options(settings)),
    ]


def terrain_stages(settings: Optional[GenerationSettings] = None) -> List[Generator]:
    """Noise elevation, peaks, oceans, biomes, beaches, then hydrology."""
    settings = settings or GenerationSettings()
    return [
        NoiseElevationGenerator(
            NoiseOptions(
                scale=settings.noise_scale,
                octaves=settings.noise_octaves,
                persistence=settings.noise_persistence,
            )
        ),
        PeakGenerator(_peak_options(settings, smooth_slopes=True)),
        OceanGenerator(
            OceanOptions(
                sea_level=settings.sea_level,
                min_possible_ocean_size=settings.min_possible_ocean_size,
                min_ocean_size=settings.min_ocean_size,
                min_coast_depth=settings.min_coast_depth,
            )
        ),
        BiomeGenerator(BiomeOptions(mountain_elevation=settings.mountain_elevation)),
        BeachGenerator(max_beach_elevation=settings.max_beach_elevation),
        Hydrology(_hydrology_options(settings)),
    ]


def build_stages(settings: GenerationSettings) -> List[Generator]:
    """Fresh stage instances for the pipeline named in ``settings``."""
    if settings.pipeline == "terrain":
        return terrain_stages(settings)
    return canonical_stages(settings)


def generate_world(
    settings: GenerationSettings,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> World:
    """Build a world from generation settings."""
    builder = WorldBuilder(
        radius=settings.radius,
        seed=settings.seed,
        stages=build_stages(settings),
        elevation_range=settings.elevation_range,
        should_cancel=should_cancel,
        layout=TileLayout(tile_width=settings.tile_width),
    )
    return builder.build()


def _peak_options(settings: GenerationSettings, smooth_slopes: bool) -> PeakOptions:
    return PeakOptions(
        min_peaks=settings.min_peaks,
        max_peaks=settings.max_peaks,
        min_separation=settings.min_peak_separation,
        smooth_slopes=smooth_slopes,
        slope_slop=settings.peak_slope_slop,
    )


def _hydrology_options(settings: GenerationSettings) -> HydrologyOptions:
    return HydrologyOptions(
        rainfall=settings.rainfall,
        rain_every_pass=settings.rain_every_pass,
        iterations=settings.runoff_iterations,
        lake_threshold=settings.lake_threshold,
        river_threshold=settings.river_threshold,
        convergence_tolerance=settings.convergence_tolerance,
    )
