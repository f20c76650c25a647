"""
Ocean generation.

Connected groups of tiles below sea level become ocean. Groups smaller than
``min_possible_ocean_size`` never do, groups of ``min_ocean_size`` or more
always do, and sizes in between get a chance that grows linearly with size.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from .alea_prng import AleaPRNG
from .generator import Generator
from .tile import Biome
from .tile_set import TileSet

logger = structlog.get_logger()


@dataclass
class OceanOptions:
    """Ocean generation options."""

    sea_level: int = 0
    min_possible_ocean_size: int = 15  # Smaller clusters never become ocean
    min_ocean_size: int = 50  # Clusters at least this big are always ocean
    min_coast_depth: int = -5  # Ocean tiles at or above this elevation are coast


class OceanGenerator(Generator):
    """Turns sunken clusters into OCEAN and COAST tiles."""

    def __init__(self, options: Optional[OceanOptions] = None):
        self.options = options or OceanOptions()
        if self.options.min_possible_ocean_size > self.options.min_ocean_size:
            raise ValueError(
                f"min_possible_ocean_size ({self.options.min_possible_ocean_size}) must not "
                f"exceed min_ocean_size ({self.options.min_ocean_size})"
            )

    def ocean_chance(self, size: int) -> float:
        """Probability that a below-sea-level cluster of ``size`` tiles becomes ocean."""
        smallest = self.options.min_possible_ocean_size
        guaranteed = self.options.min_ocean_size
        if size >= guaranteed:
            return 1.0
        if size < smallest:
            return 0.0
        # With 15 and 50: size 15 has 1/36, size 16 has 2/36, ... size 49 has 35/36
        return (size - smallest + 1) / (guaranteed - smallest + 1)

    def generate(self, tiles: TileSet, random: AleaPRNG) -> None:
        sea_level = self.options.sea_level
        clusters = tiles.cluster(lambda tile: tile.elevation < sea_level)

        oceans = 0
        ocean_tiles = 0
        for cluster in clusters:
            if random.chance(self.ocean_chance(len(cluster))):
                for tile in cluster:
                    if tile.elevation >= self.options.min_coast_depth:
                        tile.biome = Biome.COAST
                    else:
                        tile.biome = Biome.OCEAN
                oceans += 1
                ocean_tiles += len(cluster)

        logger.info(
            "Oceans generated",
            candidates=len(clusters),
            oceans=oceans,
            ocean_tiles=ocean_tiles,
        )
