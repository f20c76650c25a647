"""
Elevation-based biome classification.

This module implements:
- Biome assignment from configurable elevation bands
- Beaches on low land bordering the sea
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import structlog

from .alea_prng import AleaPRNG
from .generator import Generator
from .tile import Biome
from .tile_set import TileSet

logger = structlog.get_logger()

# Biomes that get beaches next to them
BEACHABLE_BIOMES = frozenset({Biome.OCEAN, Biome.COAST})


@dataclass
class BiomeOptions:
    """Biome classification options."""

    mountain_elevation: int = 20  # Tiles at or above this are mountains
    default_biome: Biome = Biome.PLAINS  # Biome below every band
    # Additional (min_elevation, biome) bands, e.g. ((40, Biome.SNOW),)
    extra_bands: Tuple[Tuple[int, Biome], ...] = field(default_factory=tuple)

    def bands(self) -> Tuple[Tuple[int, Biome], ...]:
        """All bands, highest threshold first."""
        bands = ((self.mountain_elevation, Biome.MOUNTAIN),) + tuple(self.extra_bands)
        return tuple(sorted(bands, key=lambda band: band[0], reverse=True))


class BiomeGenerator(Generator):
    """
    Assigns a biome to every tile that does not have one yet.

    Tiles already given a biome by an earlier stage (oceans, for instance)
    are left alone. There is no interaction between neighbours.
    """

    def __init__(self, options: Optional[BiomeOptions] = None):
        self.options = options or BiomeOptions()
        self._bands = self.options.bands()

    def classify(self, elevation: int) -> Biome:
        for threshold, biome in self._bands:
            if elevation >= threshold:
                return biome
        return self.options.default_biome

    def generate(self, tiles: TileSet, random: AleaPRNG) -> None:
        counts = {}
        for tile in tiles:
            if tile.biome is Biome.NONE:
                tile.biome = self.classify(tile.elevation)
                counts[tile.biome.display_name] = counts.get(tile.biome.display_name, 0) + 1

        logger.info("Biomes assigned", **counts)


class BeachGenerator(Generator):
    """Turns low land tiles bordering OCEAN or COAST into BEACH."""

    def __init__(self, max_beach_elevation: int = 5):
        self.max_beach_elevation = max_beach_elevation

    def generate(self, tiles: TileSet, random: AleaPRNG) -> None:
        beaches = 0
        for tile in tiles:
            if not tile.biome.is_land or tile.elevation > self.max_beach_elevation:
                continue
            if any(adj.biome in BEACHABLE_BIOMES for adj in tiles.get_adjacent(tile.pos).values()):
                tile.biome = Biome.BEACH
                beaches += 1

        logger.info("Beaches generated", count=beaches)
