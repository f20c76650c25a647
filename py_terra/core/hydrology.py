"""
Hydrology system for rainfall, runoff and water features.

This module implements:
- Rainfall on every land tile
- Downhill runoff, spreading each tile's water over its lower neighbours
- Lake classification from settled water
- River tracing from cumulative water throughput
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

import structlog

from .alea_prng import AleaPRNG
from .exceptions import WaterConservationError
from .generator import Generator
from .hex_point import HexPoint, RiverConnection
from .tile import Biome, Tile
from .tile_set import TileSet

logger = structlog.get_logger()


@dataclass
class HydrologyOptions:
    """Hydrology simulation options."""
    rainfall: float = 0.5  # Water added to each land tile
    rain_every_pass: bool = False  # Rain before every pass instead of once
    iterations: int = 5  # Maximum number of runoff passes
    lake_threshold: float = 3.0  # Settled water needed to become a lake
    river_threshold: float = 10.0  # Water throughput needed to carry a river
    convergence_tolerance: float = 1e-6  # Stop once a pass moves less water than this
    conservation_tolerance: float = 1e-3  # Allowed absolute drift in total water per pass
    conservation_rel_tolerance: float = 1e-9  # Allowed drift relative to the total water


@dataclass
class River:
    """Represents a river traced downhill from its source."""
    id: int
    tiles: List[HexPoint]  # Positions from source to last land tile
    flow: float  # Largest water throughput along the river
    mouth: Optional[HexPoint] = None  # Water tile the river drains into, if any
    joins: Optional[int] = None  # River this one flows into as a tributary

    @property
    def source(self) -> HexPoint:
        return self.tiles[0]

    @property
    def length(self) -> int:
        return len(self.tiles)


@dataclass
class PassResult:
    """Water accounting for one runoff pass."""
    before: float
    after: float
    absorbed: float
    change: float = 0.0

    @property
    def drift(self) -> float:
        return abs(self.before - (self.after + self.absorbed))


class Hydrology(Generator):
    """
    Simulates rainfall and runoff, then derives lakes and rivers.

    Land tiles are visited in descending elevation order, ties broken by
    ascending position. Each tile pushes all of its water to the neighbours
    whose water elevation is strictly lower, in proportion to the elevation
    deficit. Water that reaches a water biome is absorbed.
    """

    def __init__(self, options: Optional[HydrologyOptions] = None):
        self.options = options or HydrologyOptions()

        # Generated features
        self.rivers: List[River] = []
        self.lakes: List[HexPoint] = []
        self.passes: List[PassResult] = []
        self.absorbed = 0.0

    def generate(self, tiles: TileSet, random: AleaPRNG) -> None:
        logger.info("Starting hydrology simulation", iterations=self.options.iterations)

        land = self.land_order(tiles)
        self.rain(land)

        for index in range(self.options.iterations):
            if index > 0 and self.options.rain_every_pass:
                self.rain(land)

            result = self.run_pass(tiles, land)
            # Early settling only applies when rain falls once
            if not self.options.rain_every_pass and result.change < self.options.convergence_tolerance:
                logger.debug("Runoff converged", passes=index + 1, change=result.change)
                break

        self.classify_lakes(land)
        self.trace_rivers(tiles)

        logger.info(
            "Hydrology simulation completed",
            passes=len(self.passes),
            absorbed=round(self.absorbed, 4),
            lakes=len(self.lakes),
            rivers=len(self.rivers),
        )

    @staticmethod
    def land_order(tiles: TileSet) -> List[Tile]:
        """Land tiles by descending elevation, ties by ascending (q, r, s)."""
        land = [tile for tile in tiles if tile.biome.is_land]
        land.sort(key=lambda tile: (-tile.elevation, tile.pos))
        return land

    def rain(self, land: List[Tile]):
        for tile in land:
            tile.add_water(self.options.rainfall)

    def run_pass(self, tiles: TileSet, land: Optional[List[Tile]] = None) -> PassResult:
        """
        Spread water once from every land tile, highest first.

        Args:
            tiles: All tiles of the world
            land: Land tiles in processing order; computed when omitted

        Returns:
            PassResult with the water totals of the pass
        """
        if land is None:
            land = self.land_order(tiles)

        levels = [tile.water_level for tile in land]
        before = sum(levels)

        absorbed = 0.0
        for tile in land:
            absorbed += self.spread_water(tiles, tile)

        after = sum(tile.water_level for tile in land)
        result = PassResult(
            before=before,
            after=after,
            absorbed=absorbed,
            change=sum(abs(tile.water_level - level) for tile, level in zip(land, levels)),
        )

        if not math.isclose(
            before,
            after + absorbed,
            rel_tol=self.options.conservation_rel_tolerance,
            abs_tol=self.options.conservation_tolerance,
        ):
            raise WaterConservationError(
                f"Water not conserved: before={before:.6f} after={after:.6f} "
                f"absorbed={absorbed:.6f}"
            )

        self.passes.append(result)
        self.absorbed += absorbed
        return result

    def spread_water(self, tiles: TileSet, tile: Tile) -> float:
        """
        Push all of a tile's water to its lower neighbours.

        Returns:
            Amount of water absorbed by water-biome neighbours
        """
        water = tile.water_level
        if water <= 0:
            return 0.0

        source = tile.water_elevation
        lower = [
            (neighbor, source - neighbor.water_elevation)
            for neighbor in tiles.get_adjacent(tile.pos).values()
            if neighbor.water_elevation < source
        ]
        total_deficit = sum(deficit for _, deficit in lower)
        if not lower or total_deficit <= 0:
            return 0.0

        tile.clear_water()
        absorbed = 0.0
        for neighbor, deficit in lower:
            share = water * deficit / total_deficit
            absorbed += share - neighbor.add_water(share)
        return absorbed

    def classify_lakes(self, land: List[Tile]):
        for tile in land:
            if tile.water_level >= self.options.lake_threshold:
                tile.biome = Biome.LAKE
                self.lakes.append(tile.pos)

    def trace_rivers(self, tiles: TileSet):
        """
        Trace rivers downhill from tiles with enough water throughput.

        Sources are taken highest first, so each river starts as far upstream
        as possible. A river ends at a water tile, at a tile with no lower land
        neighbour, or where it runs into a river traced earlier.
        """
        candidates = [
            tile for tile in tiles
            if tile.biome.is_land and tile.water_traversed >= self.options.river_threshold
        ]
        candidates.sort(key=lambda tile: (-tile.elevation, -tile.water_traversed, tile.pos))

        owner: Dict[HexPoint, int] = {}
        for start in candidates:
            if start.pos in owner:
                continue

            river = River(id=len(self.rivers), tiles=[start.pos], flow=start.water_traversed)
            current = start
            while True:
                step = self._next_river_tile(tiles, current)
                if step is None:
                    break
                direction, following = step
                current.add_river_connection(direction, RiverConnection.EXIT)
                if following.biome.is_water:
                    river.mouth = following.pos
                    break

                following.add_river_connection(direction.opposite, RiverConnection.ENTRY)
                if following.pos in owner:
                    river.joins = owner[following.pos]
                    break
                river.tiles.append(following.pos)
                river.flow = max(river.flow, following.water_traversed)
                current = following

            if len(river.tiles) > 1 or river.mouth is not None or river.joins is not None:
                for pos in river.tiles:
                    owner[pos] = river.id
                self.rivers.append(river)

    @staticmethod
    def _next_river_tile(tiles: TileSet, tile: Tile):
        """Lower land neighbour with the most throughput, else the first water neighbour."""
        adjacent = tiles.get_adjacent(tile.pos)

        best = None
        for direction, neighbor in adjacent.items():
            if neighbor.biome.is_land and neighbor.elevation < tile.elevation:
                if best is None or neighbor.water_traversed > best[1].water_traversed:
                    best = (direction, neighbor)
        if best is not None:
            return best

        for direction, neighbor in adjacent.items():
            if neighbor.biome.is_water:
                return direction, neighbor
        return None
