"""
Peak placement.

Picks a random number of well separated tiles and raises them to the top of
the elevation range, optionally sloping the ground around each one.
"""

from dataclasses import dataclass
from typing import List, Optional

import structlog

from ..utils.ranges import IntRange
from .alea_prng import AleaPRNG
from .generator import Generator
from .hex_point import HexPoint
from .tile_set import TileSet

logger = structlog.get_logger()


@dataclass
class PeakOptions:
    """Peak placement options."""

    min_peaks: int = 7
    max_peaks: int = 10
    min_separation: int = 2  # Peaks must be strictly farther apart than this
    smooth_slopes: bool = False
    slope_slop: int = 4  # Random variation applied to smoothed neighbours


class PeakGenerator(Generator):
    """
    Raises a random set of tiles to the maximum elevation.

    The number of peaks is drawn uniformly from ``[min_peaks, max_peaks]``.
    When the candidate pool runs out first, fewer peaks are placed.
    """

    def __init__(self, options: Optional[PeakOptions] = None):
        self.options = options or PeakOptions()
        IntRange(self.options.min_peaks, self.options.max_peaks).validate()
        self.peaks: List[HexPoint] = []

    def generate(self, tiles: TileSet, random: AleaPRNG) -> None:
        target = IntRange(self.options.min_peaks, self.options.max_peaks).random_in(random)
        selected = tiles.select_tiles(random, target, self.options.min_separation)

        for peak in selected:
            peak.elevation = peak.elevation_range.upper
            self.peaks.append(peak.pos)

        if self.options.smooth_slopes:
            for peak in selected:
                self._smooth_around(tiles, peak, random)

        if len(self.peaks) < target:
            logger.warning("Ran out of peak candidates", requested=target, placed=len(self.peaks))

        logger.info("Peaks generated", count=len(self.peaks), requested=target)

    def _smooth_around(self, tiles: TileSet, peak, random: AleaPRNG):
        """Slope each neighbour between the peak and the tile beyond it."""
        for direction, neighbor in tiles.get_adjacent(peak.pos).items():
            if neighbor.pos in self.peaks:
                continue
            beyond = tiles.get_by_position(direction.shift(neighbor.pos))
            beyond_elevation = beyond.elevation if beyond is not None else 0
            average = (peak.elevation + beyond_elevation) // 2
            neighbor.elevation = random.slop(average, self.options.slope_slop)
