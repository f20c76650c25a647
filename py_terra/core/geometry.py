"""
Conversion between board positions and screen pixels.

Tiles are flat-topped hexagons. ``tile_width`` is the corner-to-corner width,
so the radius is half of it and the height is ``sqrt(3) * radius``. Screen y
grows downward, so moving NORTH decreases y.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .exceptions import InvalidArgumentError
from .hex_point import HexPoint

SQRT_3 = math.sqrt(3)


@dataclass(frozen=True)
class TileLayout:
    """Pixel layout of the board: tile size and the screen position of ``HexPoint.ZERO``."""

    tile_width: float = 148.0
    origin: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        if self.tile_width <= 0:
            raise InvalidArgumentError(f"Tile width must be positive, got {self.tile_width}")

    @property
    def radius(self) -> float:
        return self.tile_width / 2

    @property
    def tile_height(self) -> float:
        return SQRT_3 * self.radius

    def hex_to_pixel(self, point: HexPoint) -> Tuple[float, float]:
        """Screen position of the centre of the tile at ``point``."""
        x = 1.5 * self.radius * point.q
        y = -self.tile_height * (point.q / 2 + point.r)
        return self.origin[0] + x, self.origin[1] + y

    def pixel_to_hex(self, x: float, y: float) -> HexPoint:
        """
        Position of the tile enclosing a screen point.

        The returned point does not necessarily exist on any board; it is the
        position a tile would have there.
        """
        px = x - self.origin[0]
        py = y - self.origin[1]

        frac_q = px * 2 / 3 / self.radius
        frac_r = -(px + SQRT_3 * py) / (3 * self.radius)
        frac_s = -frac_q - frac_r

        return HexPoint.round_point(frac_q, frac_r, frac_s)


DEFAULT_LAYOUT = TileLayout()


def hex_to_pixel(point: HexPoint, layout: TileLayout = DEFAULT_LAYOUT) -> Tuple[float, float]:
    return layout.hex_to_pixel(point)


def pixel_to_hex(x: float, y: float, layout: TileLayout = DEFAULT_LAYOUT) -> HexPoint:
    return layout.pixel_to_hex(x, y)
