"""
Cube coordinates for the hexagonal board.

Every tile position is a ``HexPoint`` with ``q + r + s == 0``. Directions are
the six flat-top neighbour offsets.
"""

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .exceptions import InvalidArgumentError


@dataclass(frozen=True, order=True)
class HexPoint:
    """Immutable cube coordinate, ordered lexicographically on (q, r, s)."""

    q: int
    r: int
    s: int

    ZERO: ClassVar["HexPoint"]

    def __post_init__(self):
        if not all(isinstance(c, numbers.Integral) for c in (self.q, self.r, self.s)):
            raise InvalidArgumentError(
                f"Coordinates must be integers, got ({self.q}, {self.r}, {self.s})"
            )
        if self.q + self.r + self.s != 0:
            raise InvalidArgumentError(
                f"Coordinates must sum to zero, got ({self.q}, {self.r}, {self.s})"
            )

    @classmethod
    def from_axial(cls, q: int, r: int) -> "HexPoint":
        """Build a point from two coordinates, inferring ``s``."""
        return cls(q, r, -q - r)

    @classmethod
    def round_point(cls, q: float, r: float, s: float) -> "HexPoint":
        """
        Round fractional cube coordinates to the nearest valid point.

        The component with the largest rounding error is re-derived from the
        other two so the result still sums to zero.
        """
        if not all(math.isfinite(c) for c in (q, r, s)):
            raise InvalidArgumentError(f"Cannot round non-finite coordinates ({q}, {r}, {s})")
        rq, rr, rs = round(q), round(r), round(s)
        dq, dr, ds = abs(rq - q), abs(rr - r), abs(rs - s)

        if dq > dr and dq > ds:
            rq = -rr - rs
        elif dr > ds:
            rr = -rq - rs
        else:
            rs = -rq - rr

        return cls(int(rq), int(rr), int(rs))

    def distance_to(self, other: "HexPoint") -> int:
        return (abs(self.q - other.q) + abs(self.r - other.r) + abs(self.s - other.s)) // 2

    def plus(self, other: "HexPoint") -> "HexPoint":
        return HexPoint(self.q + other.q, self.r + other.r, self.s + other.s)

    def times(self, factor: int) -> "HexPoint":
        return HexPoint(self.q * factor, self.r * factor, self.s * factor)

    def __str__(self):
        return f"({self.q}, {self.r}, {self.s})"


HexPoint.ZERO = HexPoint(0, 0, 0)


class Direction(Enum):
    """The six neighbour directions, clockwise from north."""

    NORTH = (0, 1, -1)
    NORTHEAST = (1, 0, -1)
    SOUTHEAST = (1, -1, 0)
    SOUTH = (0, -1, 1)
    SOUTHWEST = (-1, 0, 1)
    NORTHWEST = (-1, 1, 0)

    @property
    def delta(self) -> HexPoint:
        return HexPoint(*self.value)

    @property
    def opposite(self) -> "Direction":
        q, r, s = self.value
        return Direction((-q, -r, -s))

    def shift(self, point: HexPoint, distance: int = 1) -> HexPoint:
        """Move ``point`` ``distance`` steps in this direction."""
        if distance <= 0:
            raise InvalidArgumentError(f"Shift distance must be positive, got {distance}")
        return point.plus(self.delta.times(distance))

    def is_opposite(self, other: "Direction") -> bool:
        return other is self.opposite

    def is_adjacent_to(self, other: "Direction") -> bool:
        """True if the two directions are next to each other on the compass."""
        return self.delta.distance_to(other.delta) == 1


class RiverConnection(Enum):
    """Whether water enters or leaves a river tile across an edge."""

    ENTRY = "entry"
    EXIT = "exit"
