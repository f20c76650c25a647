"""
Tiles and biomes.

A ``Tile`` is one hex cell of the board. Its position never changes; biome,
elevation and water state are mutated by generation stages and then frozen
when the tile is copied into a finished world.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Optional, Tuple

from ..utils.ranges import IntRange
from .exceptions import FrozenTileError, InvalidArgumentError
from .hex_point import Direction, HexPoint, RiverConnection

DEFAULT_ELEVATION_RANGE = IntRange(-25, 50)


class Biome(IntEnum):
    """Tile biomes. OCEAN, COAST and LAKE are water, everything else is land."""

    NONE = 0
    OCEAN = 1
    COAST = 2
    LAKE = 3
    BEACH = 4
    PLAINS = 5
    FOREST = 6
    DESERT = 7
    MOUNTAIN = 8
    SNOW = 9
    DEBUG = 10

    @property
    def display_name(self) -> str:
        return BIOME_NAMES[self]

    @property
    def color(self) -> Tuple[int, int, int]:
        return BIOME_COLORS[self]

    @property
    def is_water(self) -> bool:
        return self in WATER_BIOMES

    @property
    def is_land(self) -> bool:
        return self not in WATER_BIOMES


# Biome names for display
BIOME_NAMES = {
    Biome.NONE: "None",
    Biome.OCEAN: "Ocean",
    Biome.COAST: "Coast",
    Biome.LAKE: "Lake",
    Biome.BEACH: "Beach",
    Biome.PLAINS: "Plains",
    Biome.FOREST: "Forest",
    Biome.DESERT: "Desert",
    Biome.MOUNTAIN: "Mountain",
    Biome.SNOW: "Snow",
    Biome.DEBUG: "Debug",
}

BIOME_COLORS = {
    Biome.NONE: (0, 0, 0),
    Biome.OCEAN: (20, 75, 164),
    Biome.COAST: (57, 139, 198),
    Biome.LAKE: (11, 140, 190),
    Biome.BEACH: (242, 239, 89),
    Biome.PLAINS: (173, 201, 116),
    Biome.FOREST: (23, 122, 0),
    Biome.DESERT: (215, 203, 108),
    Biome.MOUNTAIN: (99, 73, 54),
    Biome.SNOW: (187, 187, 187),
    Biome.DEBUG: (255, 0, 255),
}

WATER_BIOMES = frozenset({Biome.OCEAN, Biome.COAST, Biome.LAKE})


class Tile:
    """
    A single hex cell.

    Elevation writes are clamped into ``elevation_range``. Once ``freeze()``
    has been called every write raises ``FrozenTileError``.
    """

    __slots__ = (
        "_pos",
        "_biome",
        "_elevation",
        "elevation_range",
        "_water_level",
        "_water_traversed",
        "_river_connections",
        "_frozen",
    )

    def __init__(
        self,
        pos: HexPoint,
        biome: Biome = Biome.NONE,
        elevation: int = 0,
        elevation_range: IntRange = DEFAULT_ELEVATION_RANGE,
    ):
        object.__setattr__(self, "_frozen", False)
        self._pos = pos
        self.elevation_range = elevation_range
        self._biome = Biome(biome)
        self._elevation = elevation_range.coerce(int(elevation))
        self._water_level = 0.0
        self._water_traversed = 0.0
        self._river_connections: Dict[Direction, RiverConnection] = {}

    def __setattr__(self, name, value):
        if self._frozen:
            raise FrozenTileError(f"Tile at {self._pos} is frozen, cannot set {name}")
        object.__setattr__(self, name, value)

    @property
    def pos(self) -> HexPoint:
        return self._pos

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def biome(self) -> Biome:
        return self._biome

    @biome.setter
    def biome(self, value: Biome):
        self._biome = Biome(value)

    @property
    def elevation(self) -> int:
        return self._elevation

    @elevation.setter
    def elevation(self, value: int):
        self._elevation = self.elevation_range.coerce(int(value))

    @property
    def water_level(self) -> float:
        return self._water_level

    @property
    def water_elevation(self) -> float:
        """Elevation of the top of the water on this tile."""
        return self._elevation + self._water_level

    @property
    def water_traversed(self) -> float:
        """Total water that has ever entered this tile."""
        return self._water_traversed

    @property
    def river_connections(self):
        return self._river_connections

    @property
    def is_river(self) -> bool:
        return bool(self._river_connections)

    def add_water(self, amount: float) -> float:
        """
        Add water to this tile.

        Water biomes absorb whatever they receive, so nothing is stored on them.

        Args:
            amount: Non-negative amount of water

        Returns:
            Amount actually stored on the tile
        """
        if amount < 0:
            raise InvalidArgumentError(f"Water must be non-negative, got {amount}")
        self._check_mutable()
        if self._biome.is_water:
            return 0.0
        self._water_level += amount
        self._water_traversed += amount
        return amount

    def clear_water(self) -> float:
        """Set the water level to zero and return the previous level."""
        removed = self._water_level
        self._water_level = 0.0
        return removed

    def add_river_connection(self, direction: Direction, connection: RiverConnection):
        self._check_mutable()
        self._river_connections[direction] = connection

    def get_river_connection(self, direction: Direction) -> Optional[RiverConnection]:
        return self._river_connections.get(direction)

    def copy(self) -> "Tile":
        """Mutable copy of this tile, including water and river state."""
        tile = Tile(self._pos, self._biome, self._elevation, self.elevation_range)
        tile._water_level = self._water_level
        tile._water_traversed = self._water_traversed
        tile._river_connections = dict(self._river_connections)
        return tile

    def freeze(self) -> "Tile":
        """Make this tile permanently read-only."""
        if not self._frozen:
            self._river_connections = MappingProxyType(dict(self._river_connections))
            object.__setattr__(self, "_frozen", True)
        return self

    def _check_mutable(self):
        if self._frozen:
            raise FrozenTileError(f"Tile at {self._pos} is frozen")

    def to_dict(self) -> dict:
        return {
            "q": self._pos.q,
            "r": self._pos.r,
            "s": self._pos.s,
            "biome": self._biome.name,
            "elevation": self._elevation,
            "water_level": self._water_level,
            "water_traversed": self._water_traversed,
            "river_connections": {
                direction.name: connection.name
                for direction, connection in self._river_connections.items()
            },
        }

    def __eq__(self, other):
        if not isinstance(other, Tile):
            return NotImplemented
        return (
            self._pos == other._pos
            and self._biome == other._biome
            and self._elevation == other._elevation
        )

    def __hash__(self):
        return hash(self._pos)

    def __repr__(self):
        return f"Tile@{self._pos}"
