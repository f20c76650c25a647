"""
Connected groups of tiles.

A cluster is a view over a ``TileSet``: it records member positions and
looks tiles up in the set it belongs to. It never owns tile data.
"""

from collections.abc import Set
from typing import Dict, Iterable, Iterator, Optional

from .exceptions import InvalidArgumentError
from .hex_point import HexPoint
from .tile import Tile
from .tile_set import TileSet


class Cluster(Set):
    """
    A set of tiles from one ``TileSet``, assumed to be contiguous.

    The frontier returned by ``all_adjacents`` is cached and invalidated on
    every membership change.
    """

    def __init__(self, world: TileSet, tiles: Iterable[Tile] = ()):
        self.world = world
        self._members: Dict[HexPoint, None] = {}
        self._frontier: Optional[TileSet] = None
        for tile in tiles:
            self.add(tile)

    @classmethod
    def from_positions(cls, world: TileSet, positions: Iterable[HexPoint]) -> "Cluster":
        cluster = cls(world)
        cluster._members = dict.fromkeys(positions)
        return cluster

    @classmethod
    def _from_iterable(cls, iterable):
        return TileSet._from_iterable(iterable)

    def __contains__(self, item) -> bool:
        if isinstance(item, Tile):
            return item.pos in self._members
        return item in self._members

    def __iter__(self) -> Iterator[Tile]:
        world = self.world
        return (world.get_by_position(pos) for pos in self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self):
        return f"Cluster(size={len(self._members)})"

    @property
    def positions(self):
        return list(self._members)

    def add(self, tile: Tile) -> bool:
        """
        Add a tile of the owning world to this cluster.

        Returns:
            True if the tile was not already a member
        """
        if not self.world.contains_position(tile.pos):
            raise InvalidArgumentError(f"Tile at {tile.pos} is not in this cluster's world")
        if tile.pos in self._members:
            return False
        self._members[tile.pos] = None
        self._frontier = None
        return True

    def remove_position(self, pos: HexPoint) -> bool:
        if pos not in self._members:
            return False
        del self._members[pos]
        self._frontier = None
        return True

    def all_adjacents(self) -> TileSet:
        """Tiles of the world that touch this cluster without belonging to it."""
        if self._frontier is None:
            frontier = TileSet()
            for pos in self._members:
                for neighbor in self.world.get_adjacent(pos).values():
                    if neighbor.pos not in self._members and neighbor not in frontier:
                        frontier.add(neighbor)
            self._frontier = frontier
        return TileSet._from_iterable(self._frontier)

    def copy(self) -> "Cluster":
        """Duplicate the membership; the copy shares this cluster's world."""
        return Cluster.from_positions(self.world, self._members)
