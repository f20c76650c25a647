"""
Tile collections and spatial queries.

This module implements:
- A set of tiles keyed by position, with deterministic iteration order
- Adjacency, range and ring queries over cube coordinates
- Flood-fill clustering of connected tiles
- Random selection with a minimum spacing between picks
"""

from collections import deque
from collections.abc import Set
from typing import Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Union

from ..utils.ranges import IntRange
from .exceptions import DuplicatePositionError, FrozenTileError, InvalidArgumentError
from .hex_point import Direction, HexPoint
from .tile import DEFAULT_ELEVATION_RANGE, Tile

PositionLike = Union[Tile, HexPoint]

# Directions walked around a ring, starting from its NORTH corner
_RING_WALK = (
    Direction.SOUTHEAST,
    Direction.SOUTH,
    Direction.SOUTHWEST,
    Direction.NORTHWEST,
    Direction.NORTH,
    Direction.NORTHEAST,
)


def _position_of(item: PositionLike) -> HexPoint:
    return item.pos if isinstance(item, Tile) else item


class TileSet(Set):
    """
    A set of tiles in which no two tiles share a position.

    Internally the tiles are stored in a dict keyed by ``HexPoint``, so
    iteration follows insertion order. Membership accepts either a tile or a
    position and is always decided by position.
    """

    def __init__(self, tiles: Iterable[Tile] = ()):
        self._tiles: Dict[HexPoint, Tile] = {}
        self._frozen = False
        for tile in tiles:
            self.add(tile)

    @classmethod
    def _from_iterable(cls, iterable):
        # Set operators may yield the same position twice; keep the first tile
        result = cls()
        for tile in iterable:
            result._tiles.setdefault(tile.pos, tile)
        return result

    @classmethod
    def init_by_radius(cls, radius: int, elevation_range: Optional[IntRange] = None) -> "TileSet":
        """
        Build a full hexagon of default tiles centred on ``HexPoint.ZERO``.

        Args:
            radius: Number of rings around the centre tile
            elevation_range: Elevation bounds for every tile

        Returns:
            TileSet with ``3 * radius * (radius + 1) + 1`` tiles
        """
        if radius < 0:
            raise InvalidArgumentError(f"Radius must be non-negative, got {radius}")

        elevation_range = elevation_range or DEFAULT_ELEVATION_RANGE
        tiles = cls()
        for q in range(-radius, radius + 1):
            for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
                pos = HexPoint(q, r, -q - r)
                tiles._tiles[pos] = Tile(pos, elevation_range=elevation_range)
        return tiles

    # Set protocol

    def __contains__(self, item) -> bool:
        if isinstance(item, (Tile, HexPoint)):
            return _position_of(item) in self._tiles
        return False

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles.values())

    def __len__(self) -> int:
        return len(self._tiles)

    def __repr__(self):
        return f"TileSet(size={len(self._tiles)})"

    # Mutation

    def add(self, tile: Tile):
        """Insert a tile. Fails if its position is already occupied."""
        self._check_mutable()
        if tile.pos in self._tiles:
            raise DuplicatePositionError(tile.pos)
        self._tiles[tile.pos] = tile

    def remove_position(self, pos: HexPoint) -> bool:
        self._check_mutable()
        return self._tiles.pop(pos, None) is not None

    def _check_mutable(self):
        if self._frozen:
            raise FrozenTileError("Tile set belongs to a finished world and cannot change")

    @property
    def frozen(self) -> bool:
        return self._frozen

    # Lookup

    def get_by_position(self, pos: HexPoint) -> Optional[Tile]:
        return self._tiles.get(pos)

    def contains_position(self, pos: HexPoint) -> bool:
        return pos in self._tiles

    def positions(self) -> List[HexPoint]:
        return list(self._tiles)

    def get_adjacent(self, item: PositionLike) -> Dict[Direction, Tile]:
        """
        Get the neighbours of a position that exist in this set.

        The position itself does not have to be a member.

        Args:
            item: Tile or position at the centre

        Returns:
            Mapping of direction to neighbouring tile
        """
        pos = _position_of(item)
        result = {}
        for direction in Direction:
            delta = direction.delta
            neighbor = self._tiles.get(HexPoint(pos.q + delta.q, pos.r + delta.r, pos.s + delta.s))
            if neighbor is not None:
                result[direction] = neighbor
        return result

    def tiles_in_range(self, origin: PositionLike, range_: int) -> "TileSet":
        """
        Get every tile reachable within ``range_`` steps of ``origin``.

        The frontier is expanded one ring at a time through tiles of this
        set, so the origin is always included and a range of 0 yields only
        the origin.

        Args:
            origin: Tile or position in this set
            range_: Non-negative number of steps

        Returns:
            TileSet in expansion order
        """
        origin_tile = self._require_member(origin)
        if range_ < 0:
            raise InvalidArgumentError(f"Range must be non-negative, got {range_}")

        result = TileSet._from_iterable([origin_tile])
        frontier = [origin_tile]
        for _ in range(range_):
            next_frontier = []
            for tile in frontier:
                for neighbor in self.get_adjacent(tile.pos).values():
                    if neighbor.pos not in result._tiles:
                        result._tiles[neighbor.pos] = neighbor
                        next_frontier.append(neighbor)
            if not next_frontier:
                break
            frontier = next_frontier
        return result

    def tiles_at_distance(self, origin: PositionLike, distance: int) -> "TileSet":
        """
        Get the tiles exactly ``distance`` away from ``origin``.

        Positions of the ring that are not in this set are skipped, so a ring
        entirely outside the set is empty.
        """
        origin_tile = self._require_member(origin)
        if distance < 0:
            raise InvalidArgumentError(f"Distance must be non-negative, got {distance}")
        if distance == 0:
            return TileSet._from_iterable([origin_tile])

        result = TileSet()
        point = Direction.NORTH.shift(origin_tile.pos, distance)
        for direction in _RING_WALK:
            for _ in range(distance):
                tile = self._tiles.get(point)
                if tile is not None:
                    result._tiles[point] = tile
                point = direction.shift(point)
        return result

    def _require_member(self, item: PositionLike) -> Tile:
        tile = self._tiles.get(_position_of(item))
        if tile is None:
            raise InvalidArgumentError(f"Origin {_position_of(item)} is not in this tile set")
        return tile

    # Clustering

    def cluster(self, predicate: Optional[Callable[[Tile], bool]] = None) -> list:
        """
        Group tiles that satisfy ``predicate`` into connected clusters.

        Each matching tile ends up in exactly one cluster and no two clusters
        touch. Clusters are emitted in the iteration order of their first tile.

        Args:
            predicate: Filter for the tiles to cluster; all tiles when omitted

        Returns:
            List of Cluster
        """
        if predicate is None:
            return self.category_cluster(lambda tile: True).get(True, [])
        return self.category_cluster(lambda tile: bool(predicate(tile))).get(True, [])

    def category_cluster(self, key_func: Callable[[Tile], Hashable]) -> dict:
        """
        Cluster every tile, grouping by the value of ``key_func``.

        Two adjacent tiles land in the same cluster only if their keys are
        equal.

        Returns:
            Mapping of key to the list of clusters with that key
        """
        from .cluster import Cluster

        keys = {pos: key_func(tile) for pos, tile in self._tiles.items()}
        visited = set()
        result: Dict[Hashable, list] = {}

        for start in self._tiles:
            if start in visited:
                continue

            key = keys[start]
            members = [start]
            visited.add(start)
            queue = deque([start])
            while queue:
                pos = queue.popleft()
                for neighbor in self.get_adjacent(pos).values():
                    npos = neighbor.pos
                    if npos not in visited and keys[npos] == key:
                        visited.add(npos)
                        members.append(npos)
                        queue.append(npos)

            result.setdefault(key, []).append(Cluster.from_positions(self, members))

        return result

    # Selection

    def select_tiles(self, random, count: int, min_spacing: int = 0) -> "TileSet":
        """
        Randomly pick up to ``count`` tiles, each more than ``min_spacing`` from the others.

        Tiles too close to a pick are removed from the pool rather than
        retried, so fewer tiles than requested may come back.

        Args:
            random: AleaPRNG instance
            count: Number of tiles wanted
            min_spacing: Minimum distance that must be exceeded between picks

        Returns:
            TileSet of selected tiles in pick order
        """
        pool = list(self._tiles.values())
        result = TileSet()
        while len(result) < count and pool:
            pick = random.choice(pool)
            result._tiles[pick.pos] = pick
            pool = [tile for tile in pool if tile.pos.distance_to(pick.pos) > min_spacing]
        return result

    # Copies

    def copy(self) -> "TileSet":
        """Deep copy: every tile is duplicated."""
        return TileSet._from_iterable(tile.copy() for tile in self._tiles.values())

    def immutable_copy(self) -> "TileSet":
        """Deep copy with every tile frozen and the set itself closed to changes."""
        result = TileSet._from_iterable(tile.copy().freeze() for tile in self._tiles.values())
        result._frozen = True
        return result

    def total_water(self) -> float:
        return sum(tile.water_level for tile in self._tiles.values())
