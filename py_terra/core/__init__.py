"""
Core terrain generation functionality.
"""

from .exceptions import (
    DuplicatePositionError,
    FrozenTileError,
    GenerationCancelledError,
    InvalidArgumentError,
    TerraError,
    WaterConservationError,
)
from .alea_prng import AleaPRNG
from .hex_point import Direction, HexPoint, RiverConnection
from .geometry import TileLayout, hex_to_pixel, pixel_to_hex
from .tile import Biome, Tile
from .tile_set import TileSet
from .cluster import Cluster
from .generator import Generator
from .world import World, WorldBuilder, build_stages, generate_world

__all__ = ['TerraError', 'InvalidArgumentError', 'DuplicatePositionError', 'FrozenTileError',
           'WaterConservationError', 'GenerationCancelledError', 'AleaPRNG',
           'HexPoint', 'Direction', 'RiverConnection', 'TileLayout', 'hex_to_pixel',
           'pixel_to_hex', 'Biome', 'Tile', 'TileSet', 'Cluster', 'Generator',
           'World', 'WorldBuilder', 'build_stages', 'generate_world']
