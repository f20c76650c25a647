"""
Procedural hex terrain generation.
"""

from .core import Biome, HexPoint, Tile, TileSet, World, WorldBuilder, generate_world
from .config import GenerationSettings

__version__ = "0.1.0"

__all__ = ['Biome', 'HexPoint', 'Tile', 'TileSet', 'World', 'WorldBuilder', 'generate_world',
           'GenerationSettings']
