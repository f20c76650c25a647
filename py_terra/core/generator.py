"""
Base class for world generation stages.
"""

from abc import ABC, abstractmethod

from .alea_prng import AleaPRNG
from .tile_set import TileSet


class Generator(ABC):
    """
    One stage of world generation.

    A stage receives the partially generated tiles and the shared random
    source, and modifies the tiles in place. An instance should only be used
    for one world; build fresh stages for every run so no state leaks between
    worlds.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def generate(self, tiles: TileSet, random: AleaPRNG) -> None:
        """
        Modify ``tiles`` in place.

        Args:
            tiles: Tiles of the world being built
            random: Random source shared by every stage of the run
        """

    def __repr__(self):
        return f"{self.name}()"
