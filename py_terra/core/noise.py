"""
Noise-based base elevation.

Fractal value noise is evaluated at each tile's centre and the resulting
values are stretched over the tiles' elevation range. Lattice values come
from the shared ``AleaPRNG`` so the terrain follows the world seed.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .geometry import TileLayout
from .generator import Generator
from .tile_set import TileSet

logger = structlog.get_logger()

# Layout measured in tiles: neighbouring centres are about one unit apart
_UNIT_LAYOUT = TileLayout(tile_width=2 / np.sqrt(3))


@dataclass
class NoiseOptions:
    """Fractal noise options."""

    scale: float = 8.0  # Tiles per lattice cell on the first octave
    octaves: int = 4
    persistence: float = 0.5  # Amplitude multiplier per octave
    lacunarity: float = 2.0  # Frequency multiplier per octave


def value_noise(
    xs: np.ndarray,
    ys: np.ndarray,
    random: AleaPRNG,
    options: NoiseOptions,
) -> np.ndarray:
    """
    Evaluate fractal value noise at arbitrary points.

    Args:
        xs: X coordinates
        ys: Y coordinates
        random: Source for the lattice values
        options: Octave configuration

    Returns:
        Array of noise values in [0, 1], one per point
    """
    xs = xs - xs.min()
    ys = ys - ys.min()

    out = np.zeros(len(xs), dtype=np.float64)
    amp = 1.0
    total = 0.0
    freq = 1.0 / options.scale

    for _ in range(options.octaves):
        u = xs * freq
        v = ys * freq
        gw = int(np.floor(u.max())) + 2
        gh = int(np.floor(v.max())) + 2
        grid = np.array([random.random() for _ in range(gw * gh)]).reshape(gh, gw)

        x0 = np.floor(u).astype(int)
        y0 = np.floor(v).astype(int)
        x1 = np.minimum(x0 + 1, gw - 1)
        y1 = np.minimum(y0 + 1, gh - 1)

        # Smoothstep removes the creases of plain bilinear interpolation
        fx = u - x0
        fy = v - y0
        fx = fx * fx * (3 - 2 * fx)
        fy = fy * fy * (3 - 2 * fy)

        top = grid[y0, x0] * (1 - fx) + grid[y0, x1] * fx
        bottom = grid[y1, x0] * (1 - fx) + grid[y1, x1] * fx
        out += (top * (1 - fy) + bottom * fy) * amp

        total += amp
        amp *= options.persistence
        freq *= options.lacunarity

    if total > 0:
        out /= total
    return out


class NoiseElevationGenerator(Generator):
    """Assigns every tile a base elevation from fractal noise."""

    def __init__(self, options: Optional[NoiseOptions] = None):
        self.options = options or NoiseOptions()

    def generate(self, tiles: TileSet, random: AleaPRNG) -> None:
        if not tiles:
            return

        tile_list = list(tiles)
        centres = np.array([_UNIT_LAYOUT.hex_to_pixel(tile.pos) for tile in tile_list])
        noise = value_noise(centres[:, 0], centres[:, 1], random, self.options)

        low, high = float(noise.min()), float(noise.max())
        span = high - low
        normalized = (noise - low) / span if span > 0 else np.full(len(noise), 0.5)

        for tile, value in zip(tile_list, normalized):
            elevation_range = tile.elevation_range
            tile.elevation = int(round(
                elevation_range.lower + value * (elevation_range.upper - elevation_range.lower)
            ))

        logger.info(
            "Noise elevation generated",
            tiles=len(tile_list),
            noise_min=round(low, 4),
            noise_max=round(high, 4),
        )
