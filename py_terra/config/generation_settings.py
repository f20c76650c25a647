"""
World generation parameters.

Every tunable constant of the generation pipeline lives here so a run can
be reproduced from its settings and seed alone.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from ..utils.ranges import IntRange


class GenerationSettings(BaseModel):
    """Parameters for one world generation run."""

    # Board
    radius: int = Field(default=20, ge=0, description="Number of tile rings around the centre")
    seed: Optional[Union[int, str]] = Field(
        default=None, description="World seed; strings that are not integers are hashed"
    )
    pipeline: Literal["canonical", "terrain"] = Field(
        default="canonical", description="Stage list to run"
    )
    tile_width: float = Field(default=148.0, gt=0, description="Tile width in pixels")

    # Elevation
    elevation_min: int = Field(default=-25, description="Lowest allowed elevation")
    elevation_max: int = Field(default=50, description="Highest allowed elevation")
    sea_level: int = Field(default=0, description="Tiles below this may become ocean")
    mountain_elevation: int = Field(default=20, description="Tiles at or above this are mountains")

    # Peaks
    min_peaks: int = Field(default=7, ge=0, description="Minimum number of peaks")
    max_peaks: int = Field(default=10, ge=0, description="Maximum number of peaks")
    min_peak_separation: int = Field(
        default=2, ge=0, description="Peaks are strictly farther apart than this"
    )
    peak_slope_slop: int = Field(
        default=4, ge=0, description="Random variation of slopes around peaks"
    )

    # Noise
    noise_scale: float = Field(default=8.0, gt=0, description="Tiles per noise lattice cell")
    noise_octaves: int = Field(default=4, ge=1, description="Number of noise octaves")
    noise_persistence: float = Field(default=0.5, gt=0, description="Amplitude falloff per octave")

    # Oceans and beaches
    min_possible_ocean_size: int = Field(
        default=15, ge=1, description="Sunken clusters smaller than this never become ocean"
    )
    min_ocean_size: int = Field(default=50, ge=1, description="Sunken clusters this big are always ocean")
    min_coast_depth: int = Field(default=-5, description="Ocean at or above this depth is coast")
    max_beach_elevation: int = Field(default=5, description="Highest elevation a beach can have")

    # Hydrology
    rainfall: float = Field(default=0.5, ge=0, description="Water added to each land tile")
    rain_every_pass: bool = Field(default=False, description="Rain before every runoff pass")
    runoff_iterations: int = Field(default=5, ge=0, description="Maximum runoff passes")
    lake_threshold: float = Field(default=3.0, ge=0, description="Settled water that forms a lake")
    river_threshold: float = Field(default=10.0, ge=0, description="Water throughput that forms a river")
    convergence_tolerance: float = Field(
        default=1e-6, ge=0, description="Runoff stops once a pass moves less water than this"
    )

    @model_validator(mode="after")
    def check_ranges(self) -> "GenerationSettings":
        if self.min_peaks > self.max_peaks:
            raise ValueError(
                f"min_peaks ({self.min_peaks}) must not exceed max_peaks ({self.max_peaks})"
            )
        if self.min_possible_ocean_size > self.min_ocean_size:
            raise ValueError(
                f"min_possible_ocean_size ({self.min_possible_ocean_size}) must not exceed "
                f"min_ocean_size ({self.min_ocean_size})"
            )
        if self.elevation_min >= self.elevation_max:
            raise ValueError(
                f"elevation_min ({self.elevation_min}) must be below elevation_max ({self.elevation_max})"
            )
        if not self.elevation_min <= self.sea_level <= self.elevation_max:
            raise ValueError(
                f"sea_level ({self.sea_level}) must lie within "
                f"[{self.elevation_min}, {self.elevation_max}]"
            )
        return self

    @property
    def elevation_range(self) -> IntRange:
        return IntRange(self.elevation_min, self.elevation_max)
