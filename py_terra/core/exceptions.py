"""
Error types raised by the terrain core.

Geometric input errors are always surfaced to the caller. Everything else
indicates a defect in a generation stage and aborts the current run.
"""


class TerraError(Exception):
    """Base class for all terrain generation errors."""


class InvalidArgumentError(TerraError, ValueError):
    """Malformed geometric input (negative radius/range, unknown origin, bad coordinate)."""


class DuplicatePositionError(TerraError, ValueError):
    """A tile was inserted at a position that is already occupied."""

    def __init__(self, position):
        super().__init__(f"A tile already exists at {position}")
        self.position = position


class FrozenTileError(TerraError, AttributeError):
    """A tile belonging to a finished world was modified."""


class WaterConservationError(TerraError, RuntimeError):
    """Water appeared or disappeared during runoff simulation."""


class GenerationCancelledError(TerraError, RuntimeError):
    """Generation was cancelled between two stages."""
