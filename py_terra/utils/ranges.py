"""Inclusive integer ranges used for elevation bounds and random counts."""

from typing import NamedTuple


class IntRange(NamedTuple):
    """Closed range ``[lower, upper]`` of integers."""

    lower: int
    upper: int

    def __contains__(self, value) -> bool:
        return self.lower <= value <= self.upper

    def validate(self) -> "IntRange":
        if self.upper < self.lower:
            raise ValueError(f"Lower bound [{self.lower}] must be <= upper bound [{self.upper}]")
        return self

    def coerce(self, value: int) -> int:
        """Clamp ``value`` into this range."""
        if value < self.lower:
            return self.lower
        if value > self.upper:
            return self.upper
        return value

    def random_in(self, prng) -> int:
        """Pick a uniformly distributed value in the range using ``prng``."""
        return prng.randint(self.lower, self.upper)
