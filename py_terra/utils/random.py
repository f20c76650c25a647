"""
Seed handling for world generation.

All randomness in a generation run comes from one ``AleaPRNG`` created from
the resolved integer seed. Python's ``random`` and NumPy's global random
state are never used by generation stages.
"""

import hashlib
import uuid
from typing import Optional, Union

import structlog

from ..core.alea_prng import AleaPRNG

logger = structlog.get_logger()

SeedInput = Optional[Union[int, str]]

_SEED_MASK = 0x7FFFFFFFFFFFFFFF


def hash_seed(text: str) -> int:
    """Deterministically hash a string into a non-negative 63-bit seed."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big", signed=False) & _SEED_MASK


def generate_seed() -> int:
    """Create a fresh random seed."""
    return uuid.uuid4().int & _SEED_MASK


def resolve_seed(seed: SeedInput = None) -> int:
    """
    Turn a configured seed into the integer used for generation.

    Args:
        seed: An integer, a string, or None. Strings that parse as integers
            are used as-is, any other string is hashed. None generates a new
            seed, which is logged so the run can be reproduced.

    Returns:
        Integer seed
    """
    if seed is None:
        resolved = generate_seed()
        logger.info("Generated random seed", seed=resolved)
        return resolved

    if isinstance(seed, bool):
        raise TypeError("Seed must be an int or a str, not bool")

    if isinstance(seed, int):
        return seed

    if isinstance(seed, str):
        text = seed.strip()
        try:
            return int(text)
        except ValueError:
            resolved = hash_seed(seed)
            logger.debug("Hashed seed string", seed_string=seed, seed=resolved)
            return resolved

    raise TypeError(f"Seed must be an int or a str, not {type(seed).__name__}")


def create_prng(seed: int) -> AleaPRNG:
    """
    Create the random source for one generation session.

    Args:
        seed: Resolved integer seed

    Returns:
        AleaPRNG instance
    """
    return AleaPRNG(str(seed))
