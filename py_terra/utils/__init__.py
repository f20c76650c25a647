"""
Utility helpers: seeds, logging setup, integer ranges.
"""

from .ranges import IntRange
from .random import create_prng, generate_seed, hash_seed, resolve_seed
from .log_config import configure_logging

__all__ = ['IntRange', 'create_prng', 'generate_seed', 'hash_seed', 'resolve_seed',
           'configure_logging']
