"""
Configuration for world generation and the API.
"""

from .generation_settings import GenerationSettings
from .config import Settings, settings

__all__ = ['GenerationSettings', 'Settings', 'settings']
