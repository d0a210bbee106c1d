"""Configuration management for Sample Grid.

Provides global settings and random seed management for reproducible sampling.
"""

from .settings import get_config, set_config, Settings
from .random_state import set_global_seed, get_random_state, get_rng
from .defaults import GRID_PRESETS, DEFAULT_GRID_CONFIG, DefaultConfig

__all__ = [
    'get_config',
    'set_config',
    'set_global_seed',
    'get_random_state',
    'get_rng',
    'Settings',
    'GRID_PRESETS',
    'DEFAULT_GRID_CONFIG',
    'DefaultConfig'
]
