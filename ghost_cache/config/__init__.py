"""
Ghost Cache - Configuration Module

Provides typed option loading and validation.
"""

from .loader import get_options, load_options, reload_options
from .schemas import GhostCacheOptions, StoragePreset

__all__ = [
    # Loader functions
    "load_options",
    "get_options",
    "reload_options",
    # Options
    "GhostCacheOptions",
    # Enums
    "StoragePreset",
]
