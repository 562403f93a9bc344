"""Bundled presets and collections.

This package provides preset configurations for common products and a
PresetManager class for accessing them.
"""

from configurator.application.presets.manager import (
    COLLECTIONS,
    PRESET_METADATA,
    Collection,
    PresetManager,
    PresetNotFoundError,
)

__all__ = [
    "COLLECTIONS",
    "Collection",
    "PRESET_METADATA",
    "PresetManager",
    "PresetNotFoundError",
]
