"""Application layer - use cases and configuration handling."""

from .commands import ConfigureProductCommand
from .dtos import LayoutOutput

__all__ = [
    "ConfigureProductCommand",
    "LayoutOutput",
]
