"""Material and colour catalogue."""

from __future__ import annotations

from enum import Enum


class Material(str, Enum):
    """Board materials offered by the configurator."""

    WOOD = "wood"
    PLYWOOD = "plywood"
    MATTE = "matte"
    GLOSS = "gloss"
    VENEER = "veneer"


class Color(str, Enum):
    """Colour finishes offered by the configurator."""

    WHITE = "white"
    BLACK = "black"
    GREY = "grey"
    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    OAK = "oak"
    WALNUT = "walnut"
    BEIGE = "beige"
    NAVY = "navy"
    BURGUNDY = "burgundy"
    SAGE = "sage"
    PINK = "pink"


class LightingType(str, Enum):
    """Integrated lighting options for cabinets."""

    NONE = "none"
    AMBIENT = "ambient"
    SHELF = "shelf"
    BOTH = "both"

    @property
    def has_ambient(self) -> bool:
        return self in (LightingType.AMBIENT, LightingType.BOTH)

    @property
    def has_shelf(self) -> bool:
        return self in (LightingType.SHELF, LightingType.BOTH)
