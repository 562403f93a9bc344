"""Value objects for the configurator domain.

This module provides immutable data types used throughout the layout
engine. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Core geometry and materials
from ._core_geometry import (
    BoundingBox,
    Dimensions,
    MaterialSelection,
    Position2D,
    Position3D,
)

# Finish catalogue
from ._finishes import (
    Color,
    LightingType,
    Material,
)

# Layout selections
from ._layout import (
    ROW_SIZE_HEIGHTS,
    BaseType,
    CompartmentType,
    ComponentType,
    Density,
    GapSpacing,
    IncrementPolicy,
    LegPosition,
    LegStyle,
    ProductKind,
    RowHeight,
    RowSize,
    StyleName,
    TopShape,
)

__all__ = [
    "ROW_SIZE_HEIGHTS",
    "BaseType",
    "BoundingBox",
    "Color",
    "CompartmentType",
    "ComponentType",
    "Density",
    "Dimensions",
    "GapSpacing",
    "IncrementPolicy",
    "LegPosition",
    "LegStyle",
    "LightingType",
    "Material",
    "MaterialSelection",
    "Position2D",
    "Position3D",
    "ProductKind",
    "RowHeight",
    "RowSize",
    "StyleName",
    "TopShape",
]
