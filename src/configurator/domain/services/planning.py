"""Cabinet geometry and the position sets derived from a style.

The validator and the layout pipeline both plan a cabinet the same way, so
the span and drawer checks see exactly the layout that will be assembled.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..configuration import LayoutOptions
from ..product_types import CabinetProductType
from ..value_objects import Dimensions, Position3D, RowHeight
from .row_heights import offset_row_positions, resolve_positions
from .styles import StyleDefinition, compute_divider_positions, dividers_for_row

__all__ = [
    "CabinetGeometry",
    "CabinetPlan",
    "column_bounds",
    "plan_cabinet",
]


@dataclass(frozen=True)
class CabinetGeometry:
    """Derived carcass measurements for one cabinet.

    The carcass stands on its base, so its bottom is at ``base_height`` and
    its top at the overall height.
    """

    width: float
    height: float
    depth: float
    panel_thickness: float
    back_thickness: float
    has_back_panel: bool
    base_height: float

    @classmethod
    def of(
        cls, product_type: CabinetProductType, dimensions: Dimensions, options: LayoutOptions
    ) -> CabinetGeometry:
        return cls(
            width=dimensions.width,
            height=dimensions.height,
            depth=dimensions.depth,
            panel_thickness=product_type.panel_thickness,
            back_thickness=product_type.back_thickness,
            has_back_panel=product_type.has_back_panel,
            base_height=product_type.base_height(options.base),
        )

    @property
    def carcass_height(self) -> float:
        return self.height - self.base_height

    @property
    def interior_left(self) -> float:
        """x of the left side panel's inner face."""
        return self.panel_thickness

    @property
    def interior_width(self) -> float:
        return self.width - 2 * self.panel_thickness

    @property
    def inner_depth(self) -> float:
        """Depth in front of the back panel."""
        if self.has_back_panel:
            return self.depth - self.back_thickness
        return self.depth


@dataclass(frozen=True)
class CabinetPlan:
    """Position sets for one cabinet.

    Attributes:
        geometry: Carcass measurements.
        dividers_per_row: Divider positions per row, local to the interior
            span, bottom row first.
        row_positions: Row boundaries measured from the carcass bottom.
        shifted_row_positions: Boundaries used by odd columns when the style
            staggers its shelves, otherwise None.
    """

    geometry: CabinetGeometry
    dividers_per_row: tuple[tuple[Position3D, ...], ...]
    row_positions: tuple[float, ...]
    shifted_row_positions: tuple[float, ...] | None = None

    @property
    def row_count(self) -> int:
        return len(self.row_positions) - 1

    def column_count(self, row: int) -> int:
        return len(self.dividers_per_row[row]) + 1


def plan_cabinet(
    product_type: CabinetProductType,
    dimensions: Dimensions,
    options: LayoutOptions,
    row_heights: Sequence[RowHeight],
    style: StyleDefinition,
) -> CabinetPlan:
    """Compute dividers per row and row boundaries for a cabinet."""
    geometry = CabinetGeometry.of(product_type, dimensions, options)
    row_positions = resolve_positions(row_heights)
    base = compute_divider_positions(
        style, geometry.interior_width, geometry.carcass_height, options.density
    )
    dividers_per_row = tuple(
        dividers_for_row(style, base, row, geometry.interior_width)
        for row in range(len(row_heights))
    )
    shifted = None
    if style.full_height_dividers:
        shifted = offset_row_positions(row_positions, style.shelf_offset_fraction)
    return CabinetPlan(
        geometry=geometry,
        dividers_per_row=dividers_per_row,
        row_positions=row_positions,
        shifted_row_positions=shifted,
    )


def column_bounds(
    dividers: Sequence[Position3D],
    interior_left: float,
    interior_width: float,
    panel_thickness: float,
) -> list[tuple[float, float]]:
    """Clear x range of every column between the side panels and dividers."""
    half = panel_thickness / 2
    bounds: list[tuple[float, float]] = []
    left = interior_left
    for divider in dividers:
        centre = interior_left + divider.x
        bounds.append((left, centre - half))
        left = centre + half
    bounds.append((left, interior_left + interior_width))
    return bounds
