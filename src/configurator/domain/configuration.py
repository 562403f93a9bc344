"""Configuration requests and validated configurations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .value_objects import (
    BaseType,
    Color,
    CompartmentType,
    Density,
    Dimensions,
    IncrementPolicy,
    LegPosition,
    LegStyle,
    LightingType,
    Material,
    MaterialSelection,
    RowHeight,
    StyleName,
    TopShape,
)

if TYPE_CHECKING:
    from .product_types import ProductType


@dataclass(frozen=True)
class DimensionRequest:
    """Overall size as requested by the caller, before validation.

    Values are raw numbers in cm and may be out of range, zero or negative;
    the validator turns them into ``Dimensions`` or reports violations.
    """

    width: float
    height: float
    depth: float

    @classmethod
    def of(cls, dimensions: Dimensions) -> DimensionRequest:
        return cls(dimensions.width, dimensions.height, dimensions.depth)

    def axis(self, name: str) -> float:
        return float(getattr(self, name))


@dataclass(frozen=True)
class PartMaterials:
    """Material and colour per part role."""

    body: MaterialSelection = field(default_factory=MaterialSelection)
    back: MaterialSelection = field(
        default_factory=lambda: MaterialSelection(Material.PLYWOOD, Color.WHITE)
    )
    fronts: MaterialSelection = field(default_factory=MaterialSelection)
    legs: MaterialSelection = field(
        default_factory=lambda: MaterialSelection(Material.WOOD, Color.WALNUT)
    )
    top: MaterialSelection = field(default_factory=MaterialSelection)


@dataclass(frozen=True)
class LayoutOptions:
    """Everything a caller may request besides the overall dimensions.

    Options that do not apply to a product type must be left at their
    defaults (None for the optional ones); the validator reports any that
    are set for the wrong product type.

    Attributes:
        style: Divider style (cabinets and bookcases).
        density: Divider density level.
        row_heights: Per-row heights, bottom row first. None means the rows
            are derived from the height.
        base: What a cabinet stands on.
        leg_style: Leg style for tables and consoles.
        leg_position: Leg inset setting for tables and consoles.
        top_shape: Outline of a table top.
        top_thickness: Top thickness in cm; None means the product default.
        shelf_count: Number of shelves under a console top.
        compartments: Requested compartment types, bottom row first; cells
            that are not listed are open.
        materials: Material selection per part role.
        lighting: Integrated cabinet lighting.
        increment_policy: Reject or round dimensions that miss their step.
    """

    style: StyleName = StyleName.GRID
    density: Density = Density.MEDIUM
    row_heights: tuple[RowHeight, ...] | None = None
    base: BaseType = BaseType.NONE
    leg_style: LegStyle | None = None
    leg_position: LegPosition = LegPosition.STANDARD
    top_shape: TopShape = TopShape.RECTANGULAR
    top_thickness: float | None = None
    shelf_count: int = 0
    compartments: tuple[tuple[CompartmentType, ...], ...] | None = None
    materials: PartMaterials = field(default_factory=PartMaterials)
    lighting: LightingType = LightingType.NONE
    increment_policy: IncrementPolicy = IncrementPolicy.REJECT


@dataclass(frozen=True)
class ValidatedConfig:
    """A configuration that passed validation, possibly normalized.

    Built only by the validator. ``row_heights`` is always resolved (empty
    for product types without rows) and ``top_thickness`` always set for
    product types with a top.
    """

    product_type: ProductType
    dimensions: Dimensions
    options: LayoutOptions
    row_heights: tuple[RowHeight, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.row_heights)
