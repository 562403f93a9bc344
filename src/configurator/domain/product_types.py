"""Product types and their manufacturing constraints.

Each product type is a tagged variant (cabinet, table, console) carrying its
own constraint block. Product types are immutable and owned by a
``ProductTypeRegistry`` that is built once and injected where needed.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .value_objects import (
    BaseType,
    Dimensions,
    LegStyle,
    ProductKind,
    RowSize,
    StyleName,
    TopShape,
)

AXES: tuple[str, ...] = ("width", "height", "depth")


@dataclass(frozen=True)
class ProductConstraints:
    """Dimension limits shared by every product type.

    Attributes:
        min_dimensions: Smallest allowed size per axis.
        max_dimensions: Largest allowed size per axis.
        increments: Step per axis, counted from the minimum.
    """

    min_dimensions: Dimensions
    max_dimensions: Dimensions
    increments: Dimensions

    def __post_init__(self) -> None:
        for axis in AXES:
            if self.min_dimensions.axis(axis) > self.max_dimensions.axis(axis):
                raise ValueError(f"min {axis} exceeds max {axis}")

    def allowed_values(self, axis: str) -> Iterator[float]:
        """Yield every value on the increment grid for an axis."""
        low = self.min_dimensions.axis(axis)
        high = self.max_dimensions.axis(axis)
        step = self.increments.axis(axis)
        count = int(round((high - low) / step))
        for i in range(count + 1):
            value = round(low + i * step, 6)
            if value <= high + 1e-9:
                yield value


@dataclass(frozen=True)
class CabinetProductType:
    """Cabinet or bookcase: a carcass divided into rows and columns."""

    name: str
    constraints: ProductConstraints
    kind: ProductKind = ProductKind.CABINET
    panel_thickness: float = 1.8
    back_thickness: float = 0.4
    has_back_panel: bool = True
    max_rows: int = 12
    max_columns: int = 24
    min_row_height: float = 10.0
    max_unsupported_span: float = 80.0
    min_drawer_depth: float = 20.0
    available_styles: tuple[StyleName, ...] = tuple(StyleName)
    available_bases: tuple[BaseType, ...] = tuple(BaseType)
    row_size_options: tuple[RowSize, ...] = tuple(RowSize)
    default_row_size: RowSize = RowSize.MEDIUM
    foot_size: float = 4.0
    base_heights: Mapping[BaseType, float] = field(
        default_factory=lambda: MappingProxyType(
            {BaseType.NONE: 0.0, BaseType.FEET: 10.0, BaseType.PLINTH: 8.0}
        )
    )
    plinth_setback: float = 3.0

    def base_height(self, base: BaseType) -> float:
        """Height the given base adds under the carcass."""
        return self.base_heights[base]


@dataclass(frozen=True)
class TableProductType:
    """Table or desk: a top on legs."""

    name: str
    constraints: ProductConstraints
    kind: ProductKind = ProductKind.TABLE
    available_leg_styles: tuple[LegStyle, ...] = tuple(LegStyle)
    available_shapes: tuple[TopShape, ...] = tuple(TopShape)
    default_leg_style: LegStyle = LegStyle.STRAIGHT
    leg_size: float = 5.0
    pedestal_diameter: float = 14.0
    default_top_thickness: float = 3.0
    top_thickness_options: tuple[float, ...] = (2.0, 3.0, 4.0)
    max_unsupported_span: float = 150.0
    min_leg_distance: float = 40.0
    brace_height: float = 8.0
    brace_thickness: float = 2.0


@dataclass(frozen=True)
class ConsoleProductType:
    """Console: a narrow top on four legs with shelves underneath."""

    name: str
    constraints: ProductConstraints
    kind: ProductKind = ProductKind.CONSOLE
    available_leg_styles: tuple[LegStyle, ...] = (
        LegStyle.STRAIGHT,
        LegStyle.ANGLED,
        LegStyle.TAPERED,
        LegStyle.HAIRPIN,
    )
    default_leg_style: LegStyle = LegStyle.STRAIGHT
    leg_size: float = 4.0
    default_top_thickness: float = 2.5
    top_thickness_options: tuple[float, ...] = (2.0, 2.5, 3.0)
    max_shelves: int = 4
    shelf_thickness: float = 2.0
    max_unsupported_span: float = 120.0
    min_leg_distance: float = 30.0
    brace_height: float = 6.0
    brace_thickness: float = 2.0


ProductType = CabinetProductType | TableProductType | ConsoleProductType


class ProductTypeRegistry:
    """Immutable lookup of product types by name.

    Example:
        registry = default_product_types()
        cabinet = registry.get("cabinet")
    """

    def __init__(self, product_types: Iterable[ProductType]) -> None:
        entries: dict[str, ProductType] = {}
        for product_type in product_types:
            if product_type.name in entries:
                raise ValueError(
                    f"Product type '{product_type.name}' already registered"
                )
            entries[product_type.name] = product_type
        self._product_types: Mapping[str, ProductType] = MappingProxyType(entries)

    def get(self, name: str) -> ProductType:
        """Get a product type by name.

        Raises:
            KeyError: If no product type has the given name.
        """
        if name not in self._product_types:
            raise KeyError(f"Unknown product type: {name}")
        return self._product_types[name]

    def names(self) -> list[str]:
        """List all registered names, sorted."""
        return sorted(self._product_types.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._product_types

    def __iter__(self) -> Iterator[ProductType]:
        return iter(self._product_types.values())

    def __len__(self) -> int:
        return len(self._product_types)


def default_product_types() -> ProductTypeRegistry:
    """Build the registry of product types offered by the configurator."""
    return ProductTypeRegistry(
        [
            CabinetProductType(
                name=ProductKind.CABINET.value,
                constraints=ProductConstraints(
                    min_dimensions=Dimensions(30.0, 25.0, 24.0),
                    max_dimensions=Dimensions(450.0, 300.0, 40.0),
                    increments=Dimensions(1.0, 5.0, 8.0),
                ),
            ),
            CabinetProductType(
                name=ProductKind.BOOKCASE.value,
                kind=ProductKind.BOOKCASE,
                constraints=ProductConstraints(
                    min_dimensions=Dimensions(30.0, 25.0, 24.0),
                    max_dimensions=Dimensions(300.0, 300.0, 32.0),
                    increments=Dimensions(1.0, 5.0, 8.0),
                ),
                available_styles=(
                    StyleName.GRID,
                    StyleName.ASYMMETRIC,
                    StyleName.STAGGERED,
                    StyleName.MINIMAL,
                    StyleName.GRADIENT,
                ),
                available_bases=(BaseType.NONE, BaseType.PLINTH),
            ),
            TableProductType(
                name=ProductKind.TABLE.value,
                constraints=ProductConstraints(
                    min_dimensions=Dimensions(60.0, 40.0, 60.0),
                    max_dimensions=Dimensions(300.0, 110.0, 200.0),
                    increments=Dimensions(1.0, 1.0, 1.0),
                ),
            ),
            TableProductType(
                name=ProductKind.DESK.value,
                kind=ProductKind.DESK,
                constraints=ProductConstraints(
                    min_dimensions=Dimensions(80.0, 60.0, 50.0),
                    max_dimensions=Dimensions(240.0, 80.0, 100.0),
                    increments=Dimensions(1.0, 1.0, 1.0),
                ),
                available_leg_styles=(
                    LegStyle.STRAIGHT,
                    LegStyle.ANGLED,
                    LegStyle.TAPERED,
                    LegStyle.HAIRPIN,
                ),
                available_shapes=(TopShape.RECTANGULAR,),
            ),
            ConsoleProductType(
                name=ProductKind.CONSOLE.value,
                constraints=ProductConstraints(
                    min_dimensions=Dimensions(60.0, 60.0, 25.0),
                    max_dimensions=Dimensions(200.0, 100.0, 50.0),
                    increments=Dimensions(1.0, 1.0, 1.0),
                ),
            ),
        ]
    )
