"""Derived entities: compartments, material groups and the configuration aggregate."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any

from .components import ProductComponent
from .configuration import LayoutOptions
from .value_objects import (
    Color,
    CompartmentType,
    Dimensions,
    Material,
    Position2D,
    Position3D,
)


@dataclass(frozen=True)
class Compartment:
    """A storage cell bounded by dividers and shelves.

    Bounds are always derived from the enclosing divider and shelf
    positions.

    Attributes:
        id: Identifier of the form "compartment-r{row}-c{column}".
        row: Row index, bottom row is 0.
        column: Column index within the row, leftmost is 0.
        compartment_type: Open, door or drawer.
        material: Backing material.
        color: Backing colour.
        position: Centre of the clear opening.
        dimensions: Clear opening size.
        back_panel: Whether a back panel closes the cell.
        bracing_support: Whether the cell's span needs extra support.
        component_ids: Ids of the components the cell encloses.
    """

    id: str
    row: int
    column: int
    compartment_type: CompartmentType
    material: Material
    color: Color
    position: Position3D
    dimensions: Dimensions
    back_panel: bool = True
    bracing_support: bool = False
    component_ids: tuple[str, ...] = ()

    @property
    def grid_position(self) -> Position2D:
        """Grid position as (column, row)."""
        return Position2D(x=self.column, y=self.row)

    @property
    def bounds(self) -> tuple[Position3D, Position3D]:
        """Lower and upper corners of the opening."""
        half = Position3D(
            self.dimensions.width / 2,
            self.dimensions.height / 2,
            self.dimensions.depth / 2,
        )
        return (
            self.position.offset(-half.x, -half.y, -half.z),
            self.position.offset(half.x, half.y, half.z),
        )


@dataclass(frozen=True)
class MaterialGroup:
    """Components sharing a material and colour."""

    id: str
    name: str
    material: Material
    color: Color
    component_ids: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.component_ids)


@dataclass(frozen=True)
class LayoutResult:
    """Everything derived by one pipeline run."""

    components: tuple[ProductComponent, ...]
    compartments: tuple[Compartment, ...]
    material_groups: tuple[MaterialGroup, ...]


@dataclass(frozen=True)
class ProductConfiguration:
    """Aggregate root owned by the caller.

    The engine never holds one; it computes a fresh layout from its inputs
    and the caller swaps it in with ``with_layout``.
    """

    product_type: str
    dimensions: Dimensions
    options: LayoutOptions = field(default_factory=LayoutOptions)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    name: str = ""
    preset_id: str | None = None
    components: tuple[ProductComponent, ...] = ()
    compartments: tuple[Compartment, ...] = ()
    material_groups: tuple[MaterialGroup, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)

    def with_layout(self, layout: LayoutResult) -> ProductConfiguration:
        """Return a copy whose derived parts are replaced wholesale."""
        return replace(
            self,
            components=layout.components,
            compartments=layout.compartments,
            material_groups=layout.material_groups,
        )

    def with_inputs(
        self,
        dimensions: Dimensions | None = None,
        options: LayoutOptions | None = None,
    ) -> ProductConfiguration:
        """Return a copy with new inputs and the derived parts cleared."""
        return replace(
            self,
            dimensions=dimensions or self.dimensions,
            options=options or self.options,
            components=(),
            compartments=(),
            material_groups=(),
        )
