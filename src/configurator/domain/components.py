"""Structural and front components emitted by the assembler.

Components are value objects. Every assembler run builds a fresh list and
the previous one is discarded; nothing here is mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal

from .value_objects import (
    Color,
    ComponentType,
    Dimensions,
    LegStyle,
    Material,
    MaterialSelection,
    Position3D,
    TopShape,
)


@dataclass(frozen=True)
class ProductComponent:
    """Base component.

    Attributes:
        id: Identifier, stable for identical inputs (e.g. "divider-r1-2").
        position: Centre of the component in the product frame.
        dimensions: Extent along x (width), y (height) and z (depth).
        material: Board material.
        color: Colour finish.
        visible: Whether the renderer should draw the component.
    """

    component_type: ClassVar[ComponentType]

    id: str
    position: Position3D
    dimensions: Dimensions
    material: Material
    color: Color
    visible: bool = True

    @property
    def type(self) -> ComponentType:
        """Type tag of the component."""
        return self.component_type

    @property
    def material_key(self) -> tuple[Material, Color]:
        """Key used by material grouping."""
        return (self.material, self.color)


@dataclass(frozen=True)
class FramePanel(ProductComponent):
    """Outer carcass panel of a cabinet."""

    component_type: ClassVar[ComponentType] = ComponentType.FRAME

    role: Literal["left", "right", "top", "bottom"] = "left"


@dataclass(frozen=True)
class BackPanel(ProductComponent):
    """Thin panel closing the back of a cabinet."""

    component_type: ClassVar[ComponentType] = ComponentType.BACK


@dataclass(frozen=True)
class BasePart(ProductComponent):
    """Foot or plinth a cabinet stands on."""

    component_type: ClassVar[ComponentType] = ComponentType.BASE

    role: Literal["foot", "plinth"] = "foot"


@dataclass(frozen=True)
class Divider(ProductComponent):
    """Vertical panel separating compartments.

    ``row`` is None for dividers that run the full carcass height.
    """

    component_type: ClassVar[ComponentType] = ComponentType.DIVIDER

    row: int | None = 0
    index: int = 0


@dataclass(frozen=True)
class Shelf(ProductComponent):
    """Horizontal panel bounding a row.

    ``column`` is set only for shelf segments that span a single column.
    """

    component_type: ClassVar[ComponentType] = ComponentType.SHELF

    boundary: int = 1
    column: int | None = None


@dataclass(frozen=True)
class Leg(ProductComponent):
    """Table or console leg."""

    component_type: ClassVar[ComponentType] = ComponentType.LEG

    style: LegStyle = LegStyle.STRAIGHT
    diameter: float | None = None


@dataclass(frozen=True)
class Tabletop(ProductComponent):
    """Top of a table or console."""

    component_type: ClassVar[ComponentType] = ComponentType.TABLETOP

    shape: TopShape = TopShape.RECTANGULAR
    thickness: float = 3.0


@dataclass(frozen=True)
class Brace(ProductComponent):
    """Apron or stretcher added when a span is too long.

    ``rotation`` is the angle in degrees about the vertical axis.
    """

    component_type: ClassVar[ComponentType] = ComponentType.BRACE

    rotation: float = 0.0


@dataclass(frozen=True)
class Door(ProductComponent):
    """Hinged door covering one compartment."""

    component_type: ClassVar[ComponentType] = ComponentType.DOOR

    hinge_position: Literal["left", "right"] = "left"
    open_angle: float = 110.0
    compartment_id: str | None = None


@dataclass(frozen=True)
class Drawer(ProductComponent):
    """Drawer filling one compartment.

    ``extension`` is how far the drawer pulls out.
    """

    component_type: ClassVar[ComponentType] = ComponentType.DRAWER

    extension: float = 0.0
    handle_type: str = "bar"
    handle_position: Position3D | None = None
    compartment_id: str | None = None


@dataclass(frozen=True)
class Accessory(ProductComponent):
    """Light, cable opening, hanger or hook."""

    component_type: ClassVar[ComponentType] = ComponentType.ACCESSORY

    accessory_type: Literal["light", "cable_opening", "hanger", "hook"] = "light"
    compartment_id: str | None = None


def finish(selection: MaterialSelection) -> dict[str, Material | Color]:
    """Keyword arguments that apply a material selection to a component."""
    return {"material": selection.material, "color": selection.color}
