"""Component assembly for every product type.

``assemble`` is a pure function of its inputs: identical inputs give
identical component lists, ids included. Ids are derived from each
component's role and grid position.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from ..components import (
    Accessory,
    BackPanel,
    BasePart,
    Brace,
    Divider,
    Door,
    Drawer,
    FramePanel,
    Leg,
    ProductComponent,
    Shelf,
    Tabletop,
    finish,
)
from ..configuration import ValidatedConfig
from ..entities import Compartment
from ..errors import DomainError
from ..product_types import (
    AXES,
    CabinetProductType,
    ConsoleProductType,
    ProductType,
    TableProductType,
)
from ..value_objects import (
    BaseType,
    BoundingBox,
    CompartmentType,
    Dimensions,
    LegStyle,
    Position3D,
    TopShape,
)
from .planning import CabinetGeometry, column_bounds

__all__ = [
    "FRONT_THICKNESS",
    "assemble",
    "assemble_compartment_parts",
    "bounding_box",
    "foot_positions",
]

logger = logging.getLogger(__name__)

# Door and drawer front thickness in cm
FRONT_THICKNESS = 1.8

# Light strip cross-section in cm
LIGHT_HEIGHT = 1.0
LIGHT_DEPTH = 2.0
LIGHT_SETBACK = 3.0

# Angles of the four legs under a round top
ROUND_LEG_ANGLES = (45.0, 135.0, 225.0, 315.0)


def _r(value: float) -> float:
    return round(value, 6)


def _pos(x: float, y: float, z: float) -> Position3D:
    return Position3D(_r(x), _r(y), _r(z))


def _dims(width: float, height: float, depth: float) -> Dimensions:
    return Dimensions(_r(width), _r(height), _r(depth))


def bounding_box(product_type: ProductType, config: ValidatedConfig) -> BoundingBox:
    """Box every component of the product must fit in.

    Cabinets span ``[0, width] x [0, height] x [0, depth]``. Tables and
    consoles are centred on the underside of the top, with the legs below
    and the top above.
    """
    dims = config.dimensions
    match product_type:
        case CabinetProductType():
            return BoundingBox(0.0, 0.0, 0.0, dims.width, dims.height, dims.depth)
        case TableProductType() | ConsoleProductType():
            thickness = config.options.top_thickness or product_type.default_top_thickness
            return BoundingBox(
                -dims.width / 2,
                -dims.height,
                -dims.depth / 2,
                dims.width / 2,
                thickness,
                dims.depth / 2,
            )
    raise DomainError(f"Unsupported product type: {product_type!r}")


def assemble(
    product_type: ProductType,
    config: ValidatedConfig,
    divider_positions: Sequence[Sequence[Position3D]] = (),
    row_positions: Sequence[float] = (),
    shifted_row_positions: Sequence[float] | None = None,
) -> tuple[ProductComponent, ...]:
    """Build the structural components of a validated configuration.

    Args:
        product_type: The product type the configuration was validated for.
        config: A configuration returned by the validator.
        divider_positions: Cabinet divider positions per row, local to the
            interior span. Ignored for tables and consoles.
        row_positions: Cabinet row boundaries from the carcass bottom.
            Ignored for tables and consoles.
        shifted_row_positions: Boundaries for odd columns of a staggered
            cabinet. When given, dividers run the full carcass height and
            shelves are cut per column.

    Returns:
        The components, in a fixed order.

    Raises:
        DomainError: If the configuration is out of range or the position
            sets do not match it.
    """
    _require_validated(product_type, config)
    match product_type:
        case CabinetProductType():
            components = _assemble_cabinet(
                product_type, config, divider_positions, row_positions, shifted_row_positions
            )
        case TableProductType():
            components = _assemble_table(product_type, config)
        case ConsoleProductType():
            components = _assemble_console(product_type, config)
        case _:
            raise DomainError(f"Unsupported product type: {product_type!r}")

    box = bounding_box(product_type, config)
    for component in components:
        if not box.contains(component.position):
            raise DomainError(
                f"Component {component.id} at {component.position} lies outside the product"
            )
    logger.debug(f"Assembled {len(components)} components for {product_type.name}")
    return components


def _require_validated(product_type: ProductType, config: ValidatedConfig) -> None:
    if config.product_type is not product_type:
        raise DomainError(
            f"Configuration was validated for '{config.product_type.name}', "
            f"not '{product_type.name}'"
        )
    constraints = product_type.constraints
    for axis in AXES:
        value = config.dimensions.axis(axis)
        low = constraints.min_dimensions.axis(axis)
        high = constraints.max_dimensions.axis(axis)
        if value < low - 1e-9 or value > high + 1e-9:
            raise DomainError(
                f"{axis} {value:g} is outside [{low:g}, {high:g}]; validate before assembling"
            )


# =============================================================================
# Cabinets
# =============================================================================


def _assemble_cabinet(
    product_type: CabinetProductType,
    config: ValidatedConfig,
    divider_positions: Sequence[Sequence[Position3D]],
    row_positions: Sequence[float],
    shifted_row_positions: Sequence[float] | None,
) -> tuple[ProductComponent, ...]:
    options = config.options
    geometry = CabinetGeometry.of(product_type, config.dimensions, options)
    row_count = config.row_count
    if len(row_positions) != row_count + 1:
        raise DomainError(
            f"Expected {row_count + 1} row positions for {row_count} rows, "
            f"got {len(row_positions)}"
        )
    if len(divider_positions) != row_count:
        raise DomainError(
            f"Expected divider positions for {row_count} rows, got {len(divider_positions)}"
        )
    if abs(row_positions[0]) > 1e-6 or abs(row_positions[-1] - geometry.carcass_height) > 1e-6:
        raise DomainError(
            f"Row positions must run from 0 to the carcass height "
            f"{geometry.carcass_height:g}, got {list(row_positions)}"
        )

    body = finish(options.materials.body)
    components: list[ProductComponent] = []
    components.extend(_frame(geometry, body))
    if geometry.has_back_panel:
        components.append(_back_panel(geometry, finish(options.materials.back)))

    bottom_dividers = divider_positions[0]
    if shifted_row_positions is None:
        components.extend(_shelves(geometry, row_positions, body))
        components.extend(_row_dividers(geometry, divider_positions, row_positions, body))
    else:
        components.extend(
            _column_shelves(
                geometry, bottom_dividers, row_positions, shifted_row_positions, body
            )
        )
        components.extend(_full_height_dividers(geometry, bottom_dividers, body))

    if options.base is BaseType.FEET:
        components.extend(
            _feet(product_type, geometry, bottom_dividers, finish(options.materials.legs))
        )
    elif options.base is BaseType.PLINTH:
        components.append(_plinth(product_type, geometry, body))

    if options.lighting.has_ambient:
        components.append(
            Accessory(
                id="light-ambient",
                position=_pos(
                    geometry.width / 2,
                    geometry.height - geometry.panel_thickness - LIGHT_HEIGHT / 2,
                    LIGHT_SETBACK,
                ),
                dimensions=_dims(geometry.interior_width, LIGHT_HEIGHT, LIGHT_DEPTH),
                accessory_type="light",
                **finish(options.materials.body),
            )
        )
    return tuple(components)


def _frame(geometry: CabinetGeometry, body: dict) -> list[ProductComponent]:
    t = geometry.panel_thickness
    mid_y = geometry.base_height + geometry.carcass_height / 2
    side = _dims(t, geometry.carcass_height, geometry.depth)
    panel = _dims(geometry.interior_width, t, geometry.depth)
    return [
        FramePanel(
            id="frame-left",
            role="left",
            position=_pos(t / 2, mid_y, geometry.depth / 2),
            dimensions=side,
            **body,
        ),
        FramePanel(
            id="frame-right",
            role="right",
            position=_pos(geometry.width - t / 2, mid_y, geometry.depth / 2),
            dimensions=side,
            **body,
        ),
        FramePanel(
            id="frame-top",
            role="top",
            position=_pos(geometry.width / 2, geometry.height - t / 2, geometry.depth / 2),
            dimensions=panel,
            **body,
        ),
        FramePanel(
            id="frame-bottom",
            role="bottom",
            position=_pos(geometry.width / 2, geometry.base_height + t / 2, geometry.depth / 2),
            dimensions=panel,
            **body,
        ),
    ]


def _back_panel(geometry: CabinetGeometry, back: dict) -> BackPanel:
    t = geometry.panel_thickness
    return BackPanel(
        id="back",
        position=_pos(
            geometry.width / 2,
            geometry.base_height + geometry.carcass_height / 2,
            geometry.depth - geometry.back_thickness / 2,
        ),
        dimensions=_dims(
            geometry.interior_width, geometry.carcass_height - 2 * t, geometry.back_thickness
        ),
        **back,
    )


def _shelves(
    geometry: CabinetGeometry, row_positions: Sequence[float], body: dict
) -> list[ProductComponent]:
    shelves: list[ProductComponent] = []
    for boundary in range(1, len(row_positions) - 1):
        shelves.append(
            Shelf(
                id=f"shelf-{boundary}",
                boundary=boundary,
                position=_pos(
                    geometry.width / 2,
                    geometry.base_height + row_positions[boundary],
                    geometry.inner_depth / 2,
                ),
                dimensions=_dims(
                    geometry.interior_width, geometry.panel_thickness, geometry.inner_depth
                ),
                **body,
            )
        )
    return shelves


def _column_shelves(
    geometry: CabinetGeometry,
    dividers: Sequence[Position3D],
    row_positions: Sequence[float],
    shifted_row_positions: Sequence[float],
    body: dict,
) -> list[ProductComponent]:
    shelves: list[ProductComponent] = []
    bounds = column_bounds(
        dividers, geometry.interior_left, geometry.interior_width, geometry.panel_thickness
    )
    for column, (x_lo, x_hi) in enumerate(bounds):
        positions = shifted_row_positions if column % 2 == 1 else row_positions
        for boundary in range(1, len(positions) - 1):
            shelves.append(
                Shelf(
                    id=f"shelf-{boundary}-c{column}",
                    boundary=boundary,
                    column=column,
                    position=_pos(
                        (x_lo + x_hi) / 2,
                        geometry.base_height + positions[boundary],
                        geometry.inner_depth / 2,
                    ),
                    dimensions=_dims(
                        x_hi - x_lo, geometry.panel_thickness, geometry.inner_depth
                    ),
                    **body,
                )
            )
    return shelves


def _row_dividers(
    geometry: CabinetGeometry,
    divider_positions: Sequence[Sequence[Position3D]],
    row_positions: Sequence[float],
    body: dict,
) -> list[ProductComponent]:
    t = geometry.panel_thickness
    last = len(divider_positions) - 1
    dividers: list[ProductComponent] = []
    for row, positions in enumerate(divider_positions):
        y_lo = geometry.base_height + row_positions[row] + (t if row == 0 else t / 2)
        y_hi = geometry.base_height + row_positions[row + 1] - (t if row == last else t / 2)
        for index, divider in enumerate(positions):
            dividers.append(
                Divider(
                    id=f"divider-r{row}-{index}",
                    row=row,
                    index=index,
                    position=_pos(
                        geometry.interior_left + divider.x,
                        (y_lo + y_hi) / 2,
                        geometry.inner_depth / 2,
                    ),
                    dimensions=_dims(t, y_hi - y_lo, geometry.inner_depth),
                    **body,
                )
            )
    return dividers


def _full_height_dividers(
    geometry: CabinetGeometry, positions: Sequence[Position3D], body: dict
) -> list[ProductComponent]:
    t = geometry.panel_thickness
    clear_height = geometry.carcass_height - 2 * t
    return [
        Divider(
            id=f"divider-{index}",
            row=None,
            index=index,
            position=_pos(
                geometry.interior_left + divider.x,
                geometry.base_height + geometry.carcass_height / 2,
                geometry.inner_depth / 2,
            ),
            dimensions=_dims(t, clear_height, geometry.inner_depth),
            **body,
        )
        for index, divider in enumerate(positions)
    ]


def foot_positions(
    width: float,
    foot_size: float,
    divider_xs: Sequence[float],
    max_unsupported_span: float,
) -> tuple[float, ...]:
    """x positions of the feet along the cabinet's width.

    Feet always sit at both ends. When the span between the end feet is
    longer than the maximum unsupported span, a foot is added under every
    bottom-row divider as well.
    """
    ends = (foot_size / 2, width - foot_size / 2)
    if ends[1] - ends[0] <= max_unsupported_span:
        return tuple(_r(x) for x in ends)
    return tuple(_r(x) for x in sorted({ends[0], *divider_xs, ends[1]}))


def _feet(
    product_type: CabinetProductType,
    geometry: CabinetGeometry,
    bottom_dividers: Sequence[Position3D],
    legs: dict,
) -> list[ProductComponent]:
    size = product_type.foot_size
    xs = foot_positions(
        geometry.width,
        size,
        [geometry.interior_left + d.x for d in bottom_dividers],
        product_type.max_unsupported_span,
    )
    feet: list[ProductComponent] = []
    for z in (size / 2, geometry.depth - size / 2):
        for x in xs:
            feet.append(
                BasePart(
                    id=f"foot-{len(feet)}",
                    role="foot",
                    position=_pos(x, geometry.base_height / 2, z),
                    dimensions=_dims(size, geometry.base_height, size),
                    **legs,
                )
            )
    return feet


def _plinth(
    product_type: CabinetProductType, geometry: CabinetGeometry, body: dict
) -> BasePart:
    t = geometry.panel_thickness
    return BasePart(
        id="plinth",
        role="plinth",
        position=_pos(
            geometry.width / 2, geometry.base_height / 2, product_type.plinth_setback + t / 2
        ),
        dimensions=_dims(geometry.width, geometry.base_height, t),
        **body,
    )


def assemble_compartment_parts(
    compartments: Sequence[Compartment], config: ValidatedConfig
) -> tuple[tuple[ProductComponent, ...], tuple[Compartment, ...]]:
    """Build doors, drawers and shelf lights for the compartments.

    Returns:
        The new components, and the compartments rebuilt with the ids of
        the components each one encloses.
    """
    options = config.options
    fronts = finish(options.materials.fronts)
    components: list[ProductComponent] = []
    updated: list[Compartment] = []

    for cell in compartments:
        enclosed: list[ProductComponent] = []
        x, y, _ = cell.position.x, cell.position.y, cell.position.z
        width, height, depth = cell.dimensions.width, cell.dimensions.height, cell.dimensions.depth
        suffix = f"r{cell.row}-c{cell.column}"

        if cell.compartment_type.is_door:
            enclosed.append(
                Door(
                    id=f"door-{suffix}",
                    position=_pos(x, y, FRONT_THICKNESS / 2),
                    dimensions=_dims(width, height, FRONT_THICKNESS),
                    hinge_position=(
                        "left" if cell.compartment_type is CompartmentType.DOOR_LEFT else "right"
                    ),
                    compartment_id=cell.id,
                    **fronts,
                )
            )
        elif cell.compartment_type is CompartmentType.DRAWER:
            enclosed.append(
                Drawer(
                    id=f"drawer-{suffix}",
                    position=cell.position,
                    dimensions=cell.dimensions,
                    extension=depth,
                    handle_position=_pos(x, y + height / 4, 0.0),
                    compartment_id=cell.id,
                    **fronts,
                )
            )

        if options.lighting.has_shelf:
            enclosed.append(
                Accessory(
                    id=f"light-{suffix}",
                    position=_pos(x, y + height / 2 - LIGHT_HEIGHT / 2, LIGHT_SETBACK),
                    dimensions=_dims(max(width - 2.0, width / 2), LIGHT_HEIGHT, LIGHT_DEPTH),
                    accessory_type="light",
                    compartment_id=cell.id,
                    **finish(options.materials.body),
                )
            )

        components.extend(enclosed)
        updated.append(
            Compartment(
                id=cell.id,
                row=cell.row,
                column=cell.column,
                compartment_type=cell.compartment_type,
                material=cell.material,
                color=cell.color,
                position=cell.position,
                dimensions=cell.dimensions,
                back_panel=cell.back_panel,
                bracing_support=cell.bracing_support,
                component_ids=tuple(c.id for c in enclosed),
            )
        )
    return tuple(components), tuple(updated)


# =============================================================================
# Tables and consoles
# =============================================================================


def _tabletop(
    config: ValidatedConfig, thickness: float, shape: TopShape
) -> Tabletop:
    dims = config.dimensions
    return Tabletop(
        id="tabletop",
        shape=shape,
        thickness=thickness,
        position=_pos(0.0, thickness / 2, 0.0),
        dimensions=_dims(dims.width, thickness, dims.depth),
        **finish(config.options.materials.top),
    )


def _corner_legs(
    config: ValidatedConfig, leg_size: float, style: LegStyle
) -> list[ProductComponent]:
    dims = config.dimensions
    inset = config.options.leg_position.inset
    half_x = dims.width / 2 - inset
    half_z = dims.depth / 2 - inset
    corners = ((-half_x, -half_z), (half_x, -half_z), (half_x, half_z), (-half_x, half_z))
    return [
        Leg(
            id=f"leg-{i}",
            style=style,
            position=_pos(x, -dims.height / 2, z),
            dimensions=_dims(leg_size, dims.height, leg_size),
            **finish(config.options.materials.legs),
        )
        for i, (x, z) in enumerate(corners)
    ]


def _round_legs(
    config: ValidatedConfig, leg_size: float, style: LegStyle
) -> list[ProductComponent]:
    dims = config.dimensions
    radius = dims.width / 2 - config.options.leg_position.inset
    legs: list[ProductComponent] = []
    for i, angle in enumerate(ROUND_LEG_ANGLES):
        theta = math.radians(angle)
        legs.append(
            Leg(
                id=f"leg-{i}",
                style=style,
                position=_pos(radius * math.cos(theta), -dims.height / 2, radius * math.sin(theta)),
                dimensions=_dims(leg_size, dims.height, leg_size),
                **finish(config.options.materials.legs),
            )
        )
    return legs


def _side_braces(
    config: ValidatedConfig,
    leg_size: float,
    max_span: float,
    brace_height: float,
    brace_thickness: float,
) -> list[ProductComponent]:
    dims = config.dimensions
    inset = config.options.leg_position.inset
    span_x = dims.width - 2 * inset
    span_z = dims.depth - 2 * inset
    legs = finish(config.options.materials.legs)
    y = -brace_height / 2
    braces: list[ProductComponent] = []
    if span_x > max_span:
        for name, z in (("front", -(dims.depth / 2 - inset)), ("back", dims.depth / 2 - inset)):
            braces.append(
                Brace(
                    id=f"brace-{name}",
                    position=_pos(0.0, y, z),
                    dimensions=_dims(span_x - leg_size, brace_height, brace_thickness),
                    **legs,
                )
            )
    if span_z > max_span:
        for name, x in (("left", -(dims.width / 2 - inset)), ("right", dims.width / 2 - inset)):
            braces.append(
                Brace(
                    id=f"brace-{name}",
                    position=_pos(x, y, 0.0),
                    dimensions=_dims(brace_thickness, brace_height, span_z - leg_size),
                    **legs,
                )
            )
    return braces


def _cross_braces(
    config: ValidatedConfig,
    leg_size: float,
    max_span: float,
    brace_height: float,
    brace_thickness: float,
) -> list[ProductComponent]:
    span = config.dimensions.width - 2 * config.options.leg_position.inset
    if span <= max_span:
        return []
    return [
        Brace(
            id=f"brace-{i}",
            rotation=rotation,
            position=_pos(0.0, -brace_height / 2, 0.0),
            dimensions=_dims(span - leg_size, brace_height, brace_thickness),
            **finish(config.options.materials.legs),
        )
        for i, rotation in enumerate((45.0, 135.0))
    ]


def _assemble_table(
    product_type: TableProductType, config: ValidatedConfig
) -> tuple[ProductComponent, ...]:
    options = config.options
    thickness = options.top_thickness or product_type.default_top_thickness
    style = options.leg_style or product_type.default_leg_style
    dims = config.dimensions
    components: list[ProductComponent] = [_tabletop(config, thickness, options.top_shape)]

    if options.top_shape is TopShape.ROUND and style is LegStyle.PEDESTAL:
        components.append(
            Leg(
                id="leg-0",
                style=style,
                diameter=product_type.pedestal_diameter,
                position=_pos(0.0, -dims.height / 2, 0.0),
                dimensions=_dims(
                    product_type.pedestal_diameter, dims.height, product_type.pedestal_diameter
                ),
                **finish(options.materials.legs),
            )
        )
    elif options.top_shape is TopShape.ROUND:
        components.extend(_round_legs(config, product_type.leg_size, style))
        components.extend(
            _cross_braces(
                config,
                product_type.leg_size,
                product_type.max_unsupported_span,
                product_type.brace_height,
                product_type.brace_thickness,
            )
        )
    else:
        components.extend(_corner_legs(config, product_type.leg_size, style))
        components.extend(
            _side_braces(
                config,
                product_type.leg_size,
                product_type.max_unsupported_span,
                product_type.brace_height,
                product_type.brace_thickness,
            )
        )
    return tuple(components)


def _assemble_console(
    product_type: ConsoleProductType, config: ValidatedConfig
) -> tuple[ProductComponent, ...]:
    options = config.options
    dims = config.dimensions
    thickness = options.top_thickness or product_type.default_top_thickness
    style = options.leg_style or product_type.default_leg_style
    components: list[ProductComponent] = [
        _tabletop(config, thickness, TopShape.RECTANGULAR)
    ]
    components.extend(_corner_legs(config, product_type.leg_size, style))
    components.extend(
        _side_braces(
            config,
            product_type.leg_size,
            product_type.max_unsupported_span,
            product_type.brace_height,
            product_type.brace_thickness,
        )
    )

    inset = options.leg_position.inset
    shelf_width = dims.width - 2 * inset - product_type.leg_size
    shelf_depth = dims.depth - 2 * inset - product_type.leg_size
    count = options.shelf_count
    for k in range(1, count + 1):
        components.append(
            Shelf(
                id=f"shelf-{k}",
                boundary=k,
                position=_pos(0.0, -dims.height + k * dims.height / (count + 1), 0.0),
                dimensions=_dims(shelf_width, product_type.shelf_thickness, shelf_depth),
                **finish(options.materials.body),
            )
        )
    return tuple(components)
