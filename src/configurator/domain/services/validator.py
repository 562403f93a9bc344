"""Dimension and constraint validation.

``validate`` is the only way to obtain a ``ValidatedConfig``. It never
raises for bad user input: every broken rule comes back as a
``ConstraintViolation`` and no partial configuration is returned.

Checks run in a fixed order:

1. range and increment of every dimension,
2. legality of the options for the product type,
3. cross-field rules on the row heights,
4. span rules,
5. compartment rules.

Steps 3 to 5 need a well-formed request, so they only run when steps 1 and 2
found nothing.
"""

from __future__ import annotations

import logging
import math

from ..configuration import DimensionRequest, LayoutOptions, ValidatedConfig
from ..errors import DomainError
from ..product_types import (
    AXES,
    CabinetProductType,
    ConsoleProductType,
    ProductConstraints,
    ProductType,
    TableProductType,
)
from ..results import ConstraintViolation, ValidationOutcome, field_path
from ..value_objects import (
    BaseType,
    Dimensions,
    IncrementPolicy,
    LegPosition,
    LegStyle,
    LightingType,
    RowHeight,
    RowSize,
    TopShape,
)
from .assembler import foot_positions
from .compartments import build_plan_compartments
from .planning import CabinetPlan, column_bounds, plan_cabinet
from .row_heights import derive_row_heights, row_height_value, total_height
from .styles import StyleDefinition, StyleRegistry, default_styles

__all__ = ["validate"]

logger = logging.getLogger(__name__)

TOLERANCE = 1e-6


def validate(
    product_type: ProductType,
    requested: DimensionRequest | Dimensions,
    options: LayoutOptions | None = None,
    styles: StyleRegistry | None = None,
) -> ValidationOutcome:
    """Validate a requested configuration for a product type.

    Args:
        product_type: The product type to validate against.
        requested: Requested width, height and depth in cm.
        options: Requested style, rows, legs and so on. Defaults apply when
            omitted.
        styles: Style registry used for the span checks. Defaults to
            ``default_styles()``.

    Returns:
        A successful outcome carrying a possibly normalized configuration
        (rounded dimensions, derived row heights, filled-in defaults), or a
        failed outcome listing every violation found.

    Example:
        outcome = validate(registry.get("cabinet"), DimensionRequest(120, 140, 32))
        if outcome.is_valid:
            layout = compute_layout(outcome.config)
    """
    options = options or LayoutOptions()
    styles = styles or default_styles()
    if isinstance(requested, Dimensions):
        requested = DimensionRequest.of(requested)

    values, violations = _check_dimensions(
        product_type.constraints, requested, options.increment_policy
    )
    violations.extend(_check_options(product_type, options, styles))
    if violations:
        return _reject(product_type, violations)

    dimensions = Dimensions(values["width"], values["height"], values["depth"])
    match product_type:
        case CabinetProductType():
            return _validate_cabinet(product_type, dimensions, options, styles)
        case TableProductType() | ConsoleProductType():
            return _validate_legged(product_type, dimensions, options)
    raise DomainError(f"Unsupported product type: {product_type!r}")


def _reject(
    product_type: ProductType, violations: list[ConstraintViolation]
) -> ValidationOutcome:
    logger.debug(
        f"Rejected {product_type.name} configuration: "
        f"{', '.join(v.field for v in violations)}"
    )
    return ValidationOutcome.fail(violations)


# =============================================================================
# Dimensions
# =============================================================================


def _check_dimensions(
    constraints: ProductConstraints,
    requested: DimensionRequest,
    policy: IncrementPolicy,
) -> tuple[dict[str, float], list[ConstraintViolation]]:
    values: dict[str, float] = {}
    violations: list[ConstraintViolation] = []
    for axis in AXES:
        value = requested.axis(axis)
        low = constraints.min_dimensions.axis(axis)
        high = constraints.max_dimensions.axis(axis)
        step = constraints.increments.axis(axis)

        if math.isnan(value) or value < low - TOLERANCE:
            violations.append(
                ConstraintViolation(
                    axis, "min", low, value, f"{value:g} is below the minimum {low:g}"
                )
            )
            continue
        if value > high + TOLERANCE:
            violations.append(
                ConstraintViolation(
                    axis, "max", high, value, f"{value:g} exceeds the maximum {high:g}"
                )
            )
            continue

        steps = (value - low) / step
        if abs(steps - round(steps)) > TOLERANCE:
            if policy is IncrementPolicy.REJECT:
                violations.append(
                    ConstraintViolation(
                        axis,
                        "increment",
                        step,
                        value,
                        f"{value:g} is not on the {step:g} cm grid starting at {low:g}",
                    )
                )
                continue
            snapped = round(low + round(steps) * step, 6)
            if snapped > high + TOLERANCE:
                violations.append(
                    ConstraintViolation(
                        axis,
                        "max",
                        high,
                        snapped,
                        f"{value:g} rounds to {snapped:g}, above the maximum {high:g}",
                    )
                )
                continue
            logger.debug(f"Rounded {axis} {value:g} to {snapped:g}")
            value = snapped
        values[axis] = float(value)
    return values, violations


# =============================================================================
# Options
# =============================================================================


def _not_applicable(field: str, value: object, kind: str) -> ConstraintViolation:
    return ConstraintViolation(
        field, "not_applicable", None, value, f"{field} does not apply to a {kind}"
    )


def _check_options(
    product_type: ProductType, options: LayoutOptions, styles: StyleRegistry
) -> list[ConstraintViolation]:
    match product_type:
        case CabinetProductType():
            return _check_cabinet_options(product_type, options, styles)
        case TableProductType():
            return _check_table_options(product_type, options)
        case ConsoleProductType():
            return _check_console_options(product_type, options)
    raise DomainError(f"Unsupported product type: {product_type!r}")


def _check_cabinet_options(
    product_type: CabinetProductType, options: LayoutOptions, styles: StyleRegistry
) -> list[ConstraintViolation]:
    violations: list[ConstraintViolation] = []
    kind = product_type.name
    if options.style not in product_type.available_styles or options.style not in styles:
        violations.append(
            ConstraintViolation(
                "style",
                "allowed",
                [s.value for s in product_type.available_styles],
                options.style.value,
                f"style '{options.style.value}' is not offered for a {kind}",
            )
        )
    if options.base not in product_type.available_bases:
        violations.append(
            ConstraintViolation(
                "base",
                "allowed",
                [b.value for b in product_type.available_bases],
                options.base.value,
                f"base '{options.base.value}' is not offered for a {kind}",
            )
        )
    if options.row_heights is not None:
        if not options.row_heights:
            violations.append(
                ConstraintViolation(
                    "row_heights", "min_rows", 1, 0, "at least one row is required"
                )
            )
        sizes = [size.value for size in RowSize]
        for i, row in enumerate(options.row_heights):
            if isinstance(row, str):
                if row not in sizes:
                    violations.append(
                        ConstraintViolation(
                            field_path("row_heights", i),
                            "allowed",
                            sizes,
                            row,
                            f"'{row}' is not a row size",
                        )
                    )
            elif not float(row) > 0:
                violations.append(
                    ConstraintViolation(
                        field_path("row_heights", i),
                        "positive",
                        0,
                        row,
                        "row heights must be positive",
                    )
                )
    if options.leg_style is not None:
        violations.append(_not_applicable("leg_style", options.leg_style.value, kind))
    if options.leg_position is not LegPosition.STANDARD:
        violations.append(_not_applicable("leg_position", options.leg_position.value, kind))
    if options.top_shape is not TopShape.RECTANGULAR:
        violations.append(_not_applicable("top_shape", options.top_shape.value, kind))
    if options.top_thickness is not None:
        violations.append(_not_applicable("top_thickness", options.top_thickness, kind))
    if options.shelf_count:
        violations.append(_not_applicable("shelf_count", options.shelf_count, kind))
    return violations


def _check_leg_options(
    product_type: TableProductType | ConsoleProductType, options: LayoutOptions
) -> list[ConstraintViolation]:
    violations: list[ConstraintViolation] = []
    kind = product_type.name
    if (
        options.leg_style is not None
        and options.leg_style not in product_type.available_leg_styles
    ):
        violations.append(
            ConstraintViolation(
                "leg_style",
                "allowed",
                [s.value for s in product_type.available_leg_styles],
                options.leg_style.value,
                f"leg style '{options.leg_style.value}' is not offered for a {kind}",
            )
        )
    if (
        options.top_thickness is not None
        and options.top_thickness not in product_type.top_thickness_options
    ):
        violations.append(
            ConstraintViolation(
                "top_thickness",
                "allowed",
                list(product_type.top_thickness_options),
                options.top_thickness,
                f"top thickness must be one of "
                f"{', '.join(f'{t:g}' for t in product_type.top_thickness_options)} cm",
            )
        )
    if options.row_heights is not None:
        violations.append(_not_applicable("row_heights", list(options.row_heights), kind))
    if options.compartments is not None:
        violations.append(_not_applicable("compartments", "grid", kind))
    if options.base is not BaseType.NONE:
        violations.append(_not_applicable("base", options.base.value, kind))
    if options.lighting is not LightingType.NONE:
        violations.append(_not_applicable("lighting", options.lighting.value, kind))
    return violations


def _check_table_options(
    product_type: TableProductType, options: LayoutOptions
) -> list[ConstraintViolation]:
    violations = _check_leg_options(product_type, options)
    if options.top_shape not in product_type.available_shapes:
        violations.append(
            ConstraintViolation(
                "top_shape",
                "allowed",
                [s.value for s in product_type.available_shapes],
                options.top_shape.value,
                f"top shape '{options.top_shape.value}' is not offered for a "
                f"{product_type.name}",
            )
        )
    elif options.leg_style is LegStyle.PEDESTAL and options.top_shape is not TopShape.ROUND:
        violations.append(
            ConstraintViolation(
                "leg_style",
                "pedestal_needs_round_top",
                TopShape.ROUND.value,
                options.top_shape.value,
                "a pedestal leg needs a round top",
            )
        )
    if options.shelf_count:
        violations.append(_not_applicable("shelf_count", options.shelf_count, product_type.name))
    return violations


def _check_console_options(
    product_type: ConsoleProductType, options: LayoutOptions
) -> list[ConstraintViolation]:
    violations = _check_leg_options(product_type, options)
    if options.top_shape is not TopShape.RECTANGULAR:
        violations.append(
            _not_applicable("top_shape", options.top_shape.value, product_type.name)
        )
    if options.shelf_count < 0 or options.shelf_count > product_type.max_shelves:
        violations.append(
            ConstraintViolation(
                "shelf_count",
                "max" if options.shelf_count > 0 else "min",
                product_type.max_shelves if options.shelf_count > 0 else 0,
                options.shelf_count,
                f"shelf count must be between 0 and {product_type.max_shelves}",
            )
        )
    return violations


# =============================================================================
# Cabinets
# =============================================================================


def _validate_cabinet(
    product_type: CabinetProductType,
    dimensions: Dimensions,
    options: LayoutOptions,
    styles: StyleRegistry,
) -> ValidationOutcome:
    base_height = product_type.base_height(options.base)
    carcass_height = dimensions.height - base_height
    if options.row_heights is None:
        if carcass_height < product_type.min_row_height:
            return _reject(
                product_type,
                [
                    ConstraintViolation(
                        "height",
                        "min_carcass",
                        base_height + product_type.min_row_height,
                        dimensions.height,
                        f"a {options.base.value} base leaves only {carcass_height:g} cm "
                        f"for the carcass",
                    )
                ],
            )
        row_heights = derive_row_heights(carcass_height, product_type.default_row_size)
    else:
        row_heights = tuple(options.row_heights)

    violations = _check_rows(product_type, dimensions, base_height, row_heights)
    if violations:
        return _reject(product_type, violations)

    style = styles.get(options.style)
    plan = plan_cabinet(product_type, dimensions, options, row_heights, style)
    violations = _check_cabinet_spans(product_type, plan, options, style)
    violations.extend(_check_compartments(product_type, plan, options))
    if violations:
        return _reject(product_type, violations)

    logger.debug(
        f"Validated {product_type.name} {dimensions.width:g}x{dimensions.height:g}"
        f"x{dimensions.depth:g} with {len(row_heights)} rows"
    )
    return ValidationOutcome.ok(
        ValidatedConfig(
            product_type=product_type,
            dimensions=dimensions,
            options=options,
            row_heights=row_heights,
        )
    )


def _check_rows(
    product_type: CabinetProductType,
    dimensions: Dimensions,
    base_height: float,
    row_heights: tuple[RowHeight, ...],
) -> list[ConstraintViolation]:
    violations: list[ConstraintViolation] = []
    if len(row_heights) > product_type.max_rows:
        violations.append(
            ConstraintViolation(
                "row_heights",
                "max_rows",
                product_type.max_rows,
                len(row_heights),
                f"{len(row_heights)} rows exceed the maximum of {product_type.max_rows}",
            )
        )
    for i, row in enumerate(row_heights):
        value = row_height_value(row)
        if value < product_type.min_row_height - TOLERANCE:
            violations.append(
                ConstraintViolation(
                    field_path("row_heights", i),
                    "min",
                    product_type.min_row_height,
                    value,
                    f"row {i} is {value:g} cm, below {product_type.min_row_height:g} cm",
                )
            )

    stacked = base_height + total_height(row_heights)
    max_height = product_type.constraints.max_dimensions.height
    if stacked > max_height + TOLERANCE:
        violations.append(
            ConstraintViolation(
                "row_heights",
                "max_height",
                max_height,
                stacked,
                f"rows stack to {stacked:g} cm, above the maximum height {max_height:g} cm",
            )
        )
    elif abs(stacked - dimensions.height) > TOLERANCE:
        violations.append(
            ConstraintViolation(
                "row_heights",
                "row_sum",
                dimensions.height,
                stacked,
                f"rows stack to {stacked:g} cm but the height is {dimensions.height:g} cm",
            )
        )
    return violations


def _check_cabinet_spans(
    product_type: CabinetProductType,
    plan: CabinetPlan,
    options: LayoutOptions,
    style: StyleDefinition,
) -> list[ConstraintViolation]:
    violations: list[ConstraintViolation] = []
    geometry = plan.geometry
    max_span = product_type.max_unsupported_span

    narrowest = geometry.interior_width / product_type.max_columns
    if narrowest > max_span + TOLERANCE:
        violations.append(
            ConstraintViolation(
                "width",
                "span",
                max_span,
                round(narrowest, 6),
                f"even {product_type.max_columns} columns leave spans of {narrowest:g} cm",
            )
        )

    for row in range(plan.row_count):
        columns = plan.column_count(row)
        if columns > product_type.max_columns:
            violations.append(
                ConstraintViolation(
                    "style",
                    "max_columns",
                    product_type.max_columns,
                    columns,
                    f"row {row} has {columns} columns",
                )
            )
            break
        dividers = plan.dividers_per_row[row]
        if dividers:
            edges = (0.0, *(d.x for d in dividers), geometry.interior_width)
            closest = min(b - a for a, b in zip(edges, edges[1:]))
            if closest < style.spacing.min_gap - TOLERANCE:
                violations.append(
                    ConstraintViolation(
                        "style",
                        "min_gap",
                        style.spacing.min_gap,
                        round(closest, 6),
                        f"row {row} has dividers {closest:g} cm apart",
                    )
                )
                break
        bounds = column_bounds(
            dividers,
            geometry.interior_left,
            geometry.interior_width,
            geometry.panel_thickness,
        )
        widest = max(hi - lo for lo, hi in bounds)
        if widest > max_span + TOLERANCE:
            violations.append(
                ConstraintViolation(
                    "style",
                    "span",
                    max_span,
                    round(widest, 6),
                    f"row {row} has an unsupported span of {widest:g} cm",
                )
            )
            break

    if options.base is BaseType.FEET:
        xs = foot_positions(
            geometry.width,
            product_type.foot_size,
            [geometry.interior_left + d.x for d in plan.dividers_per_row[0]],
            max_span,
        )
        widest = max(b - a for a, b in zip(xs, xs[1:]))
        if widest > max_span + TOLERANCE:
            violations.append(
                ConstraintViolation(
                    "base",
                    "span",
                    max_span,
                    round(widest, 6),
                    f"feet are {widest:g} cm apart",
                )
            )
    return violations


def _check_compartments(
    product_type: CabinetProductType, plan: CabinetPlan, options: LayoutOptions
) -> list[ConstraintViolation]:
    if options.compartments is None:
        return []
    backing = options.materials.back if plan.geometry.has_back_panel else options.materials.body
    outcome = build_plan_compartments(
        plan,
        options.compartments,
        product_type.min_drawer_depth,
        backing,
        product_type.max_unsupported_span,
    )
    return list(outcome.violations)


# =============================================================================
# Tables and consoles
# =============================================================================


def _validate_legged(
    product_type: TableProductType | ConsoleProductType,
    dimensions: Dimensions,
    options: LayoutOptions,
) -> ValidationOutcome:
    violations: list[ConstraintViolation] = []
    inset = options.leg_position.inset
    leg_style = options.leg_style or product_type.default_leg_style
    round_top = (
        isinstance(product_type, TableProductType) and options.top_shape is TopShape.ROUND
    )

    if round_top and abs(dimensions.width - dimensions.depth) > TOLERANCE:
        violations.append(
            ConstraintViolation(
                "depth",
                "round_top",
                dimensions.width,
                dimensions.depth,
                "a round top needs equal width and depth",
            )
        )
    elif round_top and leg_style is LegStyle.PEDESTAL:
        pass
    elif round_top:
        # Neighbouring legs on the circle are a quarter turn apart
        distance = (dimensions.width / 2 - inset) * math.sqrt(2)
        if distance < product_type.min_leg_distance - TOLERANCE:
            violations.append(
                ConstraintViolation(
                    "width",
                    "min_leg_distance",
                    product_type.min_leg_distance,
                    round(distance, 6),
                    f"legs would stand {distance:.1f} cm apart",
                )
            )
    else:
        axes = ("width", "depth") if isinstance(product_type, TableProductType) else ("width",)
        for axis in axes:
            distance = dimensions.axis(axis) - 2 * inset
            if distance < product_type.min_leg_distance - TOLERANCE:
                violations.append(
                    ConstraintViolation(
                        axis,
                        "min_leg_distance",
                        product_type.min_leg_distance,
                        distance,
                        f"legs would stand {distance:g} cm apart along the {axis}",
                    )
                )
    if violations:
        return _reject(product_type, violations)

    normalized = LayoutOptions(
        style=options.style,
        density=options.density,
        leg_style=leg_style,
        leg_position=options.leg_position,
        top_shape=options.top_shape,
        top_thickness=options.top_thickness or product_type.default_top_thickness,
        shelf_count=options.shelf_count,
        materials=options.materials,
        increment_policy=options.increment_policy,
    )
    logger.debug(
        f"Validated {product_type.name} {dimensions.width:g}x{dimensions.height:g}"
        f"x{dimensions.depth:g}"
    )
    return ValidationOutcome.ok(
        ValidatedConfig(product_type=product_type, dimensions=dimensions, options=normalized)
    )
