"""Compartment grid derivation.

Compartments are rebuilt from the divider and shelf position sets on every
run. Their bounds are always derived from the enclosing panels.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..entities import Compartment
from ..errors import DomainError
from ..results import CompartmentOutcome, ConstraintViolation, field_path
from ..value_objects import (
    CompartmentType,
    Dimensions,
    MaterialSelection,
    Position3D,
)
from .planning import CabinetPlan, column_bounds

__all__ = [
    "CompartmentFrame",
    "build_compartments",
    "build_plan_compartments",
]


@dataclass(frozen=True)
class CompartmentFrame:
    """Carcass measurements the builder needs besides the position sets.

    Attributes:
        interior_left: x of the left side panel's inner face.
        interior_width: Clear width between the side panels.
        panel_thickness: Thickness of shelves, dividers and frame panels.
        depth: Clear depth of every compartment.
        min_drawer_depth: Smallest depth a drawer cell may have.
        base_height: y of the carcass bottom.
        backing: Material and colour behind each cell.
        back_panel: Whether a back panel closes the cells.
        max_unsupported_span: Cells wider than this are flagged for bracing.
    """

    interior_left: float
    interior_width: float
    panel_thickness: float
    depth: float
    min_drawer_depth: float
    base_height: float = 0.0
    backing: MaterialSelection = field(default_factory=MaterialSelection)
    back_panel: bool = True
    max_unsupported_span: float | None = None


def build_compartments(
    dividers_per_row: Sequence[Sequence[Position3D]],
    row_positions: Sequence[float],
    compartment_types: Sequence[Sequence[CompartmentType]] | None,
    frame: CompartmentFrame,
    shifted_row_positions: Sequence[float] | None = None,
) -> CompartmentOutcome:
    """Build one compartment per (row, column) cell.

    Args:
        dividers_per_row: Divider positions per row, local to the interior
            span.
        row_positions: Row boundaries measured from the carcass bottom.
        compartment_types: Requested types, bottom row first. Cells not
            covered are open.
        frame: Carcass measurements.
        shifted_row_positions: Boundaries used by odd columns of a
            staggered layout.

    Returns:
        The compartments, or the violations when the requested grid does
        not fit or a drawer cell is too shallow.

    Raises:
        DomainError: If the position sets are inconsistent with each other.
    """
    row_count = len(row_positions) - 1
    if row_count < 1:
        raise DomainError("At least one row is required to build compartments")
    if len(dividers_per_row) != row_count:
        raise DomainError(
            f"Got divider positions for {len(dividers_per_row)} rows "
            f"but {row_count} rows"
        )
    _require_increasing(row_positions)
    if shifted_row_positions is not None:
        if len(shifted_row_positions) != len(row_positions):
            raise DomainError("Shifted row positions must match the row count")
        _require_increasing(shifted_row_positions)

    violations = _check_grid_shape(dividers_per_row, compartment_types)
    t = frame.panel_thickness
    compartments: list[Compartment] = []

    for row, dividers in enumerate(dividers_per_row):
        bounds = column_bounds(dividers, frame.interior_left, frame.interior_width, t)
        for column, (x_lo, x_hi) in enumerate(bounds):
            positions = row_positions
            if shifted_row_positions is not None and column % 2 == 1:
                positions = shifted_row_positions
            y_lo = frame.base_height + positions[row] + (t if row == 0 else t / 2)
            y_hi = frame.base_height + positions[row + 1] - (
                t if row == row_count - 1 else t / 2
            )
            if x_hi <= x_lo or y_hi <= y_lo:
                raise DomainError(
                    f"Cell ({row}, {column}) has no clear opening; "
                    "panels overlap"
                )

            cell_type = _requested_type(compartment_types, row, column)
            if (
                cell_type is CompartmentType.DRAWER
                and frame.depth < frame.min_drawer_depth
            ):
                violations.append(
                    ConstraintViolation(
                        field=field_path("compartments", row, column),
                        rule="drawer_depth",
                        limit=frame.min_drawer_depth,
                        actual=frame.depth,
                        message=(
                            f"drawers need a depth of at least "
                            f"{frame.min_drawer_depth:g} cm, cell is {frame.depth:g} cm"
                        ),
                    )
                )
                continue

            width = x_hi - x_lo
            compartments.append(
                Compartment(
                    id=f"compartment-r{row}-c{column}",
                    row=row,
                    column=column,
                    compartment_type=cell_type,
                    material=frame.backing.material,
                    color=frame.backing.color,
                    position=Position3D(
                        round((x_lo + x_hi) / 2, 6),
                        round((y_lo + y_hi) / 2, 6),
                        round(frame.depth / 2, 6),
                    ),
                    dimensions=Dimensions(
                        round(width, 6), round(y_hi - y_lo, 6), frame.depth
                    ),
                    back_panel=frame.back_panel,
                    bracing_support=(
                        frame.max_unsupported_span is not None
                        and width > frame.max_unsupported_span
                    ),
                )
            )

    if violations:
        return CompartmentOutcome(violations=tuple(violations))
    return CompartmentOutcome(compartments=tuple(compartments))


def build_plan_compartments(
    plan: CabinetPlan,
    compartment_types: Sequence[Sequence[CompartmentType]] | None,
    min_drawer_depth: float,
    backing: MaterialSelection,
    max_unsupported_span: float | None = None,
) -> CompartmentOutcome:
    """Build the compartments of a planned cabinet."""
    geometry = plan.geometry
    frame = CompartmentFrame(
        interior_left=geometry.interior_left,
        interior_width=geometry.interior_width,
        panel_thickness=geometry.panel_thickness,
        depth=geometry.inner_depth,
        min_drawer_depth=min_drawer_depth,
        base_height=geometry.base_height,
        backing=backing,
        back_panel=geometry.has_back_panel,
        max_unsupported_span=max_unsupported_span,
    )
    return build_compartments(
        plan.dividers_per_row,
        plan.row_positions,
        compartment_types,
        frame,
        shifted_row_positions=plan.shifted_row_positions,
    )


def _requested_type(
    compartment_types: Sequence[Sequence[CompartmentType]] | None, row: int, column: int
) -> CompartmentType:
    if compartment_types is None or row >= len(compartment_types):
        return CompartmentType.OPEN
    cells = compartment_types[row]
    if column >= len(cells):
        return CompartmentType.OPEN
    return cells[column]


def _check_grid_shape(
    dividers_per_row: Sequence[Sequence[Position3D]],
    compartment_types: Sequence[Sequence[CompartmentType]] | None,
) -> list[ConstraintViolation]:
    violations: list[ConstraintViolation] = []
    if compartment_types is None:
        return violations
    row_count = len(dividers_per_row)
    if len(compartment_types) > row_count:
        violations.append(
            ConstraintViolation(
                field="compartments",
                rule="max_rows",
                limit=row_count,
                actual=len(compartment_types),
                message=f"grid has {len(compartment_types)} rows, cabinet has {row_count}",
            )
        )
    for row, cells in enumerate(compartment_types[:row_count]):
        columns = len(dividers_per_row[row]) + 1
        if len(cells) > columns:
            violations.append(
                ConstraintViolation(
                    field=field_path("compartments", row),
                    rule="max_columns",
                    limit=columns,
                    actual=len(cells),
                    message=f"row {row} has {columns} columns, grid lists {len(cells)}",
                )
            )
    return violations


def _require_increasing(positions: Sequence[float]) -> None:
    for lower, upper in zip(positions, positions[1:]):
        if upper <= lower:
            raise DomainError(f"Row positions must be strictly increasing: {list(positions)}")
