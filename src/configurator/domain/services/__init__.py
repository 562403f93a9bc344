"""Domain services: the pure layout pipeline.

- Row-height resolution and style layout strategies
- Dimension and constraint validation
- Component assembly, compartment building and material grouping
"""

from .assembler import assemble, assemble_compartment_parts, bounding_box, foot_positions
from .compartments import CompartmentFrame, build_compartments, build_plan_compartments
from .material_grouping import group_by_material
from .pipeline import LayoutEngine, compute_layout
from .planning import CabinetGeometry, CabinetPlan, column_bounds, plan_cabinet
from .row_heights import (
    derive_row_heights,
    offset_row_positions,
    resolve_positions,
    row_height_value,
    total_height,
    update_row_height,
)
from .styles import (
    StyleDefinition,
    StyleRegistry,
    choose_column_count,
    column_widths,
    compute_divider_positions,
    default_styles,
    dividers_for_row,
)
from .validator import validate

__all__ = [
    "CabinetGeometry",
    "CabinetPlan",
    "CompartmentFrame",
    "LayoutEngine",
    "StyleDefinition",
    "StyleRegistry",
    "assemble",
    "assemble_compartment_parts",
    "bounding_box",
    "build_compartments",
    "build_plan_compartments",
    "choose_column_count",
    "column_bounds",
    "column_widths",
    "compute_divider_positions",
    "compute_layout",
    "default_styles",
    "derive_row_heights",
    "dividers_for_row",
    "foot_positions",
    "group_by_material",
    "offset_row_positions",
    "plan_cabinet",
    "resolve_positions",
    "row_height_value",
    "total_height",
    "update_row_height",
    "validate",
]
