"""The layout pipeline: validated configuration in, derived layout out.

Every edit to a configuration runs the whole pipeline again:

    validate -> style positions -> row positions -> assemble
             -> compartments -> fronts -> material groups

Nothing is carried over between runs.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..configuration import DimensionRequest, LayoutOptions, ValidatedConfig
from ..entities import LayoutResult, ProductConfiguration
from ..errors import DomainError
from ..product_types import (
    CabinetProductType,
    ConsoleProductType,
    ProductTypeRegistry,
    TableProductType,
    default_product_types,
)
from ..results import ValidationOutcome
from ..value_objects import Dimensions
from .assembler import assemble, assemble_compartment_parts
from .compartments import build_plan_compartments
from .material_grouping import group_by_material
from .planning import plan_cabinet
from .styles import StyleRegistry, default_styles
from .validator import validate

__all__ = ["LayoutEngine", "compute_layout"]

logger = logging.getLogger(__name__)


def compute_layout(
    validated: ValidatedConfig, styles: StyleRegistry | None = None
) -> LayoutResult:
    """Derive components, compartments and material groups.

    Args:
        validated: A configuration returned by ``validate``.
        styles: Style registry; must be the one used for validation.

    Returns:
        The derived layout.

    Raises:
        DomainError: If the configuration is inconsistent, for example when
            it was built by hand instead of by the validator.
    """
    styles = styles or default_styles()
    product_type = validated.product_type
    match product_type:
        case CabinetProductType():
            options = validated.options
            plan = plan_cabinet(
                product_type,
                validated.dimensions,
                options,
                validated.row_heights,
                styles.get(options.style),
            )
            components = assemble(
                product_type,
                validated,
                plan.dividers_per_row,
                plan.row_positions,
                shifted_row_positions=plan.shifted_row_positions,
            )
            backing = (
                options.materials.back
                if plan.geometry.has_back_panel
                else options.materials.body
            )
            outcome = build_plan_compartments(
                plan,
                options.compartments,
                product_type.min_drawer_depth,
                backing,
                product_type.max_unsupported_span,
            )
            if not outcome.is_valid:
                raise DomainError(
                    "Compartment grid does not fit the configuration: "
                    + "; ".join(str(v) for v in outcome.violations)
                )
            fronts, compartments = assemble_compartment_parts(outcome.compartments, validated)
            components = components + fronts
            logger.debug(
                f"Planned {plan.row_count} rows with "
                f"{sum(len(row) for row in plan.dividers_per_row)} dividers"
            )
        case TableProductType() | ConsoleProductType():
            components = assemble(product_type, validated)
            compartments = ()
        case _:
            raise DomainError(f"Unsupported product type: {product_type!r}")

    groups = group_by_material(components)
    logger.debug(
        f"Computed layout for {product_type.name}: {len(components)} components, "
        f"{len(compartments)} compartments, {len(groups)} material groups"
    )
    return LayoutResult(
        components=components, compartments=compartments, material_groups=groups
    )


class LayoutEngine:
    """Stateless façade over the registries and the pipeline.

    The engine holds only the immutable registries it was built with; it
    never keeps a configuration, so one engine may serve many callers.

    Example:
        engine = LayoutEngine()
        outcome = engine.validate("cabinet", DimensionRequest(120, 140, 32))
        layout = engine.compute_layout(outcome.config)
    """

    def __init__(
        self,
        product_types: ProductTypeRegistry | None = None,
        styles: StyleRegistry | None = None,
    ) -> None:
        self.product_types = product_types or default_product_types()
        self.styles = styles or default_styles()

    def validate(
        self,
        product_type: str,
        requested: DimensionRequest | Dimensions,
        options: LayoutOptions | None = None,
    ) -> ValidationOutcome:
        """Validate a request against a registered product type.

        Raises:
            KeyError: If the product type is not registered.
        """
        return validate(self.product_types.get(product_type), requested, options, self.styles)

    def compute_layout(self, validated: ValidatedConfig) -> LayoutResult:
        """Run the pipeline on a validated configuration."""
        return compute_layout(validated, self.styles)

    def configure(
        self, configuration: ProductConfiguration
    ) -> tuple[ProductConfiguration, ValidationOutcome]:
        """Recompute the derived parts of a configuration aggregate.

        Returns:
            The updated aggregate and the validation outcome. When
            validation fails the aggregate is returned with its derived
            parts cleared.
        """
        outcome = self.validate(
            configuration.product_type, configuration.dimensions, configuration.options
        )
        if not outcome.is_valid:
            return configuration.with_inputs(), outcome
        config = outcome.config
        layout = self.compute_layout(config)
        updated = replace(
            configuration, dimensions=config.dimensions
        ).with_layout(layout)
        return updated, outcome
