"""Application commands (use cases) for product configuration."""

from __future__ import annotations

import logging

from configurator.application.config import (
    ProductConfigSchema,
    config_to_product_configuration,
    config_to_request,
)
from configurator.domain import LayoutEngine

from .dtos import LayoutOutput

logger = logging.getLogger(__name__)


class ConfigureProductCommand:
    """Validate a product configuration and compute its layout.

    Constraint violations are returned in the output; domain errors are
    programming errors and propagate.
    """

    def __init__(self, engine: LayoutEngine | None = None) -> None:
        self.engine = engine or LayoutEngine()

    def validate(self, config: ProductConfigSchema) -> LayoutOutput:
        """Run validation only.

        Returns:
            LayoutOutput whose ``configuration`` is the aggregate without a
            layout when valid, or None with the errors when not.
        """
        product_type, requested, options = config_to_request(config)
        if product_type not in self.engine.product_types:
            return self._unknown_type(product_type)

        outcome = self.engine.validate(product_type, requested, options)
        if not outcome.is_valid:
            logger.warning(
                f"Rejected {product_type} configuration with "
                f"{len(outcome.violations)} violation(s)"
            )
            return LayoutOutput(
                configuration=None,
                violations=list(outcome.violations),
                errors=[str(v) for v in outcome.violations],
            )
        return LayoutOutput(configuration=config_to_product_configuration(config))

    def execute(self, config: ProductConfigSchema) -> LayoutOutput:
        """Validate the configuration and compute its layout.

        Args:
            config: A loaded configuration document.

        Returns:
            LayoutOutput carrying the configuration with its components,
            compartments and material groups, or the validation errors.
        """
        product_type = config.product_type.value
        if product_type not in self.engine.product_types:
            return self._unknown_type(product_type)

        configuration, outcome = self.engine.configure(
            config_to_product_configuration(config)
        )
        if not outcome.is_valid:
            logger.warning(
                f"Rejected {product_type} configuration with "
                f"{len(outcome.violations)} violation(s)"
            )
            return LayoutOutput(
                configuration=None,
                violations=list(outcome.violations),
                errors=[str(v) for v in outcome.violations],
            )

        logger.info(
            f"Configured {product_type} with {len(configuration.components)} components "
            f"in {len(configuration.material_groups)} material groups"
        )
        return LayoutOutput(configuration=configuration)

    def _unknown_type(self, product_type: str) -> LayoutOutput:
        known = ", ".join(self.engine.product_types.names())
        return LayoutOutput(
            configuration=None,
            errors=[f"Unknown product type: {product_type} (known: {known})"],
        )
