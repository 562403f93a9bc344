"""Adapter from the configuration schema to domain inputs.

The schema is the persisted shape; the domain works with ``DimensionRequest``,
``LayoutOptions`` and the ``ProductConfiguration`` aggregate.
"""

from configurator.application.config.schema import (
    MaterialSelectionConfig,
    MaterialsConfig,
    ProductConfigSchema,
)
from configurator.domain import (
    DimensionRequest,
    LayoutOptions,
    PartMaterials,
    ProductConfiguration,
)
from configurator.domain.value_objects import Dimensions, MaterialSelection


def _selection(
    config: MaterialSelectionConfig | None, default: MaterialSelection
) -> MaterialSelection:
    if config is None:
        return default
    return MaterialSelection(material=config.material, color=config.color)


def config_to_materials(config: MaterialsConfig) -> PartMaterials:
    """Convert per-role material selections, keeping defaults for omitted roles."""
    defaults = PartMaterials()
    return PartMaterials(
        body=_selection(config.body, defaults.body),
        back=_selection(config.back, defaults.back),
        fronts=_selection(config.fronts, defaults.fronts),
        legs=_selection(config.legs, defaults.legs),
        top=_selection(config.top, defaults.top),
    )


def config_to_options(config: ProductConfigSchema) -> LayoutOptions:
    """Convert the option fields of a configuration to ``LayoutOptions``."""
    return LayoutOptions(
        style=config.style,
        density=config.density_level,
        row_heights=tuple(config.row_heights) if config.row_heights is not None else None,
        base=config.base,
        leg_style=config.leg_style,
        leg_position=config.leg_position,
        top_shape=config.top_shape,
        top_thickness=config.top_thickness,
        shelf_count=config.shelf_count,
        compartments=(
            tuple(tuple(row) for row in config.compartments)
            if config.compartments is not None
            else None
        ),
        materials=config_to_materials(config.materials),
        lighting=config.lighting,
        increment_policy=config.increment_policy,
    )


def config_to_request(
    config: ProductConfigSchema,
) -> tuple[str, DimensionRequest, LayoutOptions]:
    """Convert a configuration to the validator's inputs.

    Returns:
        The product type name, the requested dimensions and the options.

    Example:
        >>> product_type, requested, options = config_to_request(load_config(path))
        >>> outcome = engine.validate(product_type, requested, options)
    """
    dims = config.dimensions
    return (
        config.product_type.value,
        DimensionRequest(dims.width, dims.height, dims.depth),
        config_to_options(config),
    )


def config_to_product_configuration(config: ProductConfigSchema) -> ProductConfiguration:
    """Build a configuration aggregate with no derived parts yet."""
    dims = config.dimensions
    return ProductConfiguration(
        product_type=config.product_type.value,
        dimensions=Dimensions(dims.width, dims.height, dims.depth),
        options=config_to_options(config),
        name=config.name,
        preset_id=config.preset_id,
        metadata=dict(config.metadata),
    )
