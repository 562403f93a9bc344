"""Configuration file support: schema, loading and conversion to domain inputs."""

from configurator.application.config.adapter import (
    config_to_options,
    config_to_product_configuration,
    config_to_request,
)
from configurator.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from configurator.application.config.schema import (
    SUPPORTED_VERSIONS,
    DimensionsConfig,
    MaterialSelectionConfig,
    MaterialsConfig,
    ProductConfigSchema,
)

__all__ = [
    "ConfigError",
    "DimensionsConfig",
    "MaterialSelectionConfig",
    "MaterialsConfig",
    "ProductConfigSchema",
    "SUPPORTED_VERSIONS",
    "config_to_options",
    "config_to_product_configuration",
    "config_to_request",
    "load_config",
    "load_config_from_dict",
]
