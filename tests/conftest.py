"""Pytest configuration and shared fixtures for configurator tests."""

from __future__ import annotations

import pytest

from configurator.domain import (
    DimensionRequest,
    LayoutEngine,
    LayoutOptions,
    ProductTypeRegistry,
    StyleRegistry,
    ValidatedConfig,
    default_product_types,
    default_styles,
    validate,
)
from configurator.domain.product_types import (
    CabinetProductType,
    ConsoleProductType,
    TableProductType,
)


@pytest.fixture
def product_types() -> ProductTypeRegistry:
    """The registry of built-in product types."""
    return default_product_types()


@pytest.fixture
def styles() -> StyleRegistry:
    """The registry of built-in styles."""
    return default_styles()


@pytest.fixture
def engine(product_types: ProductTypeRegistry, styles: StyleRegistry) -> LayoutEngine:
    """A layout engine over the built-in registries."""
    return LayoutEngine(product_types, styles)


@pytest.fixture
def cabinet(product_types: ProductTypeRegistry) -> CabinetProductType:
    return product_types.get("cabinet")


@pytest.fixture
def bookcase(product_types: ProductTypeRegistry) -> CabinetProductType:
    return product_types.get("bookcase")


@pytest.fixture
def table(product_types: ProductTypeRegistry) -> TableProductType:
    return product_types.get("table")


@pytest.fixture
def desk(product_types: ProductTypeRegistry) -> TableProductType:
    return product_types.get("desk")


@pytest.fixture
def console(product_types: ProductTypeRegistry) -> ConsoleProductType:
    return product_types.get("console")


@pytest.fixture
def validated(styles: StyleRegistry):
    """Validate a request and return the config, failing the test on violations.

    Example:
        config = validated(cabinet, 120, 140, 32, LayoutOptions(...))
    """

    def _validated(
        product_type,
        width: float,
        height: float,
        depth: float,
        options: LayoutOptions | None = None,
    ) -> ValidatedConfig:
        outcome = validate(
            product_type, DimensionRequest(width, height, depth), options, styles
        )
        assert outcome.is_valid, [str(v) for v in outcome.violations]
        return outcome.config

    return _validated
