"""Integration tests for the layout pipeline.

These tests run validation and layout end to end and check the properties
every layout must have:
- Components stay inside the product's bounding box
- Compartments reference existing components
- Material groups partition the components
- Identical inputs give identical layouts
"""

import pytest

from configurator.application.config import config_to_product_configuration, config_to_request
from configurator.application.presets import PRESET_METADATA, PresetManager
from configurator.domain import (
    DimensionRequest,
    DomainError,
    LayoutEngine,
    LayoutOptions,
    ProductConfiguration,
    ValidatedConfig,
    compute_layout,
)
from configurator.domain.services import bounding_box
from configurator.domain.value_objects import (
    BaseType,
    CompartmentType,
    Density,
    Dimensions,
    IncrementPolicy,
    LegStyle,
    LightingType,
    StyleName,
    TopShape,
)

CABINET_CASES = [
    (120, 140, 32, LayoutOptions()),
    (30, 25, 24, LayoutOptions()),
    (450, 300, 40, LayoutOptions(density=Density.HIGH)),
    (200, 150, 32, LayoutOptions(base=BaseType.FEET, lighting=LightingType.BOTH)),
    (163, 180, 40, LayoutOptions(style=StyleName.SLANT, base=BaseType.PLINTH)),
    (200, 140, 32, LayoutOptions(style=StyleName.MOSAIC, density=Density.LOW)),
    (100, 140, 32, LayoutOptions(style=StyleName.PATTERN, density=Density.HIGH)),
    (147, 140, 32, LayoutOptions(style=StyleName.ASYMMETRIC)),
    (150, 140, 32, LayoutOptions(style=StyleName.GRADIENT)),
    (120, 140, 32, LayoutOptions(style=StyleName.STAGGERED)),
]

LEGGED_CASES = [
    ("table", 180, 72, 90, LayoutOptions()),
    ("table", 300, 110, 200, LayoutOptions(leg_style=LegStyle.HAIRPIN)),
    ("table", 120, 72, 120, LayoutOptions(top_shape=TopShape.ROUND, leg_style=LegStyle.PEDESTAL)),
    ("table", 170, 72, 170, LayoutOptions(top_shape=TopShape.ROUND)),
    ("desk", 80, 60, 50, LayoutOptions()),
    ("console", 200, 100, 50, LayoutOptions(shelf_count=4)),
]


def check_layout(config: ValidatedConfig, layout) -> None:
    box = bounding_box(config.product_type, config)
    ids = [c.id for c in layout.components]
    assert len(ids) == len(set(ids))
    for component in layout.components:
        assert box.contains_extent(component.position, component.dimensions), component.id

    known = set(ids)
    for compartment in layout.compartments:
        assert set(compartment.component_ids) <= known

    grouped = [cid for group in layout.material_groups for cid in group.component_ids]
    assert sorted(grouped) == sorted(ids)


class TestComputeLayout:
    """End-to-end layout properties."""

    @pytest.mark.parametrize("width, height, depth, options", CABINET_CASES)
    def test_cabinets(self, engine: LayoutEngine, width, height, depth, options) -> None:
        outcome = engine.validate("cabinet", DimensionRequest(width, height, depth), options)
        assert outcome.is_valid, [str(v) for v in outcome.violations]
        layout = engine.compute_layout(outcome.config)
        check_layout(outcome.config, layout)
        cells = {(c.row, c.column) for c in layout.compartments}
        assert len(cells) == len(layout.compartments)
        assert {row for row, _ in cells} == set(range(outcome.config.row_count))

    @pytest.mark.parametrize("style", list(StyleName))
    def test_accepted_cells_respect_min_gap(self, engine: LayoutEngine, styles, style) -> None:
        min_gap = styles.get(style).spacing.min_gap
        for width in range(60, 451, 7):
            outcome = engine.validate(
                "cabinet", DimensionRequest(width, 140, 32), LayoutOptions(style=style)
            )
            if not outcome.is_valid:
                continue
            thickness = outcome.config.product_type.panel_thickness
            layout = engine.compute_layout(outcome.config)
            for compartment in layout.compartments:
                assert compartment.dimensions.width >= min_gap - thickness - 1e-6, (
                    width,
                    compartment.id,
                    compartment.dimensions.width,
                )

    @pytest.mark.parametrize("name, width, height, depth, options", LEGGED_CASES)
    def test_legged(self, engine: LayoutEngine, name, width, height, depth, options) -> None:
        outcome = engine.validate(name, DimensionRequest(width, height, depth), options)
        assert outcome.is_valid, [str(v) for v in outcome.violations]
        layout = engine.compute_layout(outcome.config)
        check_layout(outcome.config, layout)
        assert layout.compartments == ()
        assert [c.type.value for c in layout.components].count("tabletop") == 1

    @pytest.mark.parametrize("name", list(PRESET_METADATA))
    def test_presets(self, engine: LayoutEngine, name: str) -> None:
        product_type, requested, options = config_to_request(PresetManager().get_preset(name))
        outcome = engine.validate(product_type, requested, options)
        assert outcome.is_valid, [str(v) for v in outcome.violations]
        check_layout(outcome.config, engine.compute_layout(outcome.config))

    def test_deterministic(self, engine: LayoutEngine) -> None:
        options = LayoutOptions(
            style=StyleName.SLANT,
            compartments=((CompartmentType.DRAWER, CompartmentType.DOOR_LEFT),),
            lighting=LightingType.SHELF,
        )
        config = engine.validate("cabinet", DimensionRequest(163, 140, 32), options).config
        assert engine.compute_layout(config) == engine.compute_layout(config)

    def test_inconsistent_config_raises(self, cabinet) -> None:
        config = ValidatedConfig(
            product_type=cabinet,
            dimensions=Dimensions(120, 140, 32),
            options=LayoutOptions(),
            row_heights=(35.0, 35.0),
        )
        with pytest.raises(DomainError):
            compute_layout(config)

    def test_unknown_product_type(self, engine: LayoutEngine) -> None:
        with pytest.raises(KeyError, match="Unknown"):
            engine.validate("wardrobe", DimensionRequest(100, 100, 40))


class TestConfigure:
    """The aggregate is recomputed wholesale on every edit."""

    def test_configure_fills_layout(self, engine: LayoutEngine) -> None:
        aggregate = config_to_product_configuration(PresetManager().get_preset("cabinet-classic"))
        updated, outcome = engine.configure(aggregate)
        assert outcome.is_valid
        assert updated.id == aggregate.id
        assert updated.components
        assert len(updated.compartments) == 12

    def test_edit_replaces_layout(self, engine: LayoutEngine) -> None:
        aggregate = ProductConfiguration(product_type="cabinet", dimensions=Dimensions(120, 140, 32))
        first, _ = engine.configure(aggregate)
        second, _ = engine.configure(first.with_inputs(dimensions=Dimensions(200, 140, 32)))
        assert len(second.compartments) > len(first.compartments)
        fresh, _ = engine.configure(aggregate.with_inputs(dimensions=Dimensions(200, 140, 32)))
        assert second.components == fresh.components

    def test_rejected_edit_clears_layout(self, engine: LayoutEngine) -> None:
        aggregate = ProductConfiguration(product_type="cabinet", dimensions=Dimensions(120, 140, 32))
        first, _ = engine.configure(aggregate)
        rejected, outcome = engine.configure(first.with_inputs(dimensions=Dimensions(500, 140, 32)))
        assert not outcome.is_valid
        assert outcome.fields == ("width",)
        assert rejected.components == ()
        assert rejected.material_groups == ()

    def test_rounded_dimensions_stored(self, engine: LayoutEngine) -> None:
        aggregate = ProductConfiguration(
            product_type="cabinet",
            dimensions=Dimensions(120.4, 142, 32),
            options=LayoutOptions(increment_policy=IncrementPolicy.ROUND),
        )
        updated, outcome = engine.configure(aggregate)
        assert outcome.is_valid
        assert updated.dimensions == Dimensions(120, 140, 32)
