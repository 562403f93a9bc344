"""Unit tests for component assembly.

These tests verify:
- Cabinet carcass, shelves, dividers and bases
- Table and console legs, braces and shelves
- Doors, drawers and lights built from compartments
- Preconditions on the validated configuration
"""

import math

import pytest

from configurator.domain import DomainError, LayoutOptions, ValidatedConfig
from configurator.domain.services import (
    assemble,
    assemble_compartment_parts,
    build_plan_compartments,
    foot_positions,
    plan_cabinet,
)
from configurator.domain.value_objects import (
    BaseType,
    CompartmentType,
    ComponentType,
    LegStyle,
    LightingType,
    StyleName,
    TopShape,
)


def assemble_cabinet(product_type, config: ValidatedConfig, styles):
    plan = plan_cabinet(
        product_type,
        config.dimensions,
        config.options,
        config.row_heights,
        styles.get(config.options.style),
    )
    components = assemble(
        product_type,
        config,
        plan.dividers_per_row,
        plan.row_positions,
        shifted_row_positions=plan.shifted_row_positions,
    )
    return plan, components


def by_id(components) -> dict:
    return {c.id: c for c in components}


class TestCabinet:
    """Carcass, shelves and dividers."""

    def test_component_counts(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 140, 32)
        _, components = assemble_cabinet(cabinet, config, styles)
        types = [c.type for c in components]
        assert len(components) == 16
        assert types.count(ComponentType.FRAME) == 4
        assert types.count(ComponentType.BACK) == 1
        assert types.count(ComponentType.SHELF) == 3
        assert types.count(ComponentType.DIVIDER) == 8

    def test_frame_panels(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 140, 32)
        parts = by_id(assemble_cabinet(cabinet, config, styles)[1])
        left, right, top = parts["frame-left"], parts["frame-right"], parts["frame-top"]
        assert left.position.x == pytest.approx(0.9)
        assert right.position.x == pytest.approx(119.1)
        assert top.position.y == pytest.approx(139.1)
        assert top.dimensions.width == pytest.approx(116.4)
        assert parts["back"].position.z == pytest.approx(31.8)

    def test_shelves_sit_on_row_boundaries(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 140, 32)
        parts = by_id(assemble_cabinet(cabinet, config, styles)[1])
        assert [parts[f"shelf-{b}"].position.y for b in (1, 2, 3)] == [35.0, 70.0, 105.0]

    def test_dividers_fill_their_row(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 140, 32)
        parts = by_id(assemble_cabinet(cabinet, config, styles)[1])
        bottom = parts["divider-r0-0"]
        assert bottom.row == 0
        assert bottom.position.x == pytest.approx(1.8 + 116.4 / 3)
        assert bottom.dimensions.height == pytest.approx(35 - 1.8 - 0.9)
        middle = parts["divider-r1-1"]
        assert middle.dimensions.height == pytest.approx(35 - 1.8)

    def test_deterministic(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 137, 185, 40, LayoutOptions(style=StyleName.MOSAIC))
        assert assemble_cabinet(cabinet, config, styles) == assemble_cabinet(
            cabinet, config, styles
        )

    def test_staggered_uses_column_shelves(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 140, 32, LayoutOptions(style=StyleName.STAGGERED))
        _, components = assemble_cabinet(cabinet, config, styles)
        parts = by_id(components)
        dividers = [c for c in components if c.type is ComponentType.DIVIDER]
        assert [d.id for d in dividers] == ["divider-0", "divider-1"]
        assert all(d.row is None for d in dividers)
        assert dividers[0].dimensions.height == pytest.approx(136.4)
        assert parts["shelf-1-c0"].position.y == 35.0
        assert parts["shelf-1-c1"].position.y == 52.5
        assert parts["shelf-1-c2"].position.y == 35.0
        assert len([c for c in components if c.type is ComponentType.SHELF]) == 9


class TestBase:
    """Feet and plinths."""

    def test_foot_positions_at_ends(self) -> None:
        assert foot_positions(80, 4, [40], 80) == (2.0, 78.0)

    def test_foot_positions_under_dividers(self) -> None:
        assert foot_positions(100, 4, [50], 80) == (2.0, 50.0, 98.0)

    def test_feet_on_wide_cabinet(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 200, 150, 32, LayoutOptions(base=BaseType.FEET))
        _, components = assemble_cabinet(cabinet, config, styles)
        feet = [c for c in components if c.type is ComponentType.BASE]
        assert len(feet) == 14
        assert feet[0].id == "foot-0"
        assert feet[0].position.x == 2.0
        assert feet[0].position.y == 5.0
        assert feet[0].position.z == 2.0
        assert feet[-1].position.z == 30.0

    def test_carcass_raised_by_feet(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 150, 32, LayoutOptions(base=BaseType.FEET))
        parts = by_id(assemble_cabinet(cabinet, config, styles)[1])
        assert parts["frame-bottom"].position.y == pytest.approx(10.9)
        assert parts["shelf-1"].position.y == pytest.approx(45.0)

    def test_plinth(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 150, 32, LayoutOptions(base=BaseType.PLINTH))
        parts = by_id(assemble_cabinet(cabinet, config, styles)[1])
        plinth = parts["plinth"]
        assert plinth.position.y == 4.0
        assert plinth.position.z == pytest.approx(3.9)
        assert plinth.dimensions.width == 120.0


class TestFronts:
    """Doors, drawers and lights come from the compartments."""

    def build(self, cabinet, styles, validated, options: LayoutOptions):
        config = validated(cabinet, 120, 140, 32, options)
        plan, _ = assemble_cabinet(cabinet, config, styles)
        outcome = build_plan_compartments(
            plan,
            options.compartments,
            cabinet.min_drawer_depth,
            options.materials.back,
        )
        return assemble_compartment_parts(outcome.compartments, config)

    def test_doors_and_drawers(self, cabinet, styles, validated) -> None:
        options = LayoutOptions(
            compartments=(
                (CompartmentType.DRAWER, CompartmentType.OPEN, CompartmentType.DOOR_RIGHT),
            )
        )
        components, compartments = self.build(cabinet, styles, validated, options)
        assert [c.id for c in components] == ["drawer-r0-c0", "door-r0-c2"]
        door = components[1]
        assert door.hinge_position == "right"
        assert door.position.z == pytest.approx(0.9)
        assert door.compartment_id == "compartment-r0-c2"
        assert compartments[0].component_ids == ("drawer-r0-c0",)
        assert compartments[1].component_ids == ()

    def test_drawer_fills_its_cell(self, cabinet, styles, validated) -> None:
        options = LayoutOptions(compartments=((CompartmentType.DRAWER,),))
        components, compartments = self.build(cabinet, styles, validated, options)
        drawer = components[0]
        assert drawer.dimensions == compartments[0].dimensions
        assert drawer.extension == compartments[0].dimensions.depth

    def test_shelf_lights(self, cabinet, styles, validated) -> None:
        options = LayoutOptions(lighting=LightingType.SHELF)
        components, compartments = self.build(cabinet, styles, validated, options)
        assert len(components) == len(compartments) == 12
        assert all(c.type is ComponentType.ACCESSORY for c in components)
        assert compartments[0].component_ids == ("light-r0-c0",)

    def test_ambient_light_is_structural(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 140, 32, LayoutOptions(lighting=LightingType.AMBIENT))
        parts = by_id(assemble_cabinet(cabinet, config, styles)[1])
        assert parts["light-ambient"].position.y == pytest.approx(137.7)


class TestTable:
    """Legs and braces under a top."""

    def test_rectangular_corner_legs(self, table, validated) -> None:
        config = validated(table, 120, 75, 200)
        parts = by_id(assemble(table, config))
        positions = [(parts[f"leg-{i}"].position.x, parts[f"leg-{i}"].position.z) for i in range(4)]
        assert positions == [(-55.0, -95.0), (55.0, -95.0), (55.0, 95.0), (-55.0, 95.0)]
        assert parts["leg-0"].position.y == -37.5
        assert parts["leg-0"].dimensions.height == 75.0

    def test_long_side_braced(self, table, validated) -> None:
        config = validated(table, 120, 75, 200)
        braces = [c.id for c in assemble(table, config) if c.type is ComponentType.BRACE]
        assert braces == ["brace-left", "brace-right"]

    def test_wide_table_braced_front_and_back(self, table, validated) -> None:
        config = validated(table, 180, 72, 90)
        braces = [c.id for c in assemble(table, config) if c.type is ComponentType.BRACE]
        assert braces == ["brace-front", "brace-back"]

    def test_top_above_origin(self, table, validated) -> None:
        config = validated(table, 120, 75, 80, LayoutOptions(top_thickness=4.0))
        top = by_id(assemble(table, config))["tabletop"]
        assert top.position.y == 2.0
        assert top.thickness == 4.0

    def test_round_pedestal(self, table, validated) -> None:
        options = LayoutOptions(top_shape=TopShape.ROUND, leg_style=LegStyle.PEDESTAL)
        config = validated(table, 150, 72, 150, options)
        legs = [c for c in assemble(table, config) if c.type is ComponentType.LEG]
        assert len(legs) == 1
        assert legs[0].id == "leg-0"
        assert (legs[0].position.x, legs[0].position.y, legs[0].position.z) == (0.0, -36.0, 0.0)
        assert legs[0].diameter == 14.0

    def test_round_four_legs(self, table, validated) -> None:
        config = validated(table, 150, 72, 150, LayoutOptions(top_shape=TopShape.ROUND))
        components = assemble(table, config)
        legs = [c for c in components if c.type is ComponentType.LEG]
        assert len(legs) == 4
        for leg in legs:
            assert math.hypot(leg.position.x, leg.position.z) == pytest.approx(70)
        assert not [c for c in components if c.type is ComponentType.BRACE]

    def test_round_cross_braces(self, table, validated) -> None:
        config = validated(table, 170, 72, 170, LayoutOptions(top_shape=TopShape.ROUND))
        braces = [c for c in assemble(table, config) if c.type is ComponentType.BRACE]
        assert [b.rotation for b in braces] == [45.0, 135.0]


class TestConsole:
    """Console legs and shelves."""

    def test_shelves_evenly_spaced(self, console, validated) -> None:
        config = validated(console, 120, 78, 35, LayoutOptions(shelf_count=2))
        components = assemble(console, config)
        parts = by_id(components)
        assert len(components) == 7
        assert parts["shelf-1"].position.y == -52.0
        assert parts["shelf-2"].position.y == -26.0
        assert parts["shelf-1"].dimensions.width == 106.0
        assert parts["shelf-1"].dimensions.depth == 21.0

    def test_default_thickness(self, console, validated) -> None:
        config = validated(console, 120, 78, 35)
        assert by_id(assemble(console, config))["tabletop"].thickness == 2.5


class TestPreconditions:
    """Assembly refuses configurations it cannot trust."""

    def test_wrong_product_type(self, table, desk, validated) -> None:
        config = validated(table, 120, 75, 80)
        with pytest.raises(DomainError):
            assemble(desk, config)

    def test_out_of_range_config(self, table, validated) -> None:
        config = validated(table, 120, 75, 80)
        tampered = ValidatedConfig(
            product_type=table,
            dimensions=config.dimensions.__class__(400, 75, 80),
            options=config.options,
        )
        with pytest.raises(DomainError):
            assemble(table, tampered)

    def test_row_positions_must_match_rows(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 140, 32)
        plan, _ = assemble_cabinet(cabinet, config, styles)
        with pytest.raises(DomainError):
            assemble(cabinet, config, plan.dividers_per_row, plan.row_positions[:-1])

    def test_row_positions_must_reach_the_top(self, cabinet, styles, validated) -> None:
        config = validated(cabinet, 120, 140, 32)
        plan, _ = assemble_cabinet(cabinet, config, styles)
        with pytest.raises(DomainError):
            assemble(cabinet, config, plan.dividers_per_row, (0.0, 35.0, 70.0, 105.0, 130.0))
