"""Unit tests for compartment grid derivation."""

import pytest

from configurator.domain import DomainError
from configurator.domain.services.compartments import CompartmentFrame, build_compartments
from configurator.domain.value_objects import (
    Color,
    CompartmentType,
    Material,
    MaterialSelection,
    Position3D,
)

OPEN, DOOR, DRAWER = CompartmentType.OPEN, CompartmentType.DOOR_LEFT, CompartmentType.DRAWER


def dividers(*rows: list[float]) -> list[list[Position3D]]:
    return [[Position3D(x, 0, 0) for x in row] for row in rows]


@pytest.fixture
def frame() -> CompartmentFrame:
    return CompartmentFrame(
        interior_left=1.8,
        interior_width=96.4,
        panel_thickness=1.8,
        depth=30.0,
        min_drawer_depth=20.0,
        backing=MaterialSelection(Material.PLYWOOD, Color.WHITE),
        max_unsupported_span=50.0,
    )


class TestGrid:
    """One compartment per cell, bounded by the panels around it."""

    def test_cell_count_follows_dividers(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(dividers([40], [30, 60]), (0, 30, 70), None, frame)
        assert outcome.is_valid
        assert [(c.row, c.column) for c in outcome.compartments] == [
            (0, 0),
            (0, 1),
            (1, 0),
            (1, 1),
            (1, 2),
        ]

    def test_bottom_left_cell_bounds(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(dividers([40], [30, 60]), (0, 30, 70), None, frame)
        low, high = outcome.compartments[0].bounds
        assert low.x == pytest.approx(1.8)
        assert high.x == pytest.approx(40.9)
        assert low.y == pytest.approx(1.8)
        assert high.y == pytest.approx(29.1)
        assert low.z == pytest.approx(0)
        assert high.z == pytest.approx(30)

    def test_top_row_stops_at_top_panel(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(dividers([40], [30, 60]), (0, 30, 70), None, frame)
        top_right = outcome.compartments[-1]
        low, high = top_right.bounds
        assert low.x == pytest.approx(62.7)
        assert high.x == pytest.approx(98.2)
        assert low.y == pytest.approx(30.9)
        assert high.y == pytest.approx(68.2)

    def test_cells_do_not_overlap(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(dividers([40], [30, 60]), (0, 30, 70), None, frame)
        for row in (0, 1):
            cells = [c for c in outcome.compartments if c.row == row]
            for left, right in zip(cells, cells[1:]):
                assert left.bounds[1].x < right.bounds[0].x

    def test_ids_and_backing(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(dividers([40]), (0, 30), None, frame)
        first = outcome.compartments[0]
        assert first.id == "compartment-r0-c0"
        assert first.material is Material.PLYWOOD
        assert first.color is Color.WHITE
        assert first.back_panel is True
        assert first.grid_position.x == 0
        assert first.grid_position.y == 0

    def test_base_height_lifts_cells(self, frame: CompartmentFrame) -> None:
        raised = CompartmentFrame(
            interior_left=frame.interior_left,
            interior_width=frame.interior_width,
            panel_thickness=frame.panel_thickness,
            depth=frame.depth,
            min_drawer_depth=frame.min_drawer_depth,
            base_height=10.0,
        )
        outcome = build_compartments(dividers([]), (0, 30), None, raised)
        assert outcome.compartments[0].bounds[0].y == pytest.approx(11.8)

    def test_wide_cells_flagged_for_bracing(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(dividers([30]), (0, 30), None, frame)
        left, right = outcome.compartments
        assert left.bracing_support is False
        assert right.bracing_support is True

    def test_staggered_odd_columns_use_shifted_rows(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(
            dividers([40], [40]),
            (0, 30, 60),
            None,
            frame,
            shifted_row_positions=(0, 45, 60),
        )
        by_cell = {(c.row, c.column): c for c in outcome.compartments}
        assert by_cell[(0, 0)].bounds[1].y == pytest.approx(29.1)
        assert by_cell[(0, 1)].bounds[1].y == pytest.approx(44.1)


class TestRequestedTypes:
    """Requested compartment types and their rules."""

    def test_missing_cells_are_open(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(
            dividers([40], [40]), (0, 30, 60), [[DRAWER]], frame
        )
        types = [c.compartment_type for c in outcome.compartments]
        assert types == [DRAWER, OPEN, OPEN, OPEN]

    def test_too_many_cells_in_a_row(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(dividers([40]), (0, 30), [[OPEN, DOOR, OPEN]], frame)
        assert not outcome.is_valid
        assert outcome.violations[0].field == "compartments[0]"
        assert outcome.violations[0].limit == 2
        assert outcome.violations[0].actual == 3

    def test_too_many_rows(self, frame: CompartmentFrame) -> None:
        outcome = build_compartments(dividers([40]), (0, 30), [[OPEN], [OPEN]], frame)
        assert [v.field for v in outcome.violations] == ["compartments"]

    def test_shallow_drawer(self, frame: CompartmentFrame) -> None:
        shallow = CompartmentFrame(
            interior_left=1.8,
            interior_width=96.4,
            panel_thickness=1.8,
            depth=18.0,
            min_drawer_depth=20.0,
        )
        outcome = build_compartments(dividers([40]), (0, 30), [[OPEN, DRAWER]], shallow)
        assert [v.field for v in outcome.violations] == ["compartments[0][1]"]
        assert outcome.compartments == ()


class TestInconsistentPositions:
    """Position sets that disagree are programming errors."""

    def test_no_rows(self, frame: CompartmentFrame) -> None:
        with pytest.raises(DomainError):
            build_compartments([], (0,), None, frame)

    def test_row_count_mismatch(self, frame: CompartmentFrame) -> None:
        with pytest.raises(DomainError):
            build_compartments(dividers([40]), (0, 30, 60), None, frame)

    def test_rows_not_increasing(self, frame: CompartmentFrame) -> None:
        with pytest.raises(DomainError):
            build_compartments(dividers([40], [40]), (0, 30, 30), None, frame)

    def test_overlapping_dividers(self, frame: CompartmentFrame) -> None:
        with pytest.raises(DomainError):
            build_compartments(dividers([40, 41]), (0, 30), None, frame)
