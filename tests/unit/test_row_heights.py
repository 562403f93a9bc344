"""Unit tests for row-height resolution."""

import pytest

from configurator.domain import DimensionRequest, DomainError, LayoutOptions, validate
from configurator.domain.services import (
    derive_row_heights,
    offset_row_positions,
    resolve_positions,
    row_height_value,
    total_height,
    update_row_height,
)
from configurator.domain.value_objects import ROW_SIZE_HEIGHTS, RowSize

S, M, L = RowSize.SMALL, RowSize.MEDIUM, RowSize.LARGE

ROW_SEQUENCES = [
    (S,),
    (S, M, L),
    (L, L, L, L),
    (M, 30.5, S),
    (12.0, 99.9),
    tuple(M for _ in range(12)),
]


class TestResolvePositions:
    """Tests for resolve_positions and total_height."""

    def test_named_sizes(self) -> None:
        assert resolve_positions([S, M, L]) == (0.0, 25.0, 60.0, 105.0)
        assert total_height([S, M, L]) == 105.0

    @pytest.mark.parametrize("rows", ROW_SEQUENCES)
    def test_starts_at_zero_and_increases(self, rows: tuple) -> None:
        positions = resolve_positions(rows)
        assert positions[0] == 0
        assert len(positions) == len(rows) + 1
        assert all(b > a for a, b in zip(positions, positions[1:]))

    @pytest.mark.parametrize("rows", ROW_SEQUENCES)
    def test_total_matches_last_position(self, rows: tuple) -> None:
        assert total_height(rows) == resolve_positions(rows)[-1]

    def test_empty_rows(self) -> None:
        assert resolve_positions([]) == (0.0,)
        assert total_height([]) == 0.0

    @pytest.mark.parametrize("value", [0.0, -5.0])
    def test_non_positive_override_rejected(self, value: float) -> None:
        with pytest.raises(DomainError):
            resolve_positions([M, value])

    def test_named_values_come_from_table(self) -> None:
        for size, height in ROW_SIZE_HEIGHTS.items():
            assert row_height_value(size) == height

    def test_plain_string_names(self) -> None:
        assert row_height_value("medium") == 35.0
        assert resolve_positions(["small", L]) == (0.0, 25.0, 70.0)

    def test_unknown_name_rejected(self) -> None:
        with pytest.raises(DomainError, match="Unknown row size"):
            row_height_value("huge")
        with pytest.raises(DomainError):
            total_height([M, "huge"])


class TestHeightCheckConsistency:
    """The validator's height check uses the same row mapping."""

    @pytest.mark.parametrize("rows", [(S, M, L), (L, L, L, L), (M, 30.0, S)])
    def test_total_height_accepted_by_validator(self, cabinet, rows: tuple) -> None:
        height = total_height(rows)
        outcome = validate(
            cabinet, DimensionRequest(100, height, 32), LayoutOptions(row_heights=rows)
        )
        assert outcome.is_valid, [str(v) for v in outcome.violations]

    def test_off_by_one_height_rejected(self, cabinet) -> None:
        rows = (S, M, L)
        outcome = validate(
            cabinet,
            DimensionRequest(100, total_height(rows) + 5, 32),
            LayoutOptions(row_heights=rows),
        )
        assert outcome.fields == ("row_heights",)


class TestDeriveRowHeights:
    """Tests for deriving rows from a height."""

    def test_exact_multiple_keeps_names(self) -> None:
        assert derive_row_heights(140.0) == (M, M, M, M)
        assert derive_row_heights(90.0, L) == (L, L)

    def test_inexact_height_uses_equal_overrides(self) -> None:
        rows = derive_row_heights(100.0)
        assert len(rows) == 3
        assert all(isinstance(r, float) for r in rows)
        assert total_height(rows) == pytest.approx(100.0)

    def test_small_height_gives_one_row(self) -> None:
        assert derive_row_heights(12.0) == (12.0,)

    def test_non_positive_height(self) -> None:
        with pytest.raises(DomainError):
            derive_row_heights(0.0)


class TestUpdateRowHeight:
    """Tests for replacing one row."""

    def test_replaces_one_row(self) -> None:
        rows = (S, M, L)
        assert update_row_height(rows, 1, 40.0) == (S, 40.0, L)
        assert rows == (S, M, L)

    def test_bad_index(self) -> None:
        with pytest.raises(IndexError):
            update_row_height((S, M), 2, L)

    def test_bad_value(self) -> None:
        with pytest.raises(DomainError):
            update_row_height((S, M), 0, -1.0)


class TestOffsetRowPositions:
    """Tests for staggered shelf positions."""

    def test_half_row_offset(self) -> None:
        assert offset_row_positions((0.0, 25.0, 60.0, 105.0), 0.5) == (
            0.0,
            42.5,
            82.5,
            105.0,
        )

    def test_zero_offset_is_identity(self) -> None:
        positions = (0.0, 35.0, 70.0)
        assert offset_row_positions(positions, 0.0) == positions

    @pytest.mark.parametrize("fraction", [-0.1, 1.0])
    def test_fraction_out_of_range(self, fraction: float) -> None:
        with pytest.raises(DomainError):
            offset_row_positions((0.0, 35.0, 70.0), fraction)
