"""Row-height resolution for cabinet rows.

Rows are stacked bottom-up. A row height is either a named size
(small/medium/large) or a continuous override in cm. The validator's
height check and the position resolver share ``row_height_value`` so the
two can never disagree.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import DomainError
from ..value_objects import ROW_SIZE_HEIGHTS, RowHeight, RowSize

__all__ = [
    "derive_row_heights",
    "offset_row_positions",
    "resolve_positions",
    "row_height_value",
    "total_height",
    "update_row_height",
]


def row_height_value(row_height: RowHeight) -> float:
    """Height in cm of one row.

    Raises:
        DomainError: If a name is not a row size or a continuous override
            is not positive.
    """
    if isinstance(row_height, str):
        try:
            return ROW_SIZE_HEIGHTS[RowSize(row_height)]
        except ValueError:
            raise DomainError(f"Unknown row size: {row_height!r}") from None
    value = float(row_height)
    if value <= 0:
        raise DomainError(f"Row height must be positive, got {value}")
    return value


def resolve_positions(row_heights: Sequence[RowHeight]) -> tuple[float, ...]:
    """Cumulative y positions of every row boundary.

    The result starts at 0, is strictly increasing and has one more entry
    than there are rows (the bottom and top of each row).

    Example:
        >>> resolve_positions([RowSize.SMALL, RowSize.MEDIUM, RowSize.LARGE])
        (0.0, 25.0, 60.0, 105.0)
    """
    positions = [0.0]
    for row_height in row_heights:
        positions.append(positions[-1] + row_height_value(row_height))
    return tuple(positions)


def total_height(row_heights: Sequence[RowHeight]) -> float:
    """Sum of the mapped row heights in cm."""
    return resolve_positions(row_heights)[-1]


def derive_row_heights(
    height: float, preferred: RowSize = RowSize.MEDIUM
) -> tuple[RowHeight, ...]:
    """Split a height into rows close to the preferred size.

    Used when the caller edits the height instead of the rows. The row count
    is ``round(height / preferred)`` (at least one). When the preferred size
    divides the height exactly the rows keep their name, otherwise every row
    becomes an equal continuous override.

    Raises:
        DomainError: If the height is not positive.
    """
    if height <= 0:
        raise DomainError(f"Height must be positive, got {height}")
    preferred_value = ROW_SIZE_HEIGHTS[preferred]
    count = max(1, int(round(height / preferred_value)))
    if abs(count * preferred_value - height) < 1e-9:
        return tuple(preferred for _ in range(count))
    return tuple(height / count for _ in range(count))


def update_row_height(
    row_heights: Sequence[RowHeight], index: int, value: RowHeight
) -> tuple[RowHeight, ...]:
    """Return a new row sequence with one row replaced.

    Raises:
        IndexError: If ``index`` does not name an existing row.
        DomainError: If ``value`` is not a valid row height.
    """
    if index < 0 or index >= len(row_heights):
        raise IndexError(f"Row index {index} out of range for {len(row_heights)} rows")
    row_height_value(value)
    updated = list(row_heights)
    updated[index] = value
    return tuple(updated)


def offset_row_positions(
    row_positions: Sequence[float], fraction: float
) -> tuple[float, ...]:
    """Raise every internal boundary by a fraction of the row above it.

    The outer boundaries stay put, so the result is still strictly
    increasing for any fraction in [0, 1).

    Raises:
        DomainError: If the fraction is outside [0, 1).
    """
    if not 0 <= fraction < 1:
        raise DomainError(f"Row offset fraction must be in [0, 1), got {fraction}")
    if len(row_positions) < 2:
        return tuple(row_positions)
    shifted = [row_positions[0]]
    for i in range(1, len(row_positions) - 1):
        row_above = row_positions[i + 1] - row_positions[i]
        shifted.append(row_positions[i] + fraction * row_above)
    shifted.append(row_positions[-1])
    return tuple(shifted)
