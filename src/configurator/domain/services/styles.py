"""Style layout strategies for divider placement.

Every style divides a horizontal span of width ``W`` into columns. A style
declares its gap bounds and a column weight pattern; the column count is
picked from the density, and the style may vary the dividers from row to
row. Every function here is pure and deterministic.

Positions are divider centrelines measured from the left edge of the
divided span, returned as ``Position3D`` with ``y`` and ``z`` at the span's
bottom-front (0). All current styles are column-oriented, so ``height`` never
changes the result.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from ..errors import DomainError
from ..value_objects import Density, GapSpacing, Position3D, StyleName

__all__ = [
    "StyleDefinition",
    "StyleRegistry",
    "choose_column_count",
    "column_widths",
    "compute_divider_positions",
    "default_styles",
    "dividers_for_row",
]

# Rounding applied to every emitted coordinate
PRECISION = 6

ColumnWeights = Callable[[int], tuple[float, ...]]
RowVariation = Callable[["StyleDefinition", tuple[float, ...], int, float], tuple[float, ...]]


def uniform_weights(columns: int) -> tuple[float, ...]:
    """Equal columns."""
    return tuple(1.0 for _ in range(columns))


def alternating_weights(columns: int) -> tuple[float, ...]:
    """Wide and narrow columns alternating 2:1, starting wide."""
    return tuple(2.0 if i % 2 == 0 else 1.0 for i in range(columns))


def gradient_weights(columns: int) -> tuple[float, ...]:
    """Columns growing linearly from 1 to 2 left to right."""
    if columns == 1:
        return (1.0,)
    return tuple(1.0 + i / (columns - 1) for i in range(columns))


def column_widths(width: float, weights: Sequence[float]) -> tuple[float, ...]:
    """Scale a weight pattern so the columns fill ``width``."""
    total = sum(weights)
    return tuple(width * w / total for w in weights)


def choose_column_count(
    width: float,
    spacing: GapSpacing,
    density: Density,
    weights: ColumnWeights = uniform_weights,
) -> int:
    """Pick the number of columns for a span.

    Candidates are the counts whose every column lies within the style's gap
    bounds. The chosen candidate is the one whose mean gap is closest to the
    density target, ties going to the larger count. Without a candidate, the
    largest count whose narrowest column still respects the minimum gap is
    used, and a span too narrow for two minimum columns stays undivided.
    """
    if width <= 0:
        raise DomainError(f"Span width must be positive, got {width}")
    upper = max(1, int(math.floor(width / spacing.min_gap + 1e-9)))
    target = spacing.target_for(density)

    candidates: list[int] = []
    fallback = 1
    for columns in range(1, upper + 1):
        widths = column_widths(width, weights(columns))
        if min(widths) >= spacing.min_gap - 1e-9:
            fallback = columns
            if max(widths) <= spacing.max_gap + 1e-9:
                candidates.append(columns)
    if not candidates:
        return fallback
    return min(candidates, key=lambda c: (abs(width / c - target), -c))


def _positions_from_widths(widths: Iterable[float]) -> tuple[float, ...]:
    edges: list[float] = []
    x = 0.0
    for w in list(widths)[:-1]:
        x += w
        edges.append(round(x, PRECISION))
    return tuple(edges)


@dataclass(frozen=True)
class StyleDefinition:
    """A named divider layout strategy.

    Attributes:
        name: Style name.
        spacing: Minimum, target and maximum gap in cm.
        weights: Column weight pattern for a given column count.
        row_variation: How a row's dividers differ from the base layout;
            None when every row repeats the base layout.
        shelf_offset_fraction: Fraction of a row's height by which the
            internal shelves of odd columns are raised. Styles with a
            non-zero fraction use full-height dividers.
    """

    name: StyleName
    spacing: GapSpacing
    weights: ColumnWeights = uniform_weights
    row_variation: RowVariation | None = None
    shelf_offset_fraction: float = 0.0

    @property
    def full_height_dividers(self) -> bool:
        return self.shelf_offset_fraction > 0

    def compute(self, width: float, height: float, density: Density) -> tuple[Position3D, ...]:
        """Divider positions for a span; see ``compute_divider_positions``."""
        if height <= 0:
            raise DomainError(f"Span height must be positive, got {height}")
        columns = choose_column_count(width, self.spacing, density, self.weights)
        widths = column_widths(width, self.weights(columns))
        return tuple(Position3D(x, 0.0, 0.0) for x in _positions_from_widths(widths))


def compute_divider_positions(
    style: StyleDefinition, width: float, height: float, density: Density
) -> tuple[Position3D, ...]:
    """Ordered divider positions for a span of the given size.

    Returns an empty tuple when the span is too narrow for a divider; never
    raises for a positive span.
    """
    return style.compute(width, height, density)


def dividers_for_row(
    style: StyleDefinition,
    base: Sequence[Position3D],
    row_index: int,
    width: float,
) -> tuple[Position3D, ...]:
    """Divider positions for one row, derived from the base layout."""
    if style.row_variation is None:
        return tuple(base)
    xs = style.row_variation(style, tuple(p.x for p in base), row_index, width)
    return tuple(Position3D(round(x, PRECISION), 0.0, 0.0) for x in xs)


def _mirror_odd_rows(
    style: StyleDefinition, xs: tuple[float, ...], row_index: int, width: float
) -> tuple[float, ...]:
    if row_index % 2 == 0:
        return xs
    return tuple(sorted(width - x for x in xs))


def _shift_per_row(
    style: StyleDefinition, xs: tuple[float, ...], row_index: int, width: float
) -> tuple[float, ...]:
    # Rows step right by half the slack, repeating every three rows. The slack
    # is how far the edge columns can grow or shrink and stay within bounds.
    if not xs:
        return xs
    gap = width / (len(xs) + 1)
    slack = max(0.0, min(gap - style.spacing.min_gap, style.spacing.max_gap - gap))
    shift = (row_index % 3) * slack / 2
    return tuple(x + shift for x in xs)


def _split_odd_rows(
    style: StyleDefinition, xs: tuple[float, ...], row_index: int, width: float
) -> tuple[float, ...]:
    if row_index % 2 == 0:
        return xs
    edges = (0.0, *xs, width)
    split: list[float] = []
    for left, right in zip(edges, edges[1:]):
        if (right - left) / 2 >= style.spacing.min_gap - 1e-9:
            split.append((left + right) / 2)
        if right < width:
            split.append(right)
    return tuple(split)


def _merge_odd_rows(
    style: StyleDefinition, xs: tuple[float, ...], row_index: int, width: float
) -> tuple[float, ...]:
    if row_index % 2 == 0:
        return xs
    kept: list[float] = []
    previous = 0.0
    for i, x in enumerate(xs):
        following = xs[i + 1] if i + 1 < len(xs) else width
        if i % 2 == 0 and following - previous <= style.spacing.max_gap + 1e-9:
            continue
        kept.append(x)
        previous = x
    return tuple(kept)


class StyleRegistry:
    """Immutable lookup of style definitions by name."""

    def __init__(self, styles: Iterable[StyleDefinition]) -> None:
        entries: dict[StyleName, StyleDefinition] = {}
        for style in styles:
            if style.name in entries:
                raise ValueError(f"Style '{style.name.value}' already registered")
            entries[style.name] = style
        self._styles: Mapping[StyleName, StyleDefinition] = MappingProxyType(entries)

    def get(self, name: StyleName | str) -> StyleDefinition:
        """Get a style by name.

        Raises:
            KeyError: If no style has the given name.
        """
        try:
            key = StyleName(name)
        except ValueError:
            raise KeyError(f"Unknown style: {name}") from None
        if key not in self._styles:
            raise KeyError(f"Unknown style: {key.value}")
        return self._styles[key]

    def names(self) -> list[str]:
        """List all registered style names, sorted."""
        return sorted(name.value for name in self._styles)

    def __contains__(self, name: object) -> bool:
        return name in self._styles

    def __iter__(self) -> Iterator[StyleDefinition]:
        return iter(self._styles.values())


def default_styles() -> StyleRegistry:
    """Build the registry of styles offered by the configurator."""
    grid_spacing = GapSpacing(min_gap=20.0, target_gap=35.0, max_gap=50.0)
    wide_spacing = GapSpacing(min_gap=30.0, target_gap=50.0, max_gap=70.0)
    patterned_spacing = GapSpacing(min_gap=20.0, target_gap=35.0, max_gap=60.0)
    return StyleRegistry(
        [
            StyleDefinition(StyleName.GRID, grid_spacing),
            StyleDefinition(StyleName.MINIMAL, wide_spacing),
            StyleDefinition(
                StyleName.ASYMMETRIC,
                patterned_spacing,
                weights=alternating_weights,
                row_variation=_mirror_odd_rows,
            ),
            StyleDefinition(
                StyleName.STAGGERED, grid_spacing, shelf_offset_fraction=0.5
            ),
            StyleDefinition(StyleName.SLANT, grid_spacing, row_variation=_shift_per_row),
            StyleDefinition(StyleName.MOSAIC, grid_spacing, row_variation=_split_odd_rows),
            StyleDefinition(StyleName.PATTERN, wide_spacing, row_variation=_merge_odd_rows),
            StyleDefinition(
                StyleName.GRADIENT, patterned_spacing, weights=gradient_weights
            ),
        ]
    )
