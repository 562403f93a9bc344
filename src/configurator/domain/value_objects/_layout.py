"""Layout selections: styles, densities, row sizes and structural options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProductKind(str, Enum):
    """Product type names understood by the registry."""

    CABINET = "cabinet"
    BOOKCASE = "bookcase"
    TABLE = "table"
    DESK = "desk"
    CONSOLE = "console"


class StyleName(str, Enum):
    """Visual styles that drive divider placement."""

    GRID = "grid"
    ASYMMETRIC = "asymmetric"
    STAGGERED = "staggered"
    MINIMAL = "minimal"
    MOSAIC = "mosaic"
    PATTERN = "pattern"
    SLANT = "slant"
    GRADIENT = "gradient"


class Density(str, Enum):
    """Qualitative divider density.

    Low density means wider gaps and fewer dividers, high density means
    narrower gaps and more dividers.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def gap_factor(self) -> float:
        """Multiplier applied to a style's target gap."""
        return _DENSITY_GAP_FACTORS[self]

    @classmethod
    def from_percentage(cls, percentage: float) -> Density:
        """Map a 0-100 divider density slider value to a level.

        Raises:
            ValueError: If the percentage is outside 0-100.
        """
        if percentage < 0 or percentage > 100:
            raise ValueError("Density percentage must be between 0 and 100")
        if percentage < 100 / 3:
            return cls.LOW
        if percentage < 200 / 3:
            return cls.MEDIUM
        return cls.HIGH


_DENSITY_GAP_FACTORS: dict[Density, float] = {
    Density.LOW: 1.25,
    Density.MEDIUM: 1.0,
    Density.HIGH: 0.75,
}


class RowSize(str, Enum):
    """Named cabinet row heights."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


# Row height in cm for each named size. Both the row-height resolver and the
# validator's height check read this table.
ROW_SIZE_HEIGHTS: dict[RowSize, float] = {
    RowSize.SMALL: 25.0,
    RowSize.MEDIUM: 35.0,
    RowSize.LARGE: 45.0,
}

# A row is either a named size or a continuous override in cm.
RowHeight = RowSize | float


class LegStyle(str, Enum):
    """Leg styles for tables and consoles."""

    STRAIGHT = "straight"
    ANGLED = "angled"
    TAPERED = "tapered"
    HAIRPIN = "hairpin"
    PEDESTAL = "pedestal"


class LegPosition(str, Enum):
    """How far legs sit in from the edge of the top."""

    INSET = "inset"
    STANDARD = "standard"
    OUTSET = "outset"

    @property
    def inset(self) -> float:
        """Distance in cm from the top's edge to the leg centre."""
        return _LEG_INSETS[self]


_LEG_INSETS: dict[LegPosition, float] = {
    LegPosition.INSET: 10.0,
    LegPosition.STANDARD: 5.0,
    LegPosition.OUTSET: 2.5,
}


class TopShape(str, Enum):
    """Tabletop outline."""

    RECTANGULAR = "rectangular"
    ROUND = "round"
    OVAL = "oval"


class BaseType(str, Enum):
    """What a cabinet stands on."""

    NONE = "none"
    FEET = "feet"
    PLINTH = "plinth"


class CompartmentType(str, Enum):
    """Front treatment of a single compartment."""

    OPEN = "open"
    DOOR_LEFT = "door-left"
    DOOR_RIGHT = "door-right"
    DRAWER = "drawer"

    @property
    def is_door(self) -> bool:
        return self in (CompartmentType.DOOR_LEFT, CompartmentType.DOOR_RIGHT)


class ComponentType(str, Enum):
    """Type tag carried by every product component."""

    FRAME = "frame"
    BACK = "back"
    BASE = "base"
    DIVIDER = "divider"
    SHELF = "shelf"
    LEG = "leg"
    TABLETOP = "tabletop"
    BRACE = "brace"
    DOOR = "door"
    DRAWER = "drawer"
    ACCESSORY = "accessory"


class IncrementPolicy(str, Enum):
    """What the validator does with a dimension that misses its increment."""

    REJECT = "reject"
    ROUND = "round"


@dataclass(frozen=True)
class GapSpacing:
    """Allowed and preferred centre-to-centre gap between dividers, in cm."""

    min_gap: float
    target_gap: float
    max_gap: float

    def __post_init__(self) -> None:
        if self.min_gap <= 0:
            raise ValueError("min_gap must be positive")
        if not self.min_gap <= self.target_gap <= self.max_gap:
            raise ValueError("Gap spacing must satisfy min <= target <= max")
        if self.max_gap < 2 * self.min_gap:
            raise ValueError("max_gap must be at least twice min_gap")

    def target_for(self, density: Density) -> float:
        """Target gap for a density level, clamped to [min_gap, max_gap]."""
        target = self.target_gap * density.gap_factor
        return min(max(target, self.min_gap), self.max_gap)

    def allows(self, gap: float, tolerance: float = 1e-9) -> bool:
        """Check whether a gap lies within the declared bounds."""
        return self.min_gap - tolerance <= gap <= self.max_gap + tolerance
